"""subprocess wrapper used for the build, copy and removal commands."""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from rgp_installer.errors import CommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int


def format_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(str(a)) for a in argv)


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    cwd: Path | None = None,
    dry_run: bool = False,
) -> CmdResult:
    """Run a command attached to the user's terminal.

    Output is not captured: cargo prints build progress and sudo may need
    to prompt for a password.
    """
    argv_list = [str(a) for a in argv]
    logger.info("CMD %s (cwd=%s)", format_argv(argv_list), cwd or ".")

    if dry_run:
        return CmdResult(argv=argv_list, returncode=0)

    try:
        p = subprocess.run(argv_list, cwd=cwd, capture_output=False)
    except FileNotFoundError as e:
        raise CommandError(f"Command not found: {argv_list[0]}") from e

    logger.debug("EXIT %d %s", p.returncode, format_argv(argv_list))

    if check and p.returncode != 0:
        raise CommandError(f"Command failed ({p.returncode}): {format_argv(argv_list)}")

    return CmdResult(argv=argv_list, returncode=p.returncode)
