"""Shell profile management: add/remove the prompt block between sentinel markers."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from rgp_installer.errors import ProfileError

logger = logging.getLogger(__name__)

BEGIN_MARKER = "#rusty_git_prompt_begin"
END_MARKER = "#rusty_git_prompt_end"

DEFAULT_BINARY_NAME = "rusty_git_prompt"

# Debian's default colour prompt with the binary's output spliced in before
# the working directory's trailing newline. Backslashes are written verbatim.
_PS1_HEAD = r"${debian_chroot:+($debian_chroot)}\[\033[01;32m\]\u@\h\[\033[00m\]:\[\033[01;34m\]\w "
_PS1_TAIL = r"\[\033[00m\]\n\$"

BACKUP_SUFFIX = ".rgp-install-backup"


def build_block(binary_name: str = DEFAULT_BINARY_NAME) -> str:
    """Build the text appended to the profile.

    The leading newline terminates whatever line the profile ended on.
    """
    ps1 = _PS1_HEAD + "$(" + binary_name + ")" + _PS1_TAIL
    return (
        f"\n{BEGIN_MARKER}"
        "\nexport CLICOLOR_FORCE=1"
        f"\nPS1='{ps1} '"
        f"\n{END_MARKER}\n"
    )


def has_block(content: str) -> bool:
    return BEGIN_MARKER in content


def upsert_block(content: str, block: str) -> tuple[str, bool]:
    """Append ``block`` unless the begin marker is already present.

    Returns the new content and whether it changed.
    """
    if has_block(content):
        return content, False
    return content + block, True


def _is_marker(line: str, marker: str) -> bool:
    return line.strip() == marker


def strip_block(content: str) -> tuple[str, bool]:
    """Remove the marker-delimited block, undoing what ``upsert_block`` added.

    Returns the new content and whether it changed. A begin marker with no
    matching end marker raises ``ProfileError``.
    """
    lines = content.splitlines(keepends=True)

    start = next((i for i, line in enumerate(lines) if _is_marker(line, BEGIN_MARKER)), None)
    if start is None:
        return content, False

    end = next(
        (i for i in range(start + 1, len(lines)) if _is_marker(lines[i], END_MARKER)),
        None,
    )
    if end is None:
        raise ProfileError(f"Found {BEGIN_MARKER} without a matching {END_MARKER}")

    before = lines[:start]
    after = lines[end + 1:]

    if before and before[-1] in ("\n", "\r\n"):
        # blank line introduced by appending to a newline-terminated profile
        before.pop()
    elif before and not after:
        # the block's leading newline terminated the profile's last line
        before[-1] = before[-1].rstrip("\r\n")

    return "".join(before + after), True


def read_profile(profile: Path) -> str:
    """Read a profile, treating a missing file as empty."""
    if not profile.exists():
        return ""
    try:
        with open(profile, encoding="utf-8", errors="surrogateescape", newline="") as f:
            return f.read()
    except OSError as e:
        raise ProfileError(f"Could not read {profile}: {e}") from e


def _write_profile(profile: Path, content: str) -> None:
    try:
        with open(profile, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
            f.write(content)
    except OSError as e:
        raise ProfileError(f"Could not write {profile}: {e}") from e


def _backup(profile: Path) -> Path | None:
    """Create a one-time backup of the profile. Returns backup path or None if already backed up."""
    backup_path = profile.parent / f"{profile.name}{BACKUP_SUFFIX}"
    if not backup_path.exists() and profile.exists():
        try:
            shutil.copy2(profile, backup_path)
        except OSError as e:
            raise ProfileError(f"Could not back up {profile}: {e}") from e
        logger.info("Backed up %s to %s", profile, backup_path)
        return backup_path
    return None


def add_to_shell(profile: Path, block: str, dry_run: bool = False) -> bool:
    """Add the prompt block to the profile. Returns True if modified."""
    content = read_profile(profile)
    new_content, changed = upsert_block(content, block)
    if not changed:
        logger.debug("%s already contains %s", profile, BEGIN_MARKER)
        return False

    if dry_run:
        logger.info("Dry run: would append %d bytes to %s", len(block), profile)
        return True

    _backup(profile)
    _write_profile(profile, new_content)
    logger.info("Appended prompt block to %s", profile)
    return True


def remove_from_shell(profile: Path, dry_run: bool = False) -> bool:
    """Remove the prompt block from the profile. Returns True if modified."""
    content = read_profile(profile)
    new_content, changed = strip_block(content)
    if not changed:
        return False

    if dry_run:
        logger.info("Dry run: would remove prompt block from %s", profile)
        return True

    _backup(profile)
    _write_profile(profile, new_content)
    logger.info("Removed prompt block from %s", profile)
    return True
