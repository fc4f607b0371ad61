"""CLI entry point: argparse setup and command dispatch."""

from __future__ import annotations

import argparse
import sys

from rgp_installer import __version__
from rgp_installer.config import InstallConfig
from rgp_installer.errors import InstallError
from rgp_installer.installer import do_install, do_uninstall, installation_status
from rgp_installer.logging_utils import configure_logging
from rgp_installer.utils import confirm, error, info, print_table


def cmd_install(args: argparse.Namespace) -> int:
    """Build the binary, install it, and configure the shell prompt."""
    config = InstallConfig.from_args(args)
    if do_install(config):
        info("\nOpen a new terminal for the prompt change to take effect.")
    return 0


def cmd_uninstall(args: argparse.Namespace) -> int:
    """Remove the installed binary and the prompt block."""
    config = InstallConfig.from_args(args)

    if not args.yes and not config.dry_run:
        info(f"This removes {config.installed_binary} and the prompt block in {config.profile}.")
        if not confirm("Proceed?", default_yes=False):
            info("Cancelled.")
            return 0

    do_uninstall(config)
    return 0


def cmd_status(args: argparse.Namespace) -> int:
    """Show what is built, installed and configured."""
    status = installation_status(InstallConfig.from_args(args))

    def yes_no(flag: bool) -> str:
        return "yes" if flag else "no"

    print_table(
        ["Item", "Present", "Path"],
        [
            ["release build", yes_no(status.artifact_built), str(status.artifact)],
            ["installed binary", yes_no(status.binary_installed), str(status.installed_binary)],
            ["prompt block", yes_no(status.profile_configured), str(status.profile)],
        ],
    )
    return 0


def _add_common_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument("--project-dir", help="Cargo project to build (default: current directory)")
    p.add_argument("--install-dir", help="Directory to install the binary into (default: /usr/local/bin)")
    p.add_argument("--profile", help="Shell startup file to configure (default: ~/.bashrc)")
    p.add_argument("--binary-name", help="Binary name (default: read from Cargo.toml)")
    p.add_argument("--no-sudo", action="store_true", help="Copy/remove the binary without sudo")
    p.add_argument("--dry-run", action="store_true", help="Show what would happen without changing anything")
    p.add_argument("-v", "--verbose", action="store_true", help="Log commands and file changes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rgp-install",
        description="Build rusty_git_prompt, install it and add it to the bash prompt",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # install
    p_install = subparsers.add_parser("install", help="Build, install and configure (default)")
    _add_common_arguments(p_install)
    p_install.add_argument("--skip-build", action="store_true", help="Install an existing release build")

    # uninstall
    p_uninstall = subparsers.add_parser("uninstall", help="Remove the binary and prompt configuration")
    _add_common_arguments(p_uninstall)
    p_uninstall.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")

    # status
    p_status = subparsers.add_parser("status", help="Show installation state")
    _add_common_arguments(p_status)

    return parser


COMMANDS = ("install", "uninstall", "status")

# common options that consume the following argument
_VALUE_OPTIONS = ("--project-dir", "--install-dir", "--profile", "--binary-name")


def normalize_argv(argv: list[str]) -> list[str]:
    """Move the subcommand to the front, defaulting to ``install``.

    Common options may come before the subcommand (``-v status``). An
    unknown positional is left for argparse to reject.
    """
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg in _VALUE_OPTIONS:
            i += 2
        elif arg.startswith("-"):
            i += 1
        elif arg in COMMANDS:
            return [arg, *argv[:i], *argv[i + 1:]]
        else:
            return argv

    if argv and argv[0] in ("-h", "--help", "--version"):
        return argv
    return ["install", *argv]


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    argv = normalize_argv(list(sys.argv[1:] if argv is None else argv))

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    dispatch = {
        "install": cmd_install,
        "uninstall": cmd_uninstall,
        "status": cmd_status,
    }

    handler = dispatch.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(1)

    try:
        sys.exit(handler(args))
    except InstallError as e:
        error(str(e))
        sys.exit(1)
