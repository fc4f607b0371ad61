"""User prompts and output helpers."""

from __future__ import annotations

import sys


def confirm(message: str, default_yes: bool = True) -> bool:
    """Simple y/n confirmation. Returns True/False. 'c' or 'cancel' returns False."""
    suffix = "[Y/n]" if default_yes else "[y/N]"
    raw = input(f"{message} {suffix} ").strip().lower()
    if raw in ("c", "cancel"):
        return False
    if raw == "":
        return default_yes
    return raw in ("y", "yes")


def print_table(headers: list[str], rows: list[list[str]]) -> None:
    """Print a two-or-more column table to stdout, padded to the widest cell."""
    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            col_widths[i] = max(col_widths[i], len(cell))

    print("  ".join(h.ljust(col_widths[i]) for i, h in enumerate(headers)))
    print("  ".join("-" * w for w in col_widths))
    for row in rows:
        print("  ".join(cell.ljust(col_widths[i]) for i, cell in enumerate(row)))


def error(message: str) -> None:
    """Print an error message to stderr."""
    print(f"Error: {message}", file=sys.stderr)


def info(message: str) -> None:
    """Print an info message."""
    print(message)
