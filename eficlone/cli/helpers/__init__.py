"""CLI output helpers."""

from eficlone.cli.helpers.output import (
    print_invocation,
    print_mirror_report,
    print_run_result,
)
from eficlone.cli.helpers.theme import Icons, ThemedConsole, get_themed_console


__all__ = [
    "Icons",
    "ThemedConsole",
    "get_themed_console",
    "print_invocation",
    "print_mirror_report",
    "print_run_result",
]
