"""Command-line front end."""

from .commands import main, build_parser, run_command
from .console_notifier import ConsoleNotifier

__all__ = [
    "main",
    "build_parser",
    "run_command",
    "ConsoleNotifier",
]
