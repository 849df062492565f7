"""Terminal notifier used by the command-line front end."""

import sys
from typing import TextIO

from ...application.interfaces import INotificationService


class ConsoleNotifier(INotificationService):
    """Alerts go to stderr; confirmations prompt on stdin unless pre-approved."""
    
    def __init__(self, assume_yes: bool = False, stream: TextIO = None):
        self.assume_yes = assume_yes
        self.stream = stream or sys.stderr
    
    def alert(self, message: str) -> None:
        print(f"❌ {message}", file=self.stream)
    
    def confirm(self, message: str) -> bool:
        if self.assume_yes:
            return True
        if not sys.stdin.isatty():
            print(f"{message} (pass --yes to confirm)", file=self.stream)
            return False
        answer = input(f"{message} [y/N] ")
        return answer.strip().lower() in ("y", "yes", "д", "да")
