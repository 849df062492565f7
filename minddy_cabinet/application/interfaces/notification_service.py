"""Notification service interface."""

from abc import ABC, abstractmethod


class INotificationService(ABC):
    """Blocking notifications shown to the psychologist."""
    
    @abstractmethod
    def alert(self, message: str) -> None:
        """Show a blocking error or info message."""
        pass
    
    @abstractmethod
    def confirm(self, message: str) -> bool:
        """Ask a yes/no question; True means proceed."""
        pass
