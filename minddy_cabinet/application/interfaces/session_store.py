"""Session store interface."""

from abc import ABC, abstractmethod
from typing import Optional

from ...domain.value_objects import Session


class ISessionStore(ABC):
    """Persistent storage for the backend session across restarts."""
    
    @abstractmethod
    def load(self) -> Optional[Session]:
        """Stored session, or None unless both token and identity are present."""
        pass
    
    @abstractmethod
    def save(self, session: Session) -> None:
        """Persist session token and identity."""
        pass
    
    @abstractmethod
    def clear(self) -> None:
        """Remove any stored session."""
        pass
