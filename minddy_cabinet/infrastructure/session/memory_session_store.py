"""In-process session store."""

from typing import Optional

from ...application.interfaces import ISessionStore
from ...domain.value_objects import Session


class MemorySessionStore(ISessionStore):
    """Session store that forgets everything when the process exits."""
    
    def __init__(self, session: Optional[Session] = None):
        self._session = session
    
    def load(self) -> Optional[Session]:
        return self._session
    
    def save(self, session: Session) -> None:
        self._session = session
    
    def clear(self) -> None:
        self._session = None
