"""Session store implementations."""

from .file_session_store import FileSessionStore, TOKEN_KEY, TELEGRAM_ID_KEY
from .memory_session_store import MemorySessionStore

__all__ = [
    "FileSessionStore",
    "MemorySessionStore",
    "TOKEN_KEY",
    "TELEGRAM_ID_KEY",
]
