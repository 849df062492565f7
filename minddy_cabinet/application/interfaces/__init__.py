"""Application interfaces module."""

from .cabinet_api import ICabinetAPI
from .session_store import ISessionStore
from .notification_service import INotificationService

__all__ = [
    "ICabinetAPI",
    "ISessionStore",
    "INotificationService",
]
