"""Domain value objects module."""

from .telegram_id import TelegramId
from .session import Session
from .auth_data import TelegramAuthData

__all__ = [
    "TelegramId",
    "Session",
    "TelegramAuthData",
]
