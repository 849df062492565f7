"""Telegram login widget bridge."""

from .login_channel import TelegramLoginChannel

__all__ = ["TelegramLoginChannel"]
