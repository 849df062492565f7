"""Psychologist cabinet shell and panels."""

from .app import CabinetApp, Tab, View, TAB_LABELS
from .base_panel import BasePanel
from .profile_editor import ProfileEditor
from .ai_twin_editor import AITwinEditor
from .chat_preview import ChatPreview
from .publish_panel import PublishPanel, CheckItem

__all__ = [
    "CabinetApp",
    "Tab",
    "View",
    "TAB_LABELS",
    "BasePanel",
    "ProfileEditor",
    "AITwinEditor",
    "ChatPreview",
    "PublishPanel",
    "CheckItem",
]
