"""Preview chat entities used to test the AI twin."""

import time
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum


class MessageRole(Enum):
    """Preview message author."""
    USER = "user"
    ASSISTANT = "assistant"


class MessageStatus(Enum):
    """Delivery state of a message shown in the preview."""
    PENDING = "pending"        # appended locally, server has not answered
    CONFIRMED = "confirmed"    # loaded from or acknowledged by the server


@dataclass(frozen=True)
class PreviewChat:
    """Ephemeral test conversation with the psychologist's own twin."""
    
    id: str
    psychologist_id: str
    ai_twin_id: str
    title: str
    created_at: str
    updated_at: str


@dataclass(frozen=True)
class PreviewMessage:
    """Message in a preview chat."""
    
    id: str
    chat_id: str
    role: MessageRole
    content: str
    created_at: str
    status: MessageStatus = MessageStatus.CONFIRMED
    
    @property
    def is_pending(self) -> bool:
        return self.status == MessageStatus.PENDING
    
    @property
    def is_user_message(self) -> bool:
        return self.role == MessageRole.USER
    
    def confirm(self) -> "PreviewMessage":
        """Promote a pending message; content and id are kept."""
        return replace(self, status=MessageStatus.CONFIRMED)
    
    @classmethod
    def create_pending_user_message(cls, chat_id: str, content: str) -> "PreviewMessage":
        """Optimistic user message with a temporary local id."""
        return cls(
            id=f"temp-{int(time.time() * 1000)}",
            chat_id=chat_id,
            role=MessageRole.USER,
            content=content,
            created_at=_now_iso(),
            status=MessageStatus.PENDING,
        )
    
    @classmethod
    def create_assistant_reply(cls, chat_id: str, content: str) -> "PreviewMessage":
        """Assistant message built from the server's reply text."""
        return cls(
            id=f"temp-{int(time.time() * 1000)}-assistant",
            chat_id=chat_id,
            role=MessageRole.ASSISTANT,
            content=content,
            created_at=_now_iso(),
            status=MessageStatus.CONFIRMED,
        )


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
