"""Preview chats for testing the AI twin before publishing."""

import logging
from datetime import datetime
from typing import List, Optional, Set

from ...application.interfaces import ICabinetAPI, INotificationService
from ...domain.entities import FullProfile, PreviewChat, PreviewMessage
from ...domain.exceptions import CabinetException
from .base_panel import BasePanel

logger = logging.getLogger(__name__)

CREATE_ERROR = "Ошибка создания чата"
DELETE_ERROR = "Ошибка удаления чата"
SEND_ERROR = "Ошибка отправки сообщения"
DELETE_CONFIRMATION = "Удалить этот чат?"


class ChatPreview(BasePanel):
    """Manages the list of preview chats and the selected conversation.
    
    Sending is optimistic: the user's message is appended as pending right
    away, promoted to confirmed when the twin answers, and left pending if
    the call fails. Messages are only appended or promoted, never removed.
    """
    
    def __init__(
        self,
        api: ICabinetAPI,
        profile: FullProfile,
        notifier: INotificationService
    ):
        # read-only panel, nothing to propagate upwards
        super().__init__(api, profile, None, notifier)
        self.chats: List[PreviewChat] = []
        self.active_chat: Optional[PreviewChat] = None
        self.messages: List[PreviewMessage] = []
        self.input_value = ""
        self.is_loading = False
        self.is_sending = False
        self.is_creating = False
        self._deleting: Set[str] = set()
    
    @property
    def can_send(self) -> bool:
        return bool(self.input_value.strip()) and self.active_chat is not None and not self.is_sending
    
    async def load_chats(self) -> None:
        try:
            self.is_loading = True
            self.chats = await self.api.get_preview_chats()
        except CabinetException as e:
            logger.error(f"Failed to load chats: {e.message}")
        finally:
            self.is_loading = False
    
    async def select_chat(self, chat: PreviewChat) -> None:
        """Make ``chat`` active and load its messages."""
        
        if self.active_chat and self.active_chat.id == chat.id:
            return
        
        self.active_chat = chat
        self.messages = []
        await self.load_messages(chat.id)
    
    async def load_messages(self, chat_id: str) -> None:
        try:
            messages = await self.api.get_preview_messages(chat_id)
        except CabinetException as e:
            logger.error(f"Failed to load messages: {e.message}")
            return
        
        # selection may have moved on while loading
        if self.active_chat and self.active_chat.id == chat_id:
            self.messages = messages
    
    async def create_chat(self) -> Optional[PreviewChat]:
        if self.is_creating:
            return None
        
        title = f"Тест {datetime.now().strftime('%d.%m.%Y, %H:%M:%S')}"
        self.is_creating = True
        try:
            chat = await self.api.create_preview_chat(title)
        except CabinetException as e:
            self._report_failure("create chat", e, CREATE_ERROR)
            return None
        finally:
            self.is_creating = False
        
        self.chats = [chat] + self.chats
        self.active_chat = chat
        self.messages = []
        return chat
    
    async def delete_chat(self, chat_id: str) -> bool:
        if chat_id in self._deleting:
            return False
        if not self.notifier.confirm(DELETE_CONFIRMATION):
            return False
        
        self._deleting.add(chat_id)
        try:
            await self.api.delete_preview_chat(chat_id)
        except CabinetException as e:
            self._report_failure("delete chat", e, DELETE_ERROR)
            return False
        finally:
            self._deleting.discard(chat_id)
        
        self.chats = [c for c in self.chats if c.id != chat_id]
        if self.active_chat and self.active_chat.id == chat_id:
            self.active_chat = None
            self.messages = []
        return True
    
    async def send_message(self, text: Optional[str] = None) -> bool:
        """Send ``text`` (or the input box) to the active chat."""
        
        if text is not None:
            self.input_value = text
        if not self.can_send:
            return False
        
        chat = self.active_chat
        content = self.input_value.strip()
        self.input_value = ""
        self.is_sending = True
        
        pending = PreviewMessage.create_pending_user_message(chat.id, content)
        self.messages = self.messages + [pending]
        
        try:
            response = await self.api.send_preview_message(chat.id, content)
        except CabinetException as e:
            self._report_failure("send message", e, SEND_ERROR)
            return False
        finally:
            self.is_sending = False
        
        if not self.active_chat or self.active_chat.id != chat.id:
            logger.info(f"Reply for chat {chat.id} arrived after it was deselected")
            return True
        
        confirmed = [m.confirm() if m.id == pending.id else m for m in self.messages]
        self.messages = confirmed + [PreviewMessage.create_assistant_reply(chat.id, response)]
        return True
