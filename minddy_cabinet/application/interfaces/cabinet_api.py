"""Cabinet backend API interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ...domain.entities import (
    AITwin, FullProfile, InitialQuestion, PreviewChat, PreviewMessage, PsychologistProfile
)
from ...domain.value_objects import Session, TelegramAuthData
from ..dto import (
    AuthResultDTO, PublishResultDTO, SuggestionField, UpdateAITwinDTO, UpdateProfileDTO
)


class ICabinetAPI(ABC):
    """Interface for the psychologist cabinet backend.
    
    Implementations are immutable with respect to the session: use
    ``with_session`` / ``without_session`` to obtain a client bound to
    another session context.
    """
    
    @property
    @abstractmethod
    def session(self) -> Optional[Session]:
        """Session the client authenticates with, if any."""
        pass
    
    @abstractmethod
    def with_session(self, session: Session) -> "ICabinetAPI":
        """Client sending the given session's credentials."""
        pass
    
    @abstractmethod
    def without_session(self) -> "ICabinetAPI":
        """Client sending no credentials."""
        pass
    
    @abstractmethod
    async def authenticate(self, auth_data: TelegramAuthData) -> AuthResultDTO:
        """Exchange a Telegram identity assertion for a session token."""
        pass
    
    @abstractmethod
    async def get_profile(self) -> FullProfile:
        """Fetch the full profile aggregate."""
        pass
    
    @abstractmethod
    async def update_profile(self, dto: UpdateProfileDTO) -> PsychologistProfile:
        """Update profile details."""
        pass
    
    @abstractmethod
    async def update_ai_twin(self, dto: UpdateAITwinDTO) -> AITwin:
        """Update AI twin greeting and system prompt."""
        pass
    
    @abstractmethod
    async def update_questions(self, questions: List[str]) -> List[InitialQuestion]:
        """Replace the ordered list of initial questions."""
        pass
    
    @abstractmethod
    async def publish(self) -> PublishResultDTO:
        """Publish the AI twin and obtain its share link."""
        pass
    
    @abstractmethod
    async def unpublish(self) -> None:
        """Withdraw the AI twin from clients."""
        pass
    
    @abstractmethod
    async def get_suggestion(
        self,
        field: SuggestionField,
        context: Optional[str] = None
    ) -> str:
        """Ask the backend to draft a value for an AI twin field."""
        pass
    
    @abstractmethod
    async def get_preview_chats(self) -> List[PreviewChat]:
        """List preview chats."""
        pass
    
    @abstractmethod
    async def create_preview_chat(self, title: Optional[str] = None) -> PreviewChat:
        """Create a preview chat."""
        pass
    
    @abstractmethod
    async def delete_preview_chat(self, chat_id: str) -> None:
        """Delete a preview chat."""
        pass
    
    @abstractmethod
    async def get_preview_messages(self, chat_id: str) -> List[PreviewMessage]:
        """List messages of a preview chat."""
        pass
    
    @abstractmethod
    async def send_preview_message(self, chat_id: str, message: str) -> str:
        """Send a message to the twin and return its reply text."""
        pass
