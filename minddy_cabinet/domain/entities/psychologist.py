"""Psychologist identity and profile entities."""

from dataclasses import dataclass
from typing import Optional

from ..value_objects import TelegramId


@dataclass(frozen=True)
class Psychologist:
    """Psychologist account, created by the backend on first Telegram login."""
    
    id: str
    telegram_id: TelegramId
    created_at: str
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    photo_url: Optional[str] = None
    
    @property
    def full_name(self) -> str:
        """First and last name joined, as shown on the profile card."""
        return " ".join(p for p in (self.first_name, self.last_name) if p)
    
    @property
    def initial(self) -> str:
        """Avatar placeholder letter when there is no photo."""
        return (self.first_name or "P")[0]


@dataclass(frozen=True)
class PsychologistProfile:
    """Public profile details shown to clients."""
    
    id: str
    psychologist_id: str
    display_name: Optional[str] = None
    bio: Optional[str] = None
    education: Optional[str] = None
    specializations: Optional[str] = None
    experience: Optional[str] = None
