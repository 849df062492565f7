"""Authentication DTOs for application layer."""

from dataclasses import dataclass

from ...domain.entities import Psychologist


@dataclass
class AuthResultDTO:
    """Backend answer to a Telegram identity assertion."""
    
    token: str
    psychologist: Psychologist
    is_new: bool = False
