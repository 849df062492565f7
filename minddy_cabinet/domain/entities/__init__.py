"""Domain entities module."""

from .psychologist import Psychologist, PsychologistProfile
from .ai_twin import AITwin, InitialQuestion
from .full_profile import FullProfile
from .preview import PreviewChat, PreviewMessage, MessageRole, MessageStatus

__all__ = [
    "Psychologist",
    "PsychologistProfile",
    "AITwin",
    "InitialQuestion",
    "FullProfile",
    "PreviewChat",
    "PreviewMessage",
    "MessageRole",
    "MessageStatus",
]
