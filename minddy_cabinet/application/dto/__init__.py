"""Application DTOs module."""

from .auth_dto import AuthResultDTO
from .profile_dto import UpdateProfileDTO, UpdateAITwinDTO, SuggestionField
from .publish_dto import PublishResultDTO

__all__ = [
    "AuthResultDTO",
    "UpdateProfileDTO",
    "UpdateAITwinDTO",
    "SuggestionField",
    "PublishResultDTO",
]
