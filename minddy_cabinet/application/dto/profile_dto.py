"""Profile and AI twin update DTOs."""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional


def _non_empty(data: Dict[str, Any]) -> Dict[str, Any]:
    # empty strings are sent as "not set"
    return {k: v for k, v in data.items() if v}


@dataclass
class UpdateProfileDTO:
    """DTO for updating profile details."""
    
    display_name: Optional[str] = None
    bio: Optional[str] = None
    education: Optional[str] = None
    specializations: Optional[str] = None
    experience: Optional[str] = None
    
    def to_payload(self) -> Dict[str, Any]:
        return _non_empty(asdict(self))


@dataclass
class UpdateAITwinDTO:
    """DTO for updating the AI twin greeting and instruction."""
    
    greeting: Optional[str] = None
    system_prompt: Optional[str] = None
    
    def to_payload(self) -> Dict[str, Any]:
        return _non_empty(asdict(self))


class SuggestionField(str, Enum):
    """AI twin fields the backend can draft a suggestion for."""
    GREETING = "greeting"
    SYSTEM_PROMPT = "system_prompt"
    QUESTIONS = "questions"
