"""AI twin (persona) entities."""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class AITwin:
    """Scripted chat persona a psychologist configures for clients."""
    
    id: str
    psychologist_id: str
    greeting: str = ""
    system_prompt: str = ""
    is_published: bool = False
    share_code: Optional[str] = None
    
    @property
    def has_greeting(self) -> bool:
        return bool(self.greeting)
    
    @property
    def has_system_prompt(self) -> bool:
        return bool(self.system_prompt)
    
    @property
    def can_publish(self) -> bool:
        """Greeting and system prompt are both required to publish."""
        return self.has_greeting and self.has_system_prompt
    
    def missing_for_publish(self) -> List[str]:
        """Names of the required fields that are still empty."""
        missing = []
        if not self.has_greeting:
            missing.append("greeting")
        if not self.has_system_prompt:
            missing.append("system_prompt")
        return missing


@dataclass(frozen=True)
class InitialQuestion:
    """One of the ordered questions the twin asks at session start."""
    
    id: str
    ai_twin_id: str
    question: str
    order_index: int
