"""Aggregate profile read model."""

from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from .ai_twin import AITwin, InitialQuestion
from .psychologist import Psychologist, PsychologistProfile


@dataclass(frozen=True)
class FullProfile:
    """Identity, profile details, AI twin and questions fetched as one unit.
    
    The aggregate is immutable. Panels produce a new aggregate by swapping
    their own slice with one of the ``with_*`` methods and hand it to the
    owner; sibling slices are carried over untouched.
    """
    
    psychologist: Optional[Psychologist] = None
    profile: Optional[PsychologistProfile] = None
    ai_twin: Optional[AITwin] = None
    questions: Optional[Tuple[InitialQuestion, ...]] = None
    
    def with_profile(self, profile: PsychologistProfile) -> "FullProfile":
        return replace(self, profile=profile)
    
    def with_ai_twin(self, ai_twin: AITwin) -> "FullProfile":
        return replace(self, ai_twin=ai_twin)
    
    def with_questions(self, questions: List[InitialQuestion]) -> "FullProfile":
        return replace(self, questions=tuple(questions))
    
    @property
    def question_texts(self) -> List[str]:
        """Question strings in display order."""
        if not self.questions:
            return []
        ordered = sorted(self.questions, key=lambda q: q.order_index)
        return [q.question for q in ordered]
    
    @property
    def display_name(self) -> str:
        """Name shown in the cabinet header."""
        if self.psychologist:
            if self.psychologist.first_name:
                return self.psychologist.first_name
            if self.psychologist.username:
                return self.psychologist.username
        return "Психолог"
