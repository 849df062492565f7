"""AI twin persona editor: greeting, system prompt and first questions."""

import logging
from typing import List, Optional, Set

from ...application.dto import SuggestionField, UpdateAITwinDTO
from ...application.interfaces import ICabinetAPI, INotificationService
from ...domain.entities import FullProfile
from ...domain.exceptions import CabinetException
from .base_panel import BasePanel, ProfileCallback

logger = logging.getLogger(__name__)

SAVE_ERROR = "Ошибка сохранения"
SUGGESTION_ERROR = "Ошибка получения подсказки"


class AITwinEditor(BasePanel):
    """Editor for the AI twin slice and the ordered question list.
    
    The question draft always holds at least one entry so there is a row to
    type into; blank rows are dropped on save.
    """
    
    def __init__(
        self,
        api: ICabinetAPI,
        profile: FullProfile,
        on_update: Optional[ProfileCallback],
        notifier: INotificationService
    ):
        super().__init__(api, profile, on_update, notifier)
        self.is_loading = False
        self._suggesting: Set[SuggestionField] = set()
        
        twin = profile.ai_twin
        self.greeting = twin.greeting if twin else ""
        self.system_prompt = twin.system_prompt if twin else ""
        self.questions: List[str] = profile.question_texts or [""]
    
    # Question list editing
    
    def add_question(self) -> None:
        self.questions = self.questions + [""]
    
    def remove_question(self, index: int) -> None:
        questions = [q for i, q in enumerate(self.questions) if i != index]
        self.questions = questions or [""]
    
    def update_question(self, index: int, value: str) -> None:
        questions = list(self.questions)
        questions[index] = value
        self.questions = questions
    
    @property
    def filtered_questions(self) -> List[str]:
        return [q for q in self.questions if q.strip()]
    
    @property
    def has_twin_changes(self) -> bool:
        twin = self.profile.ai_twin
        saved_greeting = twin.greeting if twin else ""
        saved_prompt = twin.system_prompt if twin else ""
        return self.greeting != saved_greeting or self.system_prompt != saved_prompt
    
    @property
    def has_question_changes(self) -> bool:
        return self.filtered_questions != self.profile.question_texts
    
    def is_suggesting(self, field: SuggestionField) -> bool:
        return SuggestionField(field) in self._suggesting
    
    async def save(self) -> bool:
        """Send the changed slices; the aggregate is replaced only if all succeed."""
        
        if self.is_loading:
            return False
        
        save_twin = self.has_twin_changes
        save_questions = self.has_question_changes
        
        if not save_twin and not save_questions:
            self._mark_saved()
            return True
        
        self.is_loading = True
        try:
            profile = self.profile
            
            if save_twin:
                updated_twin = await self.api.update_ai_twin(UpdateAITwinDTO(
                    greeting=self.greeting,
                    system_prompt=self.system_prompt
                ))
                profile = profile.with_ai_twin(updated_twin)
            
            if save_questions:
                updated_questions = await self.api.update_questions(self.filtered_questions)
                profile = profile.with_questions(updated_questions)
                
        except CabinetException as e:
            self._report_failure("save AI twin", e, SAVE_ERROR)
            return False
        finally:
            self.is_loading = False
        
        self._merge(profile)
        self._mark_saved()
        logger.info(f"AI twin saved (twin={save_twin}, questions={save_questions})")
        return True
    
    async def suggest(self, field: SuggestionField) -> bool:
        """Replace the draft of ``field`` with a backend suggestion."""
        
        field = SuggestionField(field)
        if field in self._suggesting:
            return False
        
        self._suggesting.add(field)
        try:
            suggestion = await self.api.get_suggestion(field)
        except CabinetException as e:
            self._report_failure(f"get {field.value} suggestion", e, SUGGESTION_ERROR)
            return False
        finally:
            self._suggesting.discard(field)
        
        if field == SuggestionField.GREETING:
            self.greeting = suggestion
        elif field == SuggestionField.SYSTEM_PROMPT:
            self.system_prompt = suggestion
        else:
            questions = [q for q in suggestion.split("\n") if q.strip()]
            self.questions = questions or [""]
        
        return True
