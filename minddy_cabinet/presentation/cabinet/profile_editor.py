"""Profile details editor."""

import logging
from typing import Optional

from ...application.dto import UpdateProfileDTO
from ...application.interfaces import ICabinetAPI, INotificationService
from ...domain.entities import FullProfile
from ...domain.exceptions import CabinetException
from .base_panel import BasePanel, ProfileCallback

logger = logging.getLogger(__name__)

SAVE_ERROR = "Ошибка сохранения"


class ProfileEditor(BasePanel):
    """Edits display name, bio, education, specializations and experience."""
    
    def __init__(
        self,
        api: ICabinetAPI,
        profile: FullProfile,
        on_update: Optional[ProfileCallback],
        notifier: INotificationService
    ):
        super().__init__(api, profile, on_update, notifier)
        self.is_loading = False
        
        details = profile.profile
        self.display_name = (details.display_name if details else None) or ""
        self.bio = (details.bio if details else None) or ""
        self.education = (details.education if details else None) or ""
        self.specializations = (details.specializations if details else None) or ""
        self.experience = (details.experience if details else None) or ""
    
    def to_dto(self) -> UpdateProfileDTO:
        return UpdateProfileDTO(
            display_name=self.display_name,
            bio=self.bio,
            education=self.education,
            specializations=self.specializations,
            experience=self.experience
        )
    
    async def save(self) -> bool:
        """Send the profile slice and merge the server's copy."""
        
        if self.is_loading:
            return False
        
        self.is_loading = True
        try:
            updated = await self.api.update_profile(self.to_dto())
        except CabinetException as e:
            self._report_failure("save profile", e, SAVE_ERROR)
            return False
        finally:
            self.is_loading = False
        
        self._merge(self.profile.with_profile(updated))
        self._mark_saved()
        logger.info("Profile saved")
        return True
