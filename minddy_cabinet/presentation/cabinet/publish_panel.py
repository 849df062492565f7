"""Publishing the AI twin and sharing its link."""

import logging
from dataclasses import dataclass
from typing import List, Optional

from ...application.interfaces import ICabinetAPI, INotificationService
from ...domain.entities import FullProfile
from ...domain.exceptions import CabinetException
from .base_panel import BasePanel, ProfileCallback

logger = logging.getLogger(__name__)

PUBLISH_REQUIREMENTS_ALERT = "Заполните приветствие и системный промпт перед публикацией"
PUBLISH_ERROR = "Ошибка публикации"
UNPUBLISH_ERROR = "Ошибка отмены публикации"
UNPUBLISH_CONFIRMATION = "Вы уверены? Клиенты больше не смогут использовать эту ссылку."


@dataclass(frozen=True)
class CheckItem:
    """Line of the publishing requirements checklist."""
    label: str
    checked: bool
    optional: bool = False


class PublishPanel(BasePanel):
    """Publish/unpublish actions with a requirements checklist."""
    
    def __init__(
        self,
        api: ICabinetAPI,
        profile: FullProfile,
        on_update: Optional[ProfileCallback],
        notifier: INotificationService,
        bot_username: str = "minddy_bot"
    ):
        super().__init__(api, profile, on_update, notifier)
        self.bot_username = bot_username
        self.is_loading = False
        self.share_url: Optional[str] = None
    
    @property
    def is_published(self) -> bool:
        return bool(self.profile.ai_twin and self.profile.ai_twin.is_published)
    
    @property
    def share_code(self) -> Optional[str]:
        return self.profile.ai_twin.share_code if self.profile.ai_twin else None
    
    @property
    def can_publish(self) -> bool:
        return bool(self.profile.ai_twin and self.profile.ai_twin.can_publish)
    
    @property
    def current_share_url(self) -> Optional[str]:
        if self.share_url:
            return self.share_url
        if self.share_code:
            return f"https://t.me/{self.bot_username}?start=psy_{self.share_code}"
        return None
    
    def checklist(self) -> List[CheckItem]:
        twin = self.profile.ai_twin
        details = self.profile.profile
        return [
            CheckItem("Приветствие заполнено", bool(twin and twin.greeting)),
            CheckItem("Системный промпт настроен", bool(twin and twin.system_prompt)),
            CheckItem("Добавлены первые вопросы", bool(self.profile.questions), optional=True),
            CheckItem("Заполнен профиль", bool(details and details.display_name), optional=True),
        ]
    
    async def publish(self) -> bool:
        if not self.can_publish:
            missing = self.profile.ai_twin.missing_for_publish() if self.profile.ai_twin else ["ai_twin"]
            logger.info(f"Publish blocked, missing: {missing}")
            self.notifier.alert(PUBLISH_REQUIREMENTS_ALERT)
            return False
        if self.is_loading:
            return False
        
        self.is_loading = True
        try:
            result = await self.api.publish()
            self.share_url = result.share_url
            updated = await self.api.get_profile()
        except CabinetException as e:
            self._report_failure("publish", e, PUBLISH_ERROR)
            return False
        finally:
            self.is_loading = False
        
        self._merge(updated)
        logger.info(f"AI twin published: {self.current_share_url}")
        return True
    
    async def unpublish(self) -> bool:
        if self.is_loading:
            return False
        if not self.notifier.confirm(UNPUBLISH_CONFIRMATION):
            return False
        
        self.is_loading = True
        try:
            await self.api.unpublish()
            self.share_url = None
            updated = await self.api.get_profile()
        except CabinetException as e:
            self._report_failure("unpublish", e, UNPUBLISH_ERROR)
            return False
        finally:
            self.is_loading = False
        
        self._merge(updated)
        logger.info("AI twin unpublished")
        return True
