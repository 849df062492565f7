"""Cabinet shell: authentication gate and tab navigation."""

import logging
from enum import Enum
from typing import Dict, Optional, Union

from ...application.interfaces import INotificationService
from ...application.use_cases import AuthFlow
from ...domain.entities import FullProfile
from ...domain.exceptions import NotAuthenticatedError
from ...domain.value_objects import TelegramAuthData
from ..telegram import TelegramLoginChannel
from .ai_twin_editor import AITwinEditor
from .base_panel import BasePanel
from .chat_preview import ChatPreview
from .profile_editor import ProfileEditor
from .publish_panel import PublishPanel

logger = logging.getLogger(__name__)


class Tab(str, Enum):
    """Cabinet sections."""
    PROFILE = "profile"
    AI_TWIN = "ai-twin"
    PREVIEW = "preview"
    PUBLISH = "publish"


TAB_LABELS: Dict[Tab, str] = {
    Tab.PROFILE: "Профиль",
    Tab.AI_TWIN: "AI-двойник",
    Tab.PREVIEW: "Превью",
    Tab.PUBLISH: "Публикация",
}


class View(str, Enum):
    """What the cabinet currently renders."""
    LOADING = "loading"
    LOGIN = "login"
    CABINET = "cabinet"


class CabinetApp:
    """Single owner of the profile aggregate.
    
    Panels are built from the current aggregate when their tab is selected
    and report replacements through ``handle_profile_update``. Nothing but
    the login view is reachable until the flow is authenticated and the
    profile is loaded.
    """
    
    def __init__(
        self,
        auth_flow: AuthFlow,
        notifier: INotificationService,
        login_channel: Optional[TelegramLoginChannel] = None,
        bot_username: str = "minddy_bot"
    ):
        self.auth_flow = auth_flow
        self.notifier = notifier
        self.login_channel = login_channel or TelegramLoginChannel()
        self.bot_username = bot_username
        
        self.profile: Optional[FullProfile] = None
        self.active_tab = Tab.PROFILE
        self._panel: Optional[BasePanel] = None
        self._started = False
    
    @property
    def view(self) -> View:
        if not self._started or self.auth_flow.is_loading:
            return View.LOADING
        if self.auth_flow.is_authenticated and self.profile is not None:
            return View.CABINET
        return View.LOGIN
    
    @property
    def error(self) -> Optional[str]:
        """Login error shown above the widget."""
        return self.auth_flow.error
    
    @property
    def header_name(self) -> str:
        return self.profile.display_name if self.profile else "Психолог"
    
    async def start(self) -> View:
        """Restore a persisted session on load."""
        
        self._started = True
        self._set_profile(await self.auth_flow.restore())
        return self.view
    
    async def login(self, auth_data: TelegramAuthData) -> View:
        self._started = True
        self._set_profile(await self.auth_flow.login(auth_data))
        return self.view
    
    async def wait_for_login(self) -> View:
        """Show the login view until the widget delivers one assertion."""
        
        async with self.login_channel.subscribe() as receive:
            auth_data = await receive()
        return await self.login(auth_data)
    
    def logout(self) -> None:
        self.auth_flow.logout()
        self._set_profile(None)
    
    def handle_profile_update(self, profile: FullProfile) -> None:
        self.profile = profile
    
    def select_tab(self, tab: Union[Tab, str]) -> BasePanel:
        """Switch section; the new panel starts from the current aggregate."""
        
        tab = Tab(tab)
        self._require_cabinet(f"open {tab.value}")
        
        if tab != self.active_tab or self._panel is None:
            self.active_tab = tab
            self._panel = self._build_panel(tab)
        return self._panel
    
    @property
    def active_panel(self) -> BasePanel:
        return self.select_tab(self.active_tab)
    
    def _set_profile(self, profile: Optional[FullProfile]) -> None:
        self.profile = profile
        self._panel = None
    
    def _require_cabinet(self, action: str) -> None:
        if self.view != View.CABINET:
            raise NotAuthenticatedError(action)
    
    def _build_panel(self, tab: Tab) -> BasePanel:
        api = self.auth_flow.api
        
        if tab == Tab.PROFILE:
            return ProfileEditor(api, self.profile, self.handle_profile_update, self.notifier)
        if tab == Tab.AI_TWIN:
            return AITwinEditor(api, self.profile, self.handle_profile_update, self.notifier)
        if tab == Tab.PREVIEW:
            return ChatPreview(api, self.profile, self.notifier)
        return PublishPanel(
            api,
            self.profile,
            self.handle_profile_update,
            self.notifier,
            bot_username=self.bot_username
        )
