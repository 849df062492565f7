"""Dependency injection container."""

import logging
from typing import Any, Dict, Optional

from ..application.interfaces import INotificationService
from ..application.use_cases import AuthFlow
from ..infrastructure.external_services import CabinetAPIClient
from ..infrastructure.session import FileSessionStore
from ..presentation.cabinet import CabinetApp
from ..presentation.telegram import TelegramLoginChannel
from .settings import Settings

logger = logging.getLogger(__name__)


class Container:
    """Wires settings, HTTP client, session store and the cabinet shell."""
    
    def __init__(self, settings: Settings, notifier: Optional[INotificationService] = None):
        self.settings = settings
        self.notifier = notifier
        self._instances: Dict[str, Any] = {}
        self._initialized = False
    
    def initialize(self) -> None:
        """Create all dependencies."""
        if self._initialized:
            return
        
        if self.notifier is None:
            raise RuntimeError("Container needs a notifier before initialization")
        
        self._instances["api_client"] = CabinetAPIClient(self.settings.api_url)
        self._instances["session_store"] = FileSessionStore(self.settings.session_file)
        self._instances["login_channel"] = TelegramLoginChannel()
        self._instances["auth_flow"] = AuthFlow(
            api=self._instances["api_client"],
            session_store=self._instances["session_store"]
        )
        self._instances["app"] = CabinetApp(
            auth_flow=self._instances["auth_flow"],
            notifier=self.notifier,
            login_channel=self._instances["login_channel"],
            bot_username=self.settings.bot_username
        )
        
        self._initialized = True
        logger.info(f"Container initialized for backend {self.settings.api_url}")
    
    def get(self, service_name: str) -> Any:
        """Get service instance."""
        if not self._initialized:
            raise RuntimeError("Container not initialized")
        
        instance = self._instances.get(service_name)
        if instance is None:
            raise ValueError(f"Service '{service_name}' not found")
        
        return instance
    
    @property
    def app(self) -> CabinetApp:
        return self.get("app")
    
    async def close(self) -> None:
        """Close the HTTP connection pool."""
        client = self._instances.get("api_client")
        if client is not None:
            await client.close()
            logger.debug("HTTP client closed")
