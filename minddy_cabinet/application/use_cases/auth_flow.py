"""Authentication flow: login, logout and session restore."""

import logging
from enum import Enum
from typing import Optional

from ...domain.entities import FullProfile
from ...domain.exceptions import CabinetException
from ...domain.value_objects import Session, TelegramAuthData
from ..interfaces import ICabinetAPI, ISessionStore

logger = logging.getLogger(__name__)

AUTH_ERROR_MESSAGE = "Ошибка авторизации"


class AuthState(str, Enum):
    """Authentication state of the cabinet."""
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class AuthFlow:
    """Exchanges Telegram assertions for backend sessions.
    
    The flow owns the current API client. Because clients are immutable with
    respect to their session, switching sessions replaces ``self.api`` rather
    than mutating it; callers must read ``flow.api`` after every transition.
    
    Failure policy:
    - a stored session that the backend rejects is discarded silently
    - a rejected login is exposed through ``error``
    """
    
    def __init__(self, api: ICabinetAPI, session_store: ISessionStore):
        self.api = api.without_session()
        self.session_store = session_store
        self.state = AuthState.UNAUTHENTICATED
        self.error: Optional[str] = None
    
    @property
    def is_authenticated(self) -> bool:
        return self.state == AuthState.AUTHENTICATED
    
    @property
    def is_loading(self) -> bool:
        return self.state == AuthState.AUTHENTICATING
    
    async def restore(self) -> Optional[FullProfile]:
        """Resume the persisted session, if any, and load the profile."""
        
        session = self.session_store.load()
        if session is None:
            self.state = AuthState.UNAUTHENTICATED
            return None
        
        logger.info(f"Restoring session for Telegram ID {session.identity_id}")
        self.api = self.api.with_session(session)
        return await self._load_profile()
    
    async def login(self, auth_data: TelegramAuthData) -> Optional[FullProfile]:
        """Log in with a widget assertion and load the profile."""
        
        self.state = AuthState.AUTHENTICATING
        self.error = None
        
        try:
            result = await self.api.authenticate(auth_data)
            session = Session(token=result.token, identity_id=str(auth_data.id))
        except CabinetException as e:
            logger.warning(f"Telegram authentication failed: {e.message}")
            self.error = e.message or AUTH_ERROR_MESSAGE
            self.state = AuthState.UNAUTHENTICATED
            return None
        
        self.session_store.save(session)
        self.api = self.api.with_session(session)
        
        if result.is_new:
            logger.info(f"New psychologist registered: {auth_data.id}")
        
        return await self._load_profile()
    
    def logout(self) -> None:
        """Forget the session locally."""
        
        self.session_store.clear()
        self.api = self.api.without_session()
        self.state = AuthState.UNAUTHENTICATED
        logger.info("Logged out")
    
    async def _load_profile(self) -> Optional[FullProfile]:
        """Fetch the aggregate; any failure drops the session without an error."""
        
        self.state = AuthState.AUTHENTICATING
        try:
            profile = await self.api.get_profile()
        except CabinetException as e:
            logger.error(f"Failed to load profile: {e.message}")
            self.session_store.clear()
            self.api = self.api.without_session()
            self.state = AuthState.UNAUTHENTICATED
            return None
        
        self.state = AuthState.AUTHENTICATED
        return profile
