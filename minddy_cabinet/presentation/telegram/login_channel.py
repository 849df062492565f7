"""Bridge between the Telegram login widget and the authentication flow."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, Optional, Union

from ...domain.exceptions import LoginChannelClosedError
from ...domain.value_objects import TelegramAuthData

logger = logging.getLogger(__name__)

Receiver = Callable[[], Awaitable[TelegramAuthData]]


class TelegramLoginChannel:
    """Single-purpose, one-shot channel for identity assertions.
    
    The channel is open only while a login view is subscribed. The widget
    emits at most one assertion per subscription; later emissions are
    dropped, and emitting with nobody subscribed is an error.
    """
    
    def __init__(self):
        self._queue: Optional[asyncio.Queue] = None
    
    @property
    def is_open(self) -> bool:
        return self._queue is not None
    
    def emit(self, auth_data: Union[TelegramAuthData, Dict[str, Any]]) -> None:
        """Called by the widget with the raw assertion object."""
        
        if self._queue is None:
            raise LoginChannelClosedError()
        
        if not isinstance(auth_data, TelegramAuthData):
            auth_data = TelegramAuthData.from_widget(auth_data)
        
        try:
            self._queue.put_nowait(auth_data)
        except asyncio.QueueFull:
            logger.warning(f"Dropping extra login assertion for {auth_data.id}")
    
    @asynccontextmanager
    async def subscribe(self) -> AsyncIterator[Receiver]:
        """Open the channel for the lifetime of the login view."""
        
        if self._queue is not None:
            raise RuntimeError("Login channel already has a subscriber")
        
        self._queue = asyncio.Queue(maxsize=1)
        try:
            yield self._receive
        finally:
            self._queue = None
    
    async def _receive(self) -> TelegramAuthData:
        if self._queue is None:
            raise LoginChannelClosedError()
        return await self._queue.get()
