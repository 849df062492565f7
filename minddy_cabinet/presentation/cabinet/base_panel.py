"""Shared behaviour of cabinet panels."""

import logging
import time
from typing import Callable, Optional

from ...application.interfaces import ICabinetAPI, INotificationService
from ...domain.entities import FullProfile
from ...domain.exceptions import CabinetException

logger = logging.getLogger(__name__)

ProfileCallback = Callable[[FullProfile], None]

SAVED_INDICATOR_SECONDS = 2.0


class BasePanel:
    """Controlled editor over one slice of the profile aggregate.
    
    The panel never mutates the aggregate it was given. After a successful
    call it builds a new aggregate and passes it to ``on_update``; the shell
    is the only owner.
    """
    
    def __init__(
        self,
        api: ICabinetAPI,
        profile: FullProfile,
        on_update: Optional[ProfileCallback],
        notifier: INotificationService
    ):
        self.api = api
        self.profile = profile
        self.on_update = on_update
        self.notifier = notifier
        self._saved_at: Optional[float] = None
    
    @property
    def is_saved(self) -> bool:
        """Whether the "saved" badge is still showing."""
        if self._saved_at is None:
            return False
        return time.monotonic() - self._saved_at < SAVED_INDICATOR_SECONDS
    
    def _mark_saved(self) -> None:
        self._saved_at = time.monotonic()
    
    def _merge(self, profile: FullProfile) -> None:
        self.profile = profile
        if self.on_update:
            self.on_update(profile)
    
    def _report_failure(self, action: str, error: CabinetException, alert_text: str) -> None:
        logger.error(f"Failed to {action}: {error.message}")
        self.notifier.alert(alert_text)
