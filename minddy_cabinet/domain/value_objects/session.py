"""Backend session value object."""

from dataclasses import dataclass
from typing import Dict

from ..exceptions import ValidationError


@dataclass(frozen=True)
class Session:
    """Bearer token plus the identity it was issued for.
    
    Both values are opaque strings; the identity is the Telegram id the
    psychologist logged in with, sent back as ``X-Telegram-ID``.
    """
    
    token: str
    identity_id: str
    
    def __post_init__(self) -> None:
        if not self.token:
            raise ValidationError("token", repr(self.token), "must not be empty")
        if not self.identity_id:
            raise ValidationError("identity_id", repr(self.identity_id), "must not be empty")
    
    def headers(self) -> Dict[str, str]:
        """Authentication headers for backend requests."""
        return {
            "Authorization": f"Bearer {self.token}",
            "X-Telegram-ID": self.identity_id,
        }
    
    def __repr__(self) -> str:
        # keep tokens out of logs
        return f"Session(identity_id={self.identity_id!r}, token=<hidden>)"
