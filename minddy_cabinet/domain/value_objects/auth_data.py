"""Telegram login widget assertion."""

import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from ..exceptions import ValidationError
from .telegram_id import TelegramId


@dataclass(frozen=True)
class TelegramAuthData:
    """Identity assertion produced by the Telegram login widget.
    
    The cabinet never verifies ``hash`` itself; the payload is forwarded
    verbatim to the backend, which checks it against the bot token.
    """
    
    id: int
    first_name: str
    auth_date: int
    hash: str
    last_name: Optional[str] = None
    username: Optional[str] = None
    photo_url: Optional[str] = None
    
    @property
    def telegram_id(self) -> TelegramId:
        return TelegramId(self.id)
    
    def to_payload(self) -> Dict[str, Any]:
        """Widget payload without the fields Telegram did not send."""
        return {k: v for k, v in asdict(self).items() if v is not None}
    
    @classmethod
    def from_widget(cls, data: Dict[str, Any]) -> "TelegramAuthData":
        """Build from the raw widget callback object."""
        try:
            user_id = TelegramId.from_string(data["id"]).value
            return cls(
                id=user_id,
                first_name=str(data["first_name"]),
                auth_date=int(data["auth_date"]),
                hash=str(data["hash"]),
                last_name=data.get("last_name"),
                username=data.get("username"),
                photo_url=data.get("photo_url"),
            )
        except KeyError as e:
            raise ValidationError("auth_data", str(e), "required field missing")
        except (TypeError, ValueError) as e:
            raise ValidationError("auth_data", repr(data.get("id")), str(e))
    
    @classmethod
    def dev_stub(cls) -> "TelegramAuthData":
        """Fake assertion used by the development login shortcut."""
        return cls(
            id=123456789,
            first_name="Test",
            last_name="User",
            username="testuser",
            auth_date=int(time.time()),
            hash="dev_hash",
        )
