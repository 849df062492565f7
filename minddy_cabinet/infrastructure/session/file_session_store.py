"""Session persistence in a local JSON file."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ...application.interfaces import ISessionStore
from ...domain.exceptions import ValidationError
from ...domain.value_objects import Session

logger = logging.getLogger(__name__)

TOKEN_KEY = "minddy_token"
TELEGRAM_ID_KEY = "minddy_telegram_id"


class FileSessionStore(ISessionStore):
    """Stores the session under fixed keys in a small JSON document.
    
    Mirrors browser local storage: the session values are strings, other keys
    are written back exactly as read, and a corrupt file counts as empty.
    """
    
    def __init__(self, path: Path):
        self.path = Path(path).expanduser()
    
    def load(self) -> Optional[Session]:
        items = self._read()
        token = items.get(TOKEN_KEY)
        telegram_id = items.get(TELEGRAM_ID_KEY)
        
        if not token or not telegram_id:
            return None
        
        try:
            return Session(token=str(token), identity_id=str(telegram_id))
        except ValidationError as e:
            logger.warning(f"Ignoring stored session: {e.message}")
            return None
    
    def save(self, session: Session) -> None:
        items = self._read()
        items[TOKEN_KEY] = session.token
        items[TELEGRAM_ID_KEY] = session.identity_id
        self._write(items)
    
    def clear(self) -> None:
        items = self._read()
        if TOKEN_KEY not in items and TELEGRAM_ID_KEY not in items:
            return
        
        items.pop(TOKEN_KEY, None)
        items.pop(TELEGRAM_ID_KEY, None)
        self._write(items)
    
    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Unreadable session file {self.path}: {e}")
            return {}
        
        if not isinstance(data, dict):
            return {}
        return data
    
    def _write(self, items: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(items, indent=2), encoding="utf-8")
        self.path.chmod(0o600)
