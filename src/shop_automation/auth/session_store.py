"""
Session Store
Persists the storefront's session cookies as JSON in the application data directory
"""
import json
import logging
import time
from pathlib import Path
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from ..models import SessionCookie, dedupe_cookies
from ..utils.files import write_text_atomic

logger = logging.getLogger(__name__)

_COOKIE_LIST = TypeAdapter(List[SessionCookie])


class SessionStore:
    """Owns the cookie file for one site; only the session manager uses it"""

    def __init__(self, cookie_file: Path):
        self.cookie_file = Path(cookie_file)

    def save(self, cookies: List[SessionCookie]) -> Path:
        """Overwrite the stored cookie set with the given one"""
        cookies = dedupe_cookies(cookies)
        payload = [c.model_dump() for c in cookies]
        write_text_atomic(self.cookie_file, json.dumps(payload, indent=2))
        logger.info(f"💾 Saved {len(cookies)} cookies to: {self.cookie_file}")
        return self.cookie_file

    def load(self, now: Optional[float] = None) -> Optional[List[SessionCookie]]:
        """
        Load saved cookies, dropping ones that already expired.

        Returns:
            Cookie list, or None if there is no usable saved session
        """
        if not self.cookie_file.exists():
            logger.info(f"No saved session at {self.cookie_file}")
            return None

        try:
            cookies = _COOKIE_LIST.validate_json(self.cookie_file.read_text(encoding='utf-8'))
        except (OSError, ValidationError) as e:
            logger.warning(f"⚠️ Ignoring unreadable session file {self.cookie_file}: {e}")
            return None

        now = time.time() if now is None else now
        live = [c for c in cookies if not c.is_expired(now)]
        if len(live) < len(cookies):
            logger.info(f"Dropped {len(cookies) - len(live)} expired cookies")
        if not live:
            logger.warning("Saved session has no live cookies")
            return None
        return live
