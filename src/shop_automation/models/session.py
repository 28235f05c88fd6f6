from pydantic import BaseModel
from typing import Optional, Literal, Dict, Any, List
import time

SameSite = Literal["Strict", "Lax", "None"]


class SessionCookie(BaseModel):
    """Browser cookie captured from a logged-in session"""
    name: str
    value: str
    domain: str
    path: str = "/"
    expires: Optional[float] = None  # unix timestamp, None for session cookies
    secure: bool = False
    httpOnly: bool = False
    sameSite: Optional[SameSite] = None

    @property
    def identity(self) -> tuple:
        return (self.name, self.domain, self.path)

    def is_expired(self, now: Optional[float] = None) -> bool:
        if self.expires is None:
            return False
        return self.expires < (now if now is not None else time.time())

    @classmethod
    def from_browser(cls, cookie: Dict[str, Any]) -> "SessionCookie":
        """Build from a Playwright cookie dict (expires == -1 means session cookie)"""
        expires = cookie.get("expires")
        if expires is not None and expires < 0:
            expires = None
        same_site = cookie.get("sameSite")
        if same_site not in ("Strict", "Lax", "None"):
            same_site = None
        return cls(
            name=cookie["name"],
            value=cookie["value"],
            domain=cookie["domain"],
            path=cookie.get("path") or "/",
            expires=expires,
            secure=bool(cookie.get("secure", False)),
            httpOnly=bool(cookie.get("httpOnly", False)),
            sameSite=same_site,
        )

    def to_browser(self) -> Dict[str, Any]:
        """Payload accepted by Playwright's context.add_cookies()"""
        payload = {
            "name": self.name,
            "value": self.value,
            "domain": self.domain,
            "path": self.path,
            "secure": self.secure,
            "httpOnly": self.httpOnly,
        }
        if self.expires is not None:
            payload["expires"] = self.expires
        if self.sameSite is not None:
            payload["sameSite"] = self.sameSite
        return payload


def dedupe_cookies(cookies: List[SessionCookie]) -> List[SessionCookie]:
    """Keep the last cookie for each (name, domain, path)"""
    by_identity: Dict[tuple, SessionCookie] = {}
    for cookie in cookies:
        by_identity[cookie.identity] = cookie
    return list(by_identity.values())
