import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from dotenv import load_dotenv

from .errors import NoCredentials

# Load environment variables
load_dotenv()

DEFAULT_BASE_URL = "https://shop.supervalu.ie"
DEFAULT_STORE_ID = "404"
SITE_KEY = "supervalu"
APP_NAME = "shop-automation"


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return float(value)


def default_data_dir() -> Path:
    """OS-appropriate application data directory for the tool"""
    override = os.getenv("SHOP_AUTOMATION_DATA_DIR")
    if override:
        return Path(override).expanduser()

    if sys.platform == "win32":
        base = Path(os.getenv("LOCALAPPDATA") or Path.home() / "AppData" / "Local")
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.getenv("XDG_DATA_HOME") or Path.home() / ".local" / "share")
    return base / APP_NAME


class ShopConfig:
    """
    Central configuration for shop automation.
    Handles environment variables, site URLs, paths and settle delays.
    Keyword arguments win over environment variables, which win over defaults.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        store_id: Optional[str] = None,
        data_dir: Optional[Path] = None,
        page_settle_delay: Optional[float] = None,
        consent_delay: Optional[float] = None,
        login_settle_delay: Optional[float] = None,
        post_add_delay: Optional[float] = None,
        inter_item_delay: Optional[float] = None,
        product_wait_timeout: Optional[float] = None,
        inspect_delay: Optional[float] = None,
        close_delay: Optional[float] = None,
    ):
        self.base_url = (base_url or os.getenv("SUPERVALU_BASE_URL", DEFAULT_BASE_URL)).rstrip("/")
        self.store_id = store_id or os.getenv("SUPERVALU_STORE_ID", DEFAULT_STORE_ID)
        self.site_key = SITE_KEY
        self.data_dir = Path(data_dir) if data_dir is not None else default_data_dir()

        def pick(value, env_name, default):
            return value if value is not None else _env_float(env_name, default)

        self.page_settle_delay = pick(page_settle_delay, "SHOP_PAGE_SETTLE_DELAY", 3.0)
        self.consent_delay = pick(consent_delay, "SHOP_CONSENT_DELAY", 2.0)
        self.login_settle_delay = pick(login_settle_delay, "SHOP_LOGIN_SETTLE_DELAY", 5.0)
        self.post_add_delay = pick(post_add_delay, "SHOP_POST_ADD_DELAY", 1.0)
        self.inter_item_delay = pick(inter_item_delay, "SHOP_INTER_ITEM_DELAY", 2.0)
        self.product_wait_timeout = pick(product_wait_timeout, "SHOP_PRODUCT_WAIT_TIMEOUT", 10.0)
        self.inspect_delay = pick(inspect_delay, "SHOP_INSPECT_DELAY", 15.0)
        self.close_delay = pick(close_delay, "SHOP_CLOSE_DELAY", 5.0)

    @property
    def login_url(self) -> str:
        return f"{self.base_url}/login"

    @property
    def cart_url(self) -> str:
        return f"{self.base_url}/cart"

    @property
    def cookie_file(self) -> Path:
        return self.data_dir / f"{self.site_key}_cookies.json"

    def search_url(self, query: str) -> str:
        return f"{self.base_url}/sm/delivery/rsid/{self.store_id}/results?q={quote(query, safe='')}"

    def absolute_url(self, href: str) -> str:
        """Prefix site-relative paths with the base origin"""
        if not href or href.startswith(("http://", "https://")):
            return href
        if not href.startswith("/"):
            href = "/" + href
        return self.base_url + href


@dataclass(frozen=True)
class Credentials:
    """Site login credentials, read only when a login actually happens"""
    email: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(email={self.email!r}, password='***')"

    @classmethod
    def from_env(cls) -> "Credentials":
        email = os.getenv("SUPERVALU_EMAIL")
        password = os.getenv("SUPERVALU_PASSWORD")
        if not email:
            raise NoCredentials("SUPERVALU_EMAIL not found in environment. Please set it in .env file")
        if not password:
            raise NoCredentials("SUPERVALU_PASSWORD not found in environment. Please set it in .env file")
        return cls(email=email, password=password)
