"""
Session Manager
Restores a saved storefront session or logs in, then persists the cookie set
"""
import logging
from enum import Enum
from typing import Callable, Dict, Any, Optional

from ..core.config import Credentials, ShopConfig
from ..core.errors import LoginFailed
from ..utils.handoff import HandoffPoint, HumanHandoff
from ..utils.popup_dismisser import dismiss_cookie_consent
from ..utils.probes import LOGIN_PROBES, first_match
from .session_store import SessionStore

logger = logging.getLogger(__name__)


class SessionMode(str, Enum):
    RESTORE = "restore"
    FORCE_LOGIN = "force_login"


LOGIN_FILL_SCRIPT = """
    (args) => {
        const fill = (input, value) => {
            input.focus();
            input.value = value;
            input.dispatchEvent(new Event('input', { bubbles: true }));
            input.dispatchEvent(new Event('change', { bubbles: true }));
        };

        const emailInput = document.querySelector(
            'input[type="email"], input[name="email"], input[id*="email"], input[placeholder*="email"]'
        );
        const passwordInput = document.querySelector(
            'input[type="password"], input[name="password"], input[id*="password"]'
        );

        if (emailInput) fill(emailInput, args.email);
        if (passwordInput) fill(passwordInput, args.password);

        return { email: !!emailInput, password: !!passwordInput };
    }
"""

LOGIN_SUBMIT_SCRIPT = """
    () => {
        const loginButton = document.querySelector(
            'button[type="submit"], button[class*="login"], button[aria-label*="Sign in"], button[aria-label*="Log in"]'
        );
        if (loginButton) {
            loginButton.click();
            return true;
        }
        return false;
    }
"""


class SessionManager:
    """
    Establishes an authenticated session on the single browser page.

    Credentials are only requested when a login is actually performed,
    so a valid saved session never touches them.
    """

    def __init__(
        self,
        session,
        config: ShopConfig,
        store: Optional[SessionStore] = None,
        credentials_provider: Callable[[], Credentials] = Credentials.from_env,
        handoff: Optional[HumanHandoff] = None,
    ):
        self.session = session
        self.config = config
        self.store = store or SessionStore(config.cookie_file)
        self.credentials_provider = credentials_provider
        self.handoff = handoff or HumanHandoff()

    async def open_storefront(self):
        logger.info("🌐 Navigating to SuperValu...")
        await self.session.navigate(self.config.base_url)
        await self.session.pause(self.config.page_settle_delay)
        await dismiss_cookie_consent(self.session, self.config.consent_delay)

    async def is_logged_in(self) -> bool:
        """
        Login verification probe.
        A sign-in control means logged out; logout or account controls mean logged in.
        Inconclusive pages count as logged out.
        """
        match = await first_match(self.session, LOGIN_PROBES)
        if match is None:
            logger.debug("Login probe inconclusive, treating as logged out")
            return False
        return bool(match.value)

    async def establish_session(self, mode: SessionMode = SessionMode.RESTORE):
        """
        Restore or create an authenticated session and persist its cookies.

        Raises:
            NoCredentials: a login was needed but no credentials are configured
            LoginFailed: the login could not be verified
        """
        await self.open_storefront()

        if mode == SessionMode.FORCE_LOGIN:
            logger.info("🔐 Forcing fresh login...")
            await self.login()
        elif await self.restore():
            logger.info("✅ Successfully restored session")
        else:
            await self.login()

        await self.save()
        return self.session

    async def restore(self) -> bool:
        """Inject saved cookies, reload and verify. False means a login is needed."""
        cookies = self.store.load()
        if not cookies:
            logger.info("🔐 No valid cookies found, logging in...")
            return False

        logger.info("🍪 Using saved cookies...")
        await self.session.set_cookies(cookies)
        await self.session.reload()
        await self.session.pause(self.config.page_settle_delay)

        if await self.is_logged_in():
            return True

        logger.warning("⚠️  Saved cookies expired, logging in again...")
        return False

    async def login(self):
        """Credential login through the site's login form"""
        credentials = self.credentials_provider()

        logger.info("🔐 Logging in to SuperValu...")
        await self.session.navigate(self.config.login_url)
        await self.session.pause(self.config.page_settle_delay)

        filled: Dict[str, Any] = await self.session.evaluate(
            LOGIN_FILL_SCRIPT, {'email': credentials.email, 'password': credentials.password}
        ) or {}
        if not (filled.get('email') and filled.get('password')):
            raise LoginFailed(f"Login form not found at {self.config.login_url}")

        await self.session.pause(0.5)
        if not await self.session.evaluate(LOGIN_SUBMIT_SCRIPT):
            raise LoginFailed(f"Login button not found at {self.config.login_url}")

        await self.session.pause(self.config.login_settle_delay)

        if not await self.is_logged_in():
            raise LoginFailed("Login failed. Please check your credentials.")
        logger.info("✅ Successfully logged in")

    async def manual_login(self) -> bool:
        """
        Let a human log in inside the visible browser, then save whatever session results.

        Returns:
            True if the login probe confirms the session
        """
        await self.open_storefront()
        await self.handoff.wait(HandoffPoint.MANUAL_LOGIN)

        logged_in = await self.is_logged_in()
        if not logged_in:
            logger.warning("⚠️  You don't appear to be logged in. Saving cookies anyway...")
        await self.save()
        return logged_in

    async def save(self):
        cookies = await self.session.get_cookies()
        return self.store.save(cookies)
