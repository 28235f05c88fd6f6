"""
Browser Session - single-owner handle around one Playwright page
Every navigation, script evaluation and cookie operation goes through here
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, List

from playwright.async_api import (
    BrowserContext,
    Error as PlaywrightError,
    Page,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from .errors import DriverError, NavigationError
from ..models import SessionCookie

logger = logging.getLogger(__name__)

USER_AGENT = (
    'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
)
NAVIGATION_TIMEOUT_MS = 45000


class BrowserSession:
    """
    Explicit page handle threaded through every operation.
    Wraps Playwright failures into DriverError so callers see one error type.
    """

    def __init__(self, page: Page, context: BrowserContext, headless: bool = True):
        self.page = page
        self.context = context
        self.headless = headless

    async def navigate(self, url: str):
        logger.debug(f"Navigating to: {url}")
        try:
            await self.page.goto(url, timeout=NAVIGATION_TIMEOUT_MS, wait_until='domcontentloaded')
        except PlaywrightError as e:
            raise NavigationError(url, e) from e

    async def reload(self):
        try:
            await self.page.reload(timeout=NAVIGATION_TIMEOUT_MS, wait_until='domcontentloaded')
        except PlaywrightError as e:
            raise DriverError("reload page", self.page.url, e) from e

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        try:
            if arg is None:
                return await self.page.evaluate(script)
            return await self.page.evaluate(script, arg)
        except PlaywrightError as e:
            raise DriverError("evaluate script", self.page.url, e) from e

    async def wait_for_selector(self, selector: str, timeout: float) -> bool:
        """Bounded wait for a DOM marker; False on timeout instead of raising"""
        try:
            await self.page.wait_for_selector(selector, timeout=timeout * 1000)
            return True
        except PlaywrightTimeoutError:
            logger.warning(f"⏳ Timed out after {timeout:.0f}s waiting for {selector}")
            return False
        except PlaywrightError as e:
            raise DriverError(f"wait for {selector}", self.page.url, e) from e

    async def get_cookies(self) -> List[SessionCookie]:
        try:
            cookies = await self.context.cookies()
        except PlaywrightError as e:
            raise DriverError("read cookies", self.page.url, e) from e
        return [SessionCookie.from_browser(c) for c in cookies]

    async def set_cookies(self, cookies: List[SessionCookie]):
        try:
            await self.context.add_cookies([c.to_browser() for c in cookies])
        except PlaywrightError as e:
            raise DriverError("set cookies", self.page.url, e) from e

    async def pause(self, seconds: float):
        """Settle delay; the only wait model used between page actions"""
        if seconds > 0:
            await asyncio.sleep(seconds)


@asynccontextmanager
async def launch_browser(headless: bool = True):
    """
    Launch Chromium with one context and one page, always closing it afterwards.

    Yields:
        BrowserSession bound to the single page
    """
    async with async_playwright() as p:
        try:
            browser = await p.chromium.launch(
                headless=headless,
                args=['--disable-blink-features=AutomationControlled', '--no-sandbox'],
            )
        except PlaywrightError as e:
            raise DriverError(
                "launch Chromium. Please run 'playwright install chromium'", None, e
            ) from e

        try:
            context = await browser.new_context(
                user_agent=USER_AGENT,
                viewport={'width': 1920, 'height': 1080},
            )
            page = await context.new_page()
            logger.info(f"🌐 Browser launched ({'headless' if headless else 'visible'})")
            yield BrowserSession(page, context, headless=headless)
        finally:
            await browser.close()
            logger.debug("Browser closed")
