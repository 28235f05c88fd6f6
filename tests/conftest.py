"""
Shared fixtures: a fake browser session that answers scripts per page URL.
No network, no real browser.
"""
import pytest

from shop_automation.core.config import ShopConfig
from shop_automation.core.errors import NavigationError

BASE_URL = "https://shop.example.test"


class FakeSession:
    """
    Stand-in for BrowserSession.

    pages maps url -> {script or (script, arg): response}; defaults applies
    on every page.
    A response may be a value, an exception instance to raise, or a
    callable (session, arg) -> value.
    """

    def __init__(self):
        self.pages = {}
        self.defaults = {}
        self.current_url = "about:blank"
        self.navigations = []
        self.evaluations = []
        self.cookies = []
        self.set_cookie_calls = []
        self.reloads = 0
        self.pauses = []
        self.waits = []
        self.failing_urls = set()

    def on(self, url, script, response):
        self.pages.setdefault(url, {})[script] = response

    def answer(self, url, probe, value):
        """Canned result for one probe; selector probes share a script and differ by argument"""
        self.on(url, (probe.script, probe.arg), value)

    def scripts_run(self, script):
        return [e for e in self.evaluations if e[1] == script]

    def probe_runs(self, probe):
        return [e for e in self.evaluations if e[1] == probe.script and e[2] == probe.arg]

    def _response(self, script, arg):
        keys = [script]
        if arg is None or isinstance(arg, str):
            keys.insert(0, (script, arg))
        for responses in (self.pages.get(self.current_url, {}), self.defaults):
            for key in keys:
                if key in responses:
                    return responses[key]
        return None

    async def navigate(self, url):
        self.navigations.append(url)
        if url in self.failing_urls:
            raise NavigationError(url, RuntimeError("net::ERR_CONNECTION_RESET"))
        self.current_url = url

    async def reload(self):
        self.reloads += 1

    async def evaluate(self, script, arg=None):
        self.evaluations.append((self.current_url, script, arg))
        response = self._response(script, arg)
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(self, arg)
        return response

    async def wait_for_selector(self, selector, timeout):
        self.waits.append((selector, timeout))
        return True

    async def get_cookies(self):
        return list(self.cookies)

    async def set_cookies(self, cookies):
        self.set_cookie_calls.append(list(cookies))
        self.cookies = list(cookies)

    async def pause(self, seconds):
        self.pauses.append(seconds)


@pytest.fixture()
def config(tmp_path) -> ShopConfig:
    return ShopConfig(
        base_url=BASE_URL,
        store_id="404",
        data_dir=tmp_path / "data",
        page_settle_delay=0,
        consent_delay=0,
        login_settle_delay=0,
        post_add_delay=0,
        inter_item_delay=0,
        product_wait_timeout=1,
        inspect_delay=0,
        close_delay=0,
    )


@pytest.fixture()
def session() -> FakeSession:
    return FakeSession()
