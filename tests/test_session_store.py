"""
tests/test_session_store.py

Cookie file persistence: overwrite, expiry filtering and unreadable files.
"""
import json

from shop_automation.auth import SessionStore
from shop_automation.models import SessionCookie


def _cookie(name, expires=None):
    return SessionCookie(name=name, value=f"v-{name}", domain=".supervalu.ie", expires=expires)


class TestSessionStore:
    def test_missing_file_means_no_session(self, tmp_path) -> None:
        assert SessionStore(tmp_path / "cookies.json").load() is None

    def test_save_writes_json_list(self, tmp_path) -> None:
        path = tmp_path / "nested" / "cookies.json"
        SessionStore(path).save([_cookie("sid"), _cookie("pref", expires=5000.0)])

        data = json.loads(path.read_text(encoding="utf-8"))
        assert [c["name"] for c in data] == ["sid", "pref"]
        assert data[0]["httpOnly"] is False
        # no temp files left behind
        assert [p.name for p in path.parent.iterdir()] == ["cookies.json"]

    def test_save_replaces_previous_set(self, tmp_path) -> None:
        store = SessionStore(tmp_path / "cookies.json")
        store.save([_cookie("old")])
        store.save([_cookie("new")])
        assert [c.name for c in store.load(now=0)] == ["new"]

    def test_expired_cookies_are_dropped(self, tmp_path) -> None:
        store = SessionStore(tmp_path / "cookies.json")
        store.save([_cookie("stale", expires=100.0), _cookie("fresh", expires=10_000.0), _cookie("session")])
        names = [c.name for c in store.load(now=1_000.0)]
        assert names == ["fresh", "session"]

    def test_all_expired_means_no_session(self, tmp_path) -> None:
        store = SessionStore(tmp_path / "cookies.json")
        store.save([_cookie("stale", expires=100.0)])
        assert store.load(now=1_000.0) is None

    def test_corrupt_file_is_ignored(self, tmp_path) -> None:
        path = tmp_path / "cookies.json"
        path.write_text("{not json", encoding="utf-8")
        assert SessionStore(path).load() is None

