"""
tests/test_probes.py

First-match-wins probe combination and consent dismissal.
"""
import asyncio

from shop_automation.core.errors import DriverError
from shop_automation.utils.popup_dismisser import dismiss_cookie_consent
from shop_automation.utils.probes import (
    CONSENT_BUTTON_PROBE,
    CONSENT_TEXT_PROBE,
    Probe,
    _selector_probe,
    first_match,
)

FIRST = Probe('first', '() => 1')
SECOND = Probe('second', '() => 2')
THIRD = Probe('third', '() => 3')


class TestFirstMatch:
    def test_none_means_no_opinion(self, session) -> None:
        session.defaults[SECOND.script] = False
        session.defaults[THIRD.script] = True

        match = asyncio.run(first_match(session, [FIRST, SECOND, THIRD]))

        assert match.probe == 'second'
        assert match.value is False
        assert session.scripts_run(THIRD.script) == []

    def test_no_probe_answers(self, session) -> None:
        assert asyncio.run(first_match(session, [FIRST, SECOND])) is None
        assert len(session.evaluations) == 2

    def test_argument_forwarded(self, session) -> None:
        asyncio.run(first_match(session, [FIRST], arg={'x': 1}))
        assert session.evaluations[0][2] == {'x': 1}

    def test_bound_selector_is_passed_as_argument(self, session) -> None:
        probe = _selector_probe("quoted", ['a[title="it\'s"]'], "true")
        session.defaults[(probe.script, probe.arg)] = True

        match = asyncio.run(first_match(session, [probe], arg={"ignored": True}))

        assert match.value is True
        assert session.evaluations[0][2] == 'a[title="it\'s"]'
        assert "title" not in probe.script


class TestConsent:
    def test_clicks_and_settles(self, session) -> None:
        session.defaults[CONSENT_TEXT_PROBE.script] = "accept all"
        assert asyncio.run(dismiss_cookie_consent(session, delay=2)) is True
        assert session.pauses == [2]

    def test_absent_banner(self, session) -> None:
        assert asyncio.run(dismiss_cookie_consent(session, delay=0)) is False

    def test_failing_script_is_not_an_error(self, session) -> None:
        session.defaults[CONSENT_BUTTON_PROBE.script] = DriverError("evaluate script")
        assert asyncio.run(dismiss_cookie_consent(session, delay=0)) is False
        assert session.pauses == [0]
