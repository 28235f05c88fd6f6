"""
tests/test_handoff.py

Human handoff prompts and acknowledgment.
"""
import asyncio
import io

import pytest

from shop_automation.core.errors import NoTerminal
from shop_automation.shopper import load_shopping_list
from shop_automation.utils import handoff
from shop_automation.utils.handoff import HANDOFF_MESSAGES, HandoffPoint, HumanHandoff, read_terminal_line


class InteractiveInput(io.StringIO):
    def isatty(self):
        return True


class TestHumanHandoff:
    def test_prints_prompt_then_waits_for_line(self) -> None:
        printed = []
        reads = []

        def reader():
            reads.append(True)
            return "\n"

        asyncio.run(HumanHandoff(reader=reader, output=printed.append).wait(HandoffPoint.CHECKOUT))

        assert printed == list(HANDOFF_MESSAGES[HandoffPoint.CHECKOUT])
        assert reads == [True]

    def test_every_point_has_a_prompt(self) -> None:
        for point in HandoffPoint:
            assert any("Enter" in line for line in HANDOFF_MESSAGES[point])


# ---------------------------------------------------------------------------
# Terminal acknowledgment
# ---------------------------------------------------------------------------


class TestReadTerminalLine:
    def test_reads_from_terminal_device(self, monkeypatch, tmp_path) -> None:
        tty = tmp_path / "tty"
        tty.write_text("\n", encoding="utf-8")
        monkeypatch.setattr(handoff, "_terminal_path", lambda: str(tty))
        monkeypatch.setattr("sys.stdin", io.StringIO("not this\n"))
        assert read_terminal_line() == "\n"

    def test_piped_list_stdin_is_never_the_acknowledgment(self, monkeypatch, tmp_path) -> None:
        piped = io.StringIO("items:\n  - name: Milk\n    link: /product/milk\n")
        load_shopping_list("-", stdin=piped)
        monkeypatch.setattr(handoff, "_terminal_path", lambda: str(tmp_path / "missing-tty"))
        monkeypatch.setattr("sys.stdin", piped)

        with pytest.raises(NoTerminal):
            asyncio.run(HumanHandoff(output=lambda line: None).wait(HandoffPoint.CHECKOUT))

    def test_interactive_stdin_is_the_fallback(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setattr(handoff, "_terminal_path", lambda: str(tmp_path / "missing-tty"))
        monkeypatch.setattr("sys.stdin", InteractiveInput("ok\n"))
        assert read_terminal_line() == "ok\n"
