"""
Human handoff points
Blocks the workflow until a person acknowledges on the controlling terminal
"""
import asyncio
import logging
import sys
from enum import Enum
from typing import Callable, Optional

from ..core.errors import NoTerminal

logger = logging.getLogger(__name__)


class HandoffPoint(str, Enum):
    MANUAL_LOGIN = "manual_login"
    DELIVERY_SLOT = "delivery_slot"
    CHECKOUT = "checkout"


HANDOFF_MESSAGES = {
    HandoffPoint.MANUAL_LOGIN: (
        "📝 Please login to SuperValu manually in the browser window.",
        "   When you're done logging in, press Enter here to save cookies...",
    ),
    HandoffPoint.DELIVERY_SLOT: (
        "📅 Please select your delivery slot in the browser.",
        "   Once you've selected a delivery slot, press Enter here to continue...",
    ),
    HandoffPoint.CHECKOUT: (
        "🛒 Browser is ready for checkout.",
        "   Review your cart and complete your purchase.",
        "   Press Enter here when you're done to close the browser...",
    ),
}


def _terminal_path() -> str:
    return "CONIN$" if sys.platform == "win32" else "/dev/tty"


def read_terminal_line() -> str:
    """
    Read one line from the controlling terminal, not stdin.
    Stdin may already have been consumed by the shopping list, so it is only
    used when it is itself an interactive terminal.

    Raises:
        NoTerminal: neither the controlling terminal nor an interactive stdin is available
    """
    path = _terminal_path()
    try:
        with open(path, "r", encoding="utf-8") as tty:
            return tty.readline()
    except OSError as e:
        if not sys.stdin.isatty():
            raise NoTerminal(f"No terminal available for the handoff prompt ({path}: {e})") from e
        logger.warning("⚠️ No controlling terminal available, reading acknowledgment from stdin")
        return sys.stdin.readline()


class HumanHandoff:
    """Cooperative suspension point; resumes on a single acknowledgment"""

    def __init__(self, reader: Optional[Callable[[], str]] = None, output: Callable[[str], None] = print):
        self.reader = reader or read_terminal_line
        self.output = output

    async def wait(self, point: HandoffPoint):
        for line in HANDOFF_MESSAGES[point]:
            self.output(line)
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self.reader)
        logger.info(f"✅ Acknowledged: {point.value}")
