#!/usr/bin/env python3
"""
DOM Probe Library
Centralized page-state probes for login detection, consent banners and add-to-cart controls.

A probe is one independent detection strategy. It evaluates a script on the page and
returns a definite answer, or None for "no opinion". Probe lists are combined
first-match-wins, so new site markup means appending a probe, not touching callers.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Probe:
    """Single detection strategy evaluated in the page"""
    name: str
    script: str
    # Bound script argument, takes precedence over the caller's
    arg: Any = None

    async def run(self, session, arg: Any = None) -> Any:
        return await session.evaluate(self.script, self.arg if self.arg is not None else arg)


@dataclass(frozen=True)
class ProbeMatch:
    probe: str
    value: Any


async def first_match(session, probes: Sequence[Probe], arg: Any = None) -> Optional[ProbeMatch]:
    """
    Run probes in order and return the first definite answer.

    Returns:
        ProbeMatch for the first probe that did not return None, else None
    """
    for probe in probes:
        value = await probe.run(session, arg)
        if value is not None:
            logger.debug(f"Probe '{probe.name}' matched: {value!r}")
            return ProbeMatch(probe.name, value)
    return None


def _selector_probe(name: str, selectors: List[str], on_match: str) -> Probe:
    """Probe that returns a fixed JS value when any selector is present"""
    script = f"""
        (selector) => {{
            try {{
                return document.querySelector(selector) ? {on_match} : null;
            }} catch (e) {{
                return null;
            }}
        }}
    """
    return Probe(name, script, ', '.join(selectors))


# ============================================
# LOGIN STATE
# ============================================

# A sign-in control is an authoritative "logged out"
SIGN_IN_PROBE = _selector_probe(
    'sign_in_control',
    ['button[aria-label*="Sign in"]', 'a[href*="login"]'],
    'false',
)

LOGOUT_PROBE = _selector_probe(
    'log_out_control',
    ['button[aria-label*="Log out"]', 'a[href*="logout"]'],
    'true',
)

ACCOUNT_MENU_PROBE = _selector_probe(
    'account_menu',
    ['[class*="user"]', '[class*="account"]', '[aria-label*="Account"]'],
    'true',
)

LOGIN_PROBES = [SIGN_IN_PROBE, LOGOUT_PROBE, ACCOUNT_MENU_PROBE]


# ============================================
# COOKIE CONSENT
# ============================================

CONSENT_BUTTON_PROBE = Probe('consent_accept_button', """
    () => {
        const acceptButtons = [
            '#onetrust-accept-btn-handler',
            '.onetrust-close-btn-handler',
            '[aria-label="Accept cookies"]',
            'button[id*="accept"]',
            'button[class*="accept"]',
            'button[aria-label*="Accept"]'
        ];

        for (const selector of acceptButtons) {
            try {
                const btn = document.querySelector(selector);
                if (!btn) continue;
                const text = (btn.textContent || '').toLowerCase();
                const ariaLabel = (btn.getAttribute('aria-label') || '').toLowerCase();
                if (text.includes('accept') || ariaLabel.includes('accept')) {
                    btn.click();
                    return selector;
                }
            } catch (e) {}
        }
        return null;
    }
""")

CONSENT_TEXT_PROBE = Probe('consent_accept_text', """
    () => {
        for (const btn of document.querySelectorAll('button')) {
            const text = (btn.textContent || '').toLowerCase();
            if (text.includes('accept all') || text.includes('accept cookies')) {
                btn.click();
                return text.trim();
            }
        }
        return null;
    }
""")

CONSENT_PROBES = [CONSENT_BUTTON_PROBE, CONSENT_TEXT_PROBE]


# ============================================
# ADD TO CART
# ============================================

# Only the first match of each selector is considered; that is the product's own
# control. A disabled one gives no decision and the next selector is tried.
ADD_CONTROL_PROBE = Probe('add_control', """
    () => {
        const selectors = [
            'button[aria-label*="Add to Trolley"]',
            'button[aria-label*="Add to Cart"]',
            'button[data-testid*="addToCart"]',
            'button[class*="AddToCart"]'
        ];

        for (const selector of selectors) {
            const btn = document.querySelector(selector);
            if (!btn || btn.disabled || btn.getAttribute('aria-disabled') === 'true') continue;

            const text = (btn.textContent || '').toLowerCase();
            if (text.includes('add')) {
                btn.click();
                return 'added';
            }
            if (text.includes('update') || text.includes('quantity')) {
                return 'already_in_cart';
            }
        }
        return null;
    }
""")

OUT_OF_STOCK_PROBE = _selector_probe(
    'out_of_stock',
    ['[class*="out-of-stock"]', '[class*="OutOfStock"]', '[aria-label*="Out of stock"]'],
    "'out_of_stock'",
)

ADD_TO_CART_PROBES = [ADD_CONTROL_PROBE, OUT_OF_STOCK_PROBE]


__all__ = [
    'Probe',
    'ProbeMatch',
    'first_match',
    'LOGIN_PROBES',
    'CONSENT_PROBES',
    'ADD_TO_CART_PROBES',
    'SIGN_IN_PROBE',
    'LOGOUT_PROBE',
    'ACCOUNT_MENU_PROBE',
    'ADD_CONTROL_PROBE',
    'OUT_OF_STOCK_PROBE',
]
