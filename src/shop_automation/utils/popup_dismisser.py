#!/usr/bin/env python3
"""
Cookie consent handling - accept the storefront's consent banner if it is showing
"""

import logging

from ..core.errors import DriverError
from .probes import CONSENT_PROBES, first_match

logger = logging.getLogger(__name__)


async def dismiss_cookie_consent(session, delay: float = 2.0) -> bool:
    """
    Click the consent banner's accept button, then let the page settle.
    A missing banner or a failing script is not an error.

    Returns:
        True if a consent button was clicked
    """
    logger.info("🍪 Handling cookie consent...")
    try:
        match = await first_match(session, CONSENT_PROBES)
    except DriverError as e:
        logger.debug(f"Consent probe failed: {e}")
        match = None

    if match:
        logger.info(f"✅ Accepted cookies via {match.probe}")
    else:
        logger.debug("No cookie consent banner found")

    await session.pause(delay)
    return match is not None
