#!/usr/bin/env python3
"""
Cart Filler - place one unit of a product in the cart from its product page
Classifies every attempt as added / already in cart / out of stock / not found
"""

import logging
from typing import Optional

from ..core.config import ShopConfig
from ..core.errors import CartAttemptFailed
from ..models import CartOutcome
from ..utils.probes import ADD_TO_CART_PROBES, first_match

logger = logging.getLogger(__name__)


class CartFiller:
    """Add-to-cart primitive; fallback between links is the workflow's job"""

    def __init__(self, session, config: ShopConfig, probes=None):
        self.session = session
        self.config = config
        self.probes = probes or ADD_TO_CART_PROBES

    def resolve_url(self, url: str) -> Optional[str]:
        """Absolute URLs pass through, '/'-rooted paths get the base origin, anything else is invalid"""
        url = (url or '').strip()
        if url.startswith(('http://', 'https://')):
            return url
        if url.startswith('/'):
            return self.config.base_url + url
        return None

    async def try_add_to_cart(self, url: str) -> CartOutcome:
        """
        Navigate to a product page and try to add it to the cart.

        Returns:
            CartOutcome for this URL

        Raises:
            NavigationError: the product page could not be opened
        """
        full_url = self.resolve_url(url)
        if full_url is None:
            logger.warning(f"   ⚠️  Invalid URL format: {url}")
            return CartOutcome.NOT_FOUND

        await self.session.navigate(full_url)
        await self.session.pause(self.config.page_settle_delay)

        match = await first_match(self.session, self.probes)
        if match is None:
            logger.warning(f"   ❌ Add to cart button not found on {full_url}")
            return CartOutcome.NOT_FOUND

        try:
            outcome = CartOutcome(match.value)
        except ValueError:
            logger.warning(f"   Unexpected probe result {match.value!r} from {match.probe}")
            return CartOutcome.NOT_FOUND

        if outcome == CartOutcome.ADDED:
            await self.session.pause(self.config.post_add_delay)
        elif outcome == CartOutcome.ALREADY_IN_CART:
            logger.info("   ℹ️  Item already in cart")
        elif outcome == CartOutcome.OUT_OF_STOCK:
            logger.warning("   ⚠️  Item is out of stock")
        return outcome

    async def add_to_cart(self, url: str) -> CartOutcome:
        """
        Like try_add_to_cart, but a failed attempt is an error.

        Raises:
            CartAttemptFailed: the product is out of stock or could not be added
            NavigationError: the product page could not be opened
        """
        outcome = await self.try_add_to_cart(url)
        if not outcome.is_success:
            raise CartAttemptFailed(url, outcome)
        return outcome
