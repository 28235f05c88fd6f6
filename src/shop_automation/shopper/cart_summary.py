"""
Cart Summary - read item count, subtotal and lines from the cart page.
Advisory only: a failed read never changes what the workflow recorded.
"""

import logging
from typing import Optional, Tuple

from pydantic import ValidationError

from ..core.config import ShopConfig
from ..core.errors import DriverError
from ..models import CartSnapshot

logger = logging.getLogger(__name__)

CART_SUMMARY_SCRIPT = """
    () => {
        const result = {
            itemCount: 0,
            subtotal: '',
            items: []
        };

        const countEl = document.querySelector('[class*="cart-count"], [class*="CartCount"], [aria-label*="items in cart"]');
        if (countEl) {
            const match = countEl.textContent.match(/\\d+/);
            if (match) result.itemCount = parseInt(match[0]);
        }

        const subtotalEl = document.querySelector('[class*="subtotal"], [class*="Subtotal"], [class*="total-price"]');
        if (subtotalEl) {
            result.subtotal = subtotalEl.textContent.trim();
        }

        const cartItems = document.querySelectorAll('[class*="cart-item"], [class*="CartItem"], article[data-testid*="cart"]');
        cartItems.forEach(item => {
            const nameEl = item.querySelector('h3, h4, [class*="product-name"], [class*="ProductName"]');
            const priceEl = item.querySelector('[class*="price"], [class*="Price"]');
            const quantityEl = item.querySelector('input[type="number"], [class*="quantity"], select');

            if (nameEl) {
                result.items.push({
                    name: nameEl.textContent.trim(),
                    price: priceEl ? priceEl.textContent.trim() : '',
                    quantity: quantityEl ? (quantityEl.value || quantityEl.textContent.trim()) : '1'
                });
            }
        });

        return result;
    }
"""


async def read_cart(session, config: ShopConfig) -> Tuple[Optional[CartSnapshot], Optional[str]]:
    """
    Open the cart page and extract its summary.

    Returns:
        (snapshot, None) on success, (None, reason) when the cart could not be read
    """
    try:
        await session.navigate(config.cart_url)
        await session.pause(config.page_settle_delay)
        raw = await session.evaluate(CART_SUMMARY_SCRIPT)
        snapshot = CartSnapshot.model_validate(raw or {})
    except (DriverError, ValidationError) as e:
        logger.warning(f"⚠️ Could not read cart summary: {e}")
        return None, str(e)

    logger.info(f"🛒 Cart shows {snapshot.itemCount} items, {len(snapshot.items)} lines")
    return snapshot, None
