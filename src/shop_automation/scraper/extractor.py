"""
Product Extractor
Reads the first few product cards from a rendered search results page
"""
import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from ..core.config import ShopConfig
from ..models import ProductRecord

logger = logging.getLogger(__name__)

MAX_PRODUCTS = 3
PRODUCT_CARD_SELECTOR = "article[data-testid*='ProductCardWrapper']"

# Trailing "(250 g)", "(6 Piece)", "(1 kg)" on display names
QUANTITY_SUFFIX = re.compile(r'\s*\(([^)]+)\)$')

# Raw card fields only; parsing happens in Python
CARD_SCRIPT = """
    (args) => {
        const cards = Array.from(document.querySelectorAll(args.cardSelector)).slice(0, args.limit);

        return cards.map(card => {
            const text = (el) => el ? (el.textContent || '').trim() : '';

            const titleEl = card.querySelector('.ProductCardTitle--1ln1u3g, [data-testid*="ProductNameTestId"]');
            let fullName = text(titleEl).replace('Open product description', '').trim();

            if (!fullName) {
                const ariaTitle = card.querySelector('.AriaProductTitle--1axj7ma p');
                const match = text(ariaTitle).match(/^([^,€]+)/);
                if (match) fullName = match[1].trim();
            }

            const linkEl = card.querySelector('a.ProductCardHiddenLink--v3c62m, a[href*="/product/"]');
            const priceEl = card.querySelector(
                '.ProductCardPrice--1sznkcp, [data-testid="productCardPricing-div-testId"] span'
            );
            const unitPriceEl = card.querySelector('.ProductCardPriceInfo--18y10ci');

            return {
                name: fullName,
                href: linkEl ? (linkEl.getAttribute('href') || '') : '',
                price: text(priceEl),
                pricePerUnit: text(unitPriceEl)
            };
        });
    }
"""


def split_quantity(full_name: str) -> Tuple[str, Optional[str]]:
    """
    Split a trailing parenthesized quantity off a display name.

    >>> split_quantity("Organic Bananas (1 kg)")
    ('Organic Bananas', '1 kg')
    """
    full_name = (full_name or '').strip()
    match = QUANTITY_SUFFIX.search(full_name)
    if not match:
        return full_name, None
    return full_name[:match.start()].strip(), match.group(1).strip()


class ProductExtractor:
    """Turns rendered product cards into at most MAX_PRODUCTS records"""

    def __init__(self, config: ShopConfig, limit: int = MAX_PRODUCTS):
        self.config = config
        self.limit = limit

    def parse_card(self, raw: Dict[str, Any]) -> Optional[ProductRecord]:
        """Build a record from one raw card, or None if it is incomplete"""
        name, quantity = split_quantity(raw.get('name') or '')
        url = self.config.absolute_url((raw.get('href') or '').strip())
        price = (raw.get('price') or '').strip()
        price_per_unit = (raw.get('pricePerUnit') or '').strip() or price

        record = ProductRecord(
            name=name,
            url=url,
            price=price,
            price_per_unit=price_per_unit,
            quantity=quantity,
        )
        if not record.is_usable():
            logger.debug(f"Dropping incomplete product card: {raw}")
            return None
        return record

    def parse_cards(self, raw_cards: List[Dict[str, Any]]) -> List[ProductRecord]:
        records = []
        for raw in raw_cards[:self.limit]:
            record = self.parse_card(raw)
            if record is not None:
                records.append(record)
                logger.info(f"   Added product: {record.name} ({record.quantity or 'no quantity'}) - {record.price}")
        return records

    async def extract(self, session) -> List[ProductRecord]:
        """Extract records from the page currently loaded in the session"""
        raw_cards = await session.evaluate(
            CARD_SCRIPT, {'cardSelector': PRODUCT_CARD_SELECTOR, 'limit': self.limit}
        ) or []
        logger.info(f"📦 Found {len(raw_cards)} product cards")
        return self.parse_cards(raw_cards)
