"""
Scrape Workflow
Searches the storefront for each product name and stores the top results as YAML.
Products that already have a stored result are never fetched again.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional

import yaml

from ..core.config import ShopConfig
from ..core.errors import ExtractionEmpty, ShopAutomationError
from ..models import ProductRecord, ShoppingData
from ..utils.files import write_text_atomic
from ..utils.popup_dismisser import dismiss_cookie_consent
from .extractor import PRODUCT_CARD_SELECTOR, ProductExtractor

logger = logging.getLogger(__name__)

RESULT_FILENAME = "shopping.yml"
DEFAULT_DB_PATH = "../config/db"


class ScrapeStatus(str, Enum):
    SCRAPED = "scraped"
    SKIPPED = "skipped"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass
class ScrapeResult:
    name: str
    status: ScrapeStatus
    path: Optional[Path] = None
    count: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status in (ScrapeStatus.SCRAPED, ScrapeStatus.SKIPPED)


@dataclass
class ScrapeReport:
    results: List[ScrapeResult] = field(default_factory=list)

    def add(self, result: ScrapeResult):
        self.results.append(result)

    def by_status(self, status: ScrapeStatus) -> List[ScrapeResult]:
        return [r for r in self.results if r.status == status]

    @property
    def failures(self) -> List[ScrapeResult]:
        return [r for r in self.results if not r.ok]

    def render(self) -> str:
        lines = ["", "=" * 60, "📊 SCRAPE SUMMARY", "=" * 60]
        for result in self.results:
            if result.status == ScrapeStatus.SCRAPED:
                lines.append(f"✓ {result.name}: {result.count} options -> {result.path}")
            elif result.status == ScrapeStatus.SKIPPED:
                lines.append(f"⏭ {result.name}: already scraped ({result.path})")
            elif result.status == ScrapeStatus.EMPTY:
                lines.append(f"⚠ {result.name}: no products found")
            else:
                lines.append(f"✗ {result.name}: {result.error}")
        lines.append("=" * 60)
        return "\n".join(lines)


def normalize_product_key(product_name: str) -> str:
    """Directory key for a product: lowercase, separators replaced with '_'"""
    key = product_name.strip().lower()
    for separator in (" ", "/", "\\"):
        key = key.replace(separator, "_")
    return key


def save_records(path: Path, records: List[ProductRecord]) -> Path:
    """Write records as {supervalu: {opt_1: ..., opt_2: ...}}"""
    document = ShoppingData.from_records(records).to_document()
    write_text_atomic(path, yaml.safe_dump(document, sort_keys=False, allow_unicode=True))
    logger.info(f"✓ Saved shopping data to: {path}")
    return path


class ScrapeWorkflow:
    """Sequential scrape of a batch of product names on one browser page"""

    def __init__(
        self,
        session,
        config: ShopConfig,
        db_path: Path = Path(DEFAULT_DB_PATH),
        extractor: Optional[ProductExtractor] = None,
        visible: bool = False,
    ):
        self.session = session
        self.config = config
        self.db_path = Path(db_path)
        self.extractor = extractor or ProductExtractor(config)
        self.visible = visible

    def result_path(self, product_name: str) -> Path:
        return self.db_path / normalize_product_key(product_name) / RESULT_FILENAME

    async def search(self, product_name: str) -> List[ProductRecord]:
        search_url = self.config.search_url(product_name)
        logger.info(f"🔗 Navigating to: {search_url}")
        await self.session.navigate(search_url)

        logger.info("⏳ Waiting for page to load...")
        await self.session.pause(self.config.page_settle_delay)
        await dismiss_cookie_consent(self.session, self.config.consent_delay)

        logger.info("🔍 Waiting for products to load...")
        await self.session.wait_for_selector(PRODUCT_CARD_SELECTOR, self.config.product_wait_timeout)
        await self.session.pause(self.config.consent_delay)

        return await self.extractor.extract(self.session)

    async def scrape_product(self, product_name: str) -> ScrapeResult:
        path = self.result_path(product_name)
        if path.exists():
            logger.info(f"⏭ Skipping {product_name} - {RESULT_FILENAME} already exists")
            return ScrapeResult(product_name, ScrapeStatus.SKIPPED, path=path)

        records = await self.search(product_name)
        if not records:
            if self.visible:
                logger.info(f"🔍 No products found. Browser will stay open for {self.config.inspect_delay:.0f} seconds for inspection...")
                await self.session.pause(self.config.inspect_delay)
            raise ExtractionEmpty(product_name)

        save_records(path, records)
        return ScrapeResult(product_name, ScrapeStatus.SCRAPED, path=path, count=len(records))

    async def run(self, product_names: Iterable[str]) -> ScrapeReport:
        """Scrape every name; one product's failure never stops the batch"""
        report = ScrapeReport()
        names = [n.strip() for n in product_names if n and n.strip()]
        logger.info(f"Starting to scrape {len(names)} products from SuperValu...")

        for product_name in names:
            logger.info(f"Scraping: {product_name}")
            try:
                result = await self.scrape_product(product_name)
            except ExtractionEmpty as e:
                logger.warning(f"⚠ {e}")
                result = ScrapeResult(product_name, ScrapeStatus.EMPTY, error=str(e))
            except (ShopAutomationError, OSError, yaml.YAMLError) as e:
                logger.error(f"✗ Failed to scrape {product_name}: {e}")
                result = ScrapeResult(product_name, ScrapeStatus.FAILED, error=str(e))
            else:
                if result.status == ScrapeStatus.SCRAPED:
                    logger.info(f"✓ Successfully scraped {product_name}")
            report.add(result)

        return report
