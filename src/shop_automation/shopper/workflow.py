"""
Shopping Workflow
Replays a shopping list against the live cart, one item at a time.

Every item ends up in exactly one bucket: added, failed after an attempt,
or skipped because it had no link. The summary is the authoritative record;
the cart page read at the end is only shown for reference.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence

from ..auth import SessionManager, SessionMode
from ..core.config import ShopConfig
from ..core.errors import CartAttemptFailed, DriverError, NoLinkProvided
from ..models import CartOutcome, CartSnapshot, ShoppingListItem
from ..utils.handoff import HandoffPoint, HumanHandoff
from .cart_filler import CartFiller
from .cart_summary import read_cart

logger = logging.getLogger(__name__)


class FailureReason(str, Enum):
    NO_LINK = "no link"
    ATTEMPT_FAILED = "attempt failed"


@dataclass
class FailedItem:
    name: str
    reason: FailureReason
    detail: Optional[str] = None


@dataclass
class ItemResult:
    """Per-item audit entry"""
    name: str
    success: bool
    outcome: Optional[CartOutcome] = None
    link: Optional[str] = None
    used_backup: bool = False
    error: Optional[str] = None


@dataclass
class ShoppingRunSummary:
    added_count: int = 0
    failed_items: List[FailedItem] = field(default_factory=list)
    results: List[ItemResult] = field(default_factory=list)
    cart: Optional[CartSnapshot] = None
    cart_error: Optional[str] = None

    def record(self, result: ItemResult, reason: Optional[FailureReason] = None):
        self.results.append(result)
        if result.success:
            self.added_count += 1
        else:
            self.failed_items.append(FailedItem(result.name, reason or FailureReason.ATTEMPT_FAILED, result.error))

    @property
    def skipped(self) -> List[FailedItem]:
        return [f for f in self.failed_items if f.reason == FailureReason.NO_LINK]

    @property
    def attempt_failures(self) -> List[FailedItem]:
        return [f for f in self.failed_items if f.reason == FailureReason.ATTEMPT_FAILED]

    @property
    def needs_attention(self) -> bool:
        return bool(self.failed_items)

    def render(self) -> str:
        lines = ["", "=" * 60, "📊 SHOPPING SUMMARY", "=" * 60]
        lines.append(f"\n✅ Successfully added: {self.added_count} items")

        if self.skipped:
            lines.append(f"\n⏭️  Skipped {len(self.skipped)} items (no links provided):")
            lines.extend(f"   - {item.name}" for item in self.skipped)

        if self.attempt_failures:
            lines.append(f"\n❌ Failed to add {len(self.attempt_failures)} items:")
            for item in self.attempt_failures:
                suffix = f" ({item.detail})" if item.detail else ""
                lines.append(f"   - {item.name}{suffix}")

        if self.cart is None:
            lines.append("\n⚠️  Cart contents could not be read; the counts above are still accurate.")
        else:
            if self.cart.items:
                lines.append("\n🛒 Cart Contents:")
                for line in self.cart.items:
                    lines.append(f"   • {line.name} (qty: {line.quantity}) - {line.price}")
            if self.cart.subtotal:
                lines.append(f"\n💰 Subtotal: {self.cart.subtotal}")

        lines.append("\n" + "=" * 60)
        return "\n".join(lines)


class ShoppingWorkflow:
    """Sequential cart filling on a single authenticated page"""

    def __init__(
        self,
        session,
        config: ShopConfig,
        cart_filler: Optional[CartFiller] = None,
        session_manager: Optional[SessionManager] = None,
        handoff: Optional[HumanHandoff] = None,
        visible: bool = False,
        output: Callable[[str], None] = print,
    ):
        self.session = session
        self.config = config
        self.cart_filler = cart_filler or CartFiller(session, config)
        self.handoff = handoff or HumanHandoff()
        self.session_manager = session_manager or SessionManager(session, config, handoff=self.handoff)
        self.visible = visible
        self.output = output

    async def add_item(self, item: ShoppingListItem) -> ItemResult:
        """
        Try the primary link, then the backup link.

        Raises:
            NoLinkProvided: the item has no usable link at all
        """
        attempts = []
        if item.link:
            attempts.append((item.link, False))
        if item.backup_link:
            attempts.append((item.backup_link, True))
        if not item.has_usable_link():
            raise NoLinkProvided(item.name)

        last_outcome = None
        last_error = None
        for link, is_backup in attempts:
            if is_backup:
                if item.link:
                    logger.info("   🔄 Primary product unavailable, trying backup...")
                else:
                    logger.info("   🔄 No primary link, trying backup...")

            try:
                outcome = await self.cart_filler.add_to_cart(link)
            except CartAttemptFailed as e:
                last_outcome = e.outcome
                last_error = str(e)
                continue
            except DriverError as e:
                logger.error(f"   ❌ Failed to open {link}: {e}")
                last_error = str(e)
                continue

            return ItemResult(item.name, True, outcome, link, used_backup=is_backup)

        return ItemResult(item.name, False, last_outcome, attempts[-1][0], error=last_error)

    async def process_items(self, items: Sequence[ShoppingListItem]) -> ShoppingRunSummary:
        """Add every item, then read the cart page for display"""
        summary = ShoppingRunSummary()
        total = len(items)

        for index, item in enumerate(items, start=1):
            logger.info(f"📦 [{index}/{total}] Processing: {item.name}")
            if item.amount:
                logger.info(f"   Amount needed: {item.amount}")

            try:
                result = await self.add_item(item)
            except NoLinkProvided as e:
                logger.warning(f"   ⏭️  Skipping - {e}")
                summary.record(ItemResult(item.name, False), FailureReason.NO_LINK)
                continue

            summary.record(result)
            if result.success:
                logger.info("   ✅ Added to cart")
            else:
                logger.warning(f"   ⚠️  Could not add {item.name}: {result.error}")

            await self.session.pause(self.config.inter_item_delay)

        summary.cart, summary.cart_error = await read_cart(self.session, self.config)
        return summary

    async def run(self, items: Sequence[ShoppingListItem], mode: SessionMode = SessionMode.RESTORE) -> ShoppingRunSummary:
        """
        Full shop run: establish the session, hand off for a delivery slot,
        fill the cart, show the summary and hand off for checkout.

        Raises:
            LoginFailed, NoCredentials: no authenticated session could be established
        """
        logger.info(f"🛒 Starting shopping automation with {len(items)} items")
        await self.session_manager.establish_session(mode)

        if self.visible:
            await self.handoff.wait(HandoffPoint.DELIVERY_SLOT)
            logger.info("✅ Starting to add items to cart...")

        summary = await self.process_items(items)
        self.output(summary.render())

        if self.visible:
            await self.handoff.wait(HandoffPoint.CHECKOUT)
            logger.info("✅ Shopping session complete!")

        return summary
