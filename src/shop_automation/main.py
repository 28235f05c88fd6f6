#!/usr/bin/env python3
"""
Command line entry point: scrape, login and shop against the SuperValu storefront
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .auth import SessionManager, SessionMode
from .core.browser import launch_browser
from .core.config import ShopConfig
from .core.errors import ShopAutomationError
from .scraper import ScrapeWorkflow
from .scraper.workflow import DEFAULT_DB_PATH
from .shopper import ShoppingWorkflow, load_shopping_list

logger = logging.getLogger(__name__)


def read_product_names(stream) -> List[str]:
    """One product name per line, blank lines ignored"""
    return [line.strip() for line in stream if line.strip()]


async def run_scrape(db_path: str, visible: bool, names: List[str], config: ShopConfig) -> int:
    if visible:
        logger.info("Running in visible mode - browser windows will be shown")

    async with launch_browser(headless=not visible) as session:
        workflow = ScrapeWorkflow(session, config, db_path=Path(db_path), visible=visible)
        report = await workflow.run(names)

    print(report.render())
    return 0


async def run_login(visible: bool, manual: bool, config: ShopConfig) -> int:
    if manual:
        logger.info("🔐 Opening SuperValu for manual login...")
        async with launch_browser(headless=False) as session:
            manager = SessionManager(session, config)
            await manager.manual_login()
        print(f"✅ Cookies saved to: {config.cookie_file}")
        print("   You can now use the 'shop' command.")
        return 0

    logger.info("🔐 Logging in to SuperValu...")
    async with launch_browser(headless=not visible) as session:
        manager = SessionManager(session, config)
        await manager.establish_session(SessionMode.FORCE_LOGIN)
        print(f"✅ Login successful! Cookies saved to: {config.cookie_file}")
        print("   You can now use the 'shop' command without logging in each time.")
        if visible:
            print(f"\n   Browser will close in {config.close_delay:.0f} seconds...")
            await session.pause(config.close_delay)
    return 0


async def run_shop(shopping_list_path: str, visible: bool, force_login: bool, config: ShopConfig) -> int:
    shopping_list = load_shopping_list(shopping_list_path)
    mode = SessionMode.FORCE_LOGIN if force_login else SessionMode.RESTORE

    async with launch_browser(headless=not visible) as session:
        workflow = ShoppingWorkflow(session, config, visible=visible)
        summary = await workflow.run(shopping_list.items, mode)

    if summary.needs_attention:
        logger.warning(f"{len(summary.failed_items)} items need manual attention")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='shop-automation',
        description='SuperValu product scraper and database manager',
    )
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    scrape = subparsers.add_parser('scrape', help='Scrape product information from SuperValu (names on stdin)')
    scrape.add_argument('--db-path', default=DEFAULT_DB_PATH, help='Base path for the database (default: %(default)s)')
    scrape.add_argument('-v', '--visible', action='store_true', help='Run in visible mode (show browser window)')

    login = subparsers.add_parser('login', help='Login to SuperValu and save session cookies')
    login.add_argument('-v', '--visible', action='store_true', help='Run in visible mode (show browser window)')
    login.add_argument('-m', '--manual', action='store_true', help='Manual login - browser stays open for you to login yourself')

    shop = subparsers.add_parser('shop', help='Shop for items from a YAML shopping list')
    shop.add_argument('shopping_list', help="Path to shopping list YAML file (use '-' for stdin)")
    shop.add_argument('-v', '--visible', action='store_true', help='Run in visible mode (show browser window)')
    shop.add_argument('--force-login', action='store_true', help='Force fresh login even if cookies exist')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    config = ShopConfig()

    try:
        if args.command == 'scrape':
            names = read_product_names(sys.stdin)
            if not names:
                print("No products provided. Please provide product names via stdin, one per line.", file=sys.stderr)
                return 0
            return asyncio.run(run_scrape(args.db_path, args.visible, names, config))
        if args.command == 'login':
            return asyncio.run(run_login(args.visible, args.manual, config))
        if args.command == 'shop':
            return asyncio.run(run_shop(args.shopping_list, args.visible, args.force_login, config))
    except ShopAutomationError as e:
        logger.error(f"❌ {args.command} failed: {e}")
        return 1
    except KeyboardInterrupt:
        logger.error("❌ Cancelled by user")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
