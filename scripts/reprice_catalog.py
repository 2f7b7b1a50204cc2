#!/usr/bin/env python3
"""
Catalog Repricing Script

Harvests product links from the back-office listing, resolves the current
supplier price of every variant, and saves the new calculator values.

Environment (or .env):
    API_URL           Price lookup service (default: http://localhost:8080)
    LISTING_URL       Back-office product listing (default: https://app.dropi.com.br/produtos)
    BROWSER_DATA_DIR  Persistent browser profile holding the login (default: browser-data)
    HEADLESS          "false" to watch the browser (default: true)

Usage:
    python3 scripts/reprice_catalog.py
    python3 scripts/reprice_catalog.py --limit 10 --dry-run --verbose
    python3 scripts/reprice_catalog.py --links-file output/links.csv --failed-output output/failed.csv
"""

import argparse
import logging
import os
import sys

from dotenv import load_dotenv

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.browser.session import BrowserSession
from src.common.log_config import setup_logging
from src.common.settings import get_browser_data_dir, get_listing_url, is_headless, load_automation_settings
from src.discovery import ListingUnreachableError, load_links
from src.pricing import PriceLookupClient, PricingRuleEngine
from src.repricing import FailureThresholdExceeded, RepricingPipeline

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Reprice back-office products from current supplier prices"
    )
    parser.add_argument(
        "--listing-url",
        help="Product listing URL (default: LISTING_URL or the Dropi products page)"
    )
    parser.add_argument(
        "--links-file",
        help="Commit links from this CSV instead of harvesting the listing"
    )
    parser.add_argument(
        "--output", "-o",
        help="Save harvested links to this CSV"
    )
    parser.add_argument(
        "--failed-output",
        help="Save products that failed after all retries to this CSV"
    )
    parser.add_argument(
        "--limit", "-l",
        type=int,
        default=0,
        help="Limit number of products (0 = no limit)"
    )
    parser.add_argument(
        "--max-pages",
        type=int,
        help="Stop harvesting after this many listing pages (0 = no limit)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve and log new prices without filling or saving anything"
    )
    parser.add_argument(
        "--headful",
        action="store_true",
        help="Show the browser window"
    )
    parser.add_argument(
        "--log-file",
        help="Also write the log to this file"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress info messages, show only warnings and errors"
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    load_dotenv()
    args = parse_args(argv)
    setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    settings = load_automation_settings()
    if args.max_pages is not None:
        settings.max_pages = args.max_pages

    listing_url = args.listing_url or get_listing_url()
    engine = PricingRuleEngine.from_config()
    links = load_links(args.links_file) if args.links_file else None

    logger.info("Starting repricing run")
    try:
        with BrowserSession(
            user_data_dir=get_browser_data_dir(),
            headless=is_headless() and not args.headful,
            default_timeout_ms=settings.default_timeout_ms,
        ) as session, PriceLookupClient() as client:
            pipeline = RepricingPipeline(session, client, engine, settings, dry_run=args.dry_run)
            outcome = pipeline.run(
                listing_url,
                limit=args.limit,
                links=links,
                links_output=args.output,
                failed_output=args.failed_output,
            )
    except KeyboardInterrupt:
        logger.error("Application interrupted")
        return 1
    except ListingUnreachableError as e:
        logger.error("Listing unreachable: %s", e)
        return 1
    except FailureThresholdExceeded as e:
        logger.error("Aborting run: %s", e)
        return 1
    except Exception:
        logger.exception("Unexpected error")
        return 1

    print("\n" + "=" * 60)
    print("Repricing Summary")
    print("=" * 60)
    print(f"  Processed: {outcome.processed_count}")
    print(f"  Failed:    {outcome.failed_count}")
    print(f"  Price lookups: {client.requests_made}")
    if args.failed_output and outcome.has_failures:
        print(f"  Failed products: {args.failed_output}")
    print("=" * 60)

    logger.info("Application completed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
