#!/usr/bin/env python3
"""
Link Harvest Script

Walks the back-office listing and saves (edit link, marketplace link)
pairs to CSV, without repricing anything. The output can be fed to
reprice_catalog.py --links-file.

Usage:
    python3 scripts/harvest_links.py --output output/links.csv
    python3 scripts/harvest_links.py --output output/links.csv --max-pages 3
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
from src.discovery import LinkHarvester, ListingUnreachableError, save_links

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(description="Harvest product links from the back-office listing")
    parser.add_argument("--output", "-o", default="output/links.csv", help="Output CSV (default: output/links.csv)")
    parser.add_argument("--listing-url", help="Product listing URL (default: LISTING_URL)")
    parser.add_argument("--limit", "-l", type=int, default=0, help="Limit number of links (0 = no limit)")
    parser.add_argument("--max-pages", type=int, help="Stop after this many pages (0 = no limit)")
    parser.add_argument("--headful", action="store_true", help="Show the browser window")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--quiet", action="store_true", help="Only show warnings and errors")
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    settings = load_automation_settings()
    if args.max_pages is not None:
        settings.max_pages = args.max_pages
    listing_url = args.listing_url or get_listing_url()

    try:
        with BrowserSession(
            user_data_dir=get_browser_data_dir(),
            headless=is_headless() and not args.headful,
            default_timeout_ms=settings.default_timeout_ms,
        ) as session:
            harvester = LinkHarvester(session.listing_page(), settings)
            links = harvester.harvest(listing_url, limit=args.limit)
    except KeyboardInterrupt:
        logger.error("Harvest interrupted")
        return 1
    except ListingUnreachableError as e:
        logger.error("Listing unreachable: %s", e)
        return 1

    save_links(links, args.output)

    stats = harvester.get_stats()
    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    print(f"  Pages visited:   {stats['pages_visited']}")
    print(f"  Rows seen:       {stats['rows_seen']}")
    print(f"  Removed ads:     {stats['rows_removed']}")
    print(f"  Rows skipped:    {stats['rows_skipped']}")
    print(f"  Links harvested: {len(links)}")
    print(f"  Output file:     {args.output}")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
