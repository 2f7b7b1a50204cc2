"""
Product Link Harvester

Walks the paginated product listing and collects (edit link, marketplace
link) pairs for every listing whose supplier ad is still live.
"""

import logging
from typing import List, Optional
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

from ..browser.pages import InteractionError, ListingPage, ListingRow
from ..common.settings import AutomationSettings
from ..models import ProductLink

logger = logging.getLogger(__name__)


class ListingUnreachableError(Exception):
    """The first listing page never showed a row: the listing itself is down."""


def build_page_url(root_url: str, page_index: int, page_param: str = "page") -> str:
    """
    Set the page-index query parameter on the listing URL.

    Existing query parameters are kept; a previous page parameter is replaced.
    """
    parts = urlparse(root_url)
    query = [(key, value) for key, value in parse_qsl(parts.query, keep_blank_values=True)
             if key != page_param]
    query.append((page_param, str(page_index)))
    return urlunparse(parts._replace(query=urlencode(query)))


class LinkHarvester:
    """
    Collects ProductLinks from every page of the listing.

    Pagination has no explicit last-page marker: a page that shows the
    empty-state indicator, never shows a row, or has an empty table ends
    the walk. Only page 0 failing to show rows is fatal.
    """

    def __init__(self, listing: ListingPage, settings: Optional[AutomationSettings] = None):
        self.listing = listing
        self.settings = settings or AutomationSettings()

        self.pages_visited = 0
        self.rows_seen = 0
        self.rows_removed = 0
        self.rows_skipped = 0

    def harvest(self, listing_root_url: str, limit: int = 0) -> List[ProductLink]:
        """
        Harvest product links from all listing pages.

        Args:
            listing_root_url: Listing URL without the page parameter
            limit: Stop after this many links (0 = no limit)

        Returns:
            ProductLinks in listing order (duplicates are kept)

        Raises:
            ListingUnreachableError: If page 0 never shows a listing row
        """
        links: List[ProductLink] = []
        page_index = 0
        max_pages = self.settings.max_pages

        while not max_pages or page_index < max_pages:
            url = build_page_url(listing_root_url, page_index, self.settings.page_param)
            logger.info("Harvesting listing page %d: %s", page_index, url)
            try:
                self.listing.open(url)
                self.pages_visited += 1
                self.listing.wait_for_content(self.settings.default_timeout_ms)

                if self.listing.has_empty_state():
                    logger.info("Page %d shows no products, harvest complete", page_index)
                    break

                self.listing.pause(self.settings.listing_settle_ms)
                rows = self.listing.rows()
            except InteractionError as e:
                if page_index == 0:
                    raise ListingUnreachableError(
                        f"Listing unreachable at {url}: {e}"
                    ) from e
                logger.info("No rows on page %d (%s), treating it as the last page", page_index, e)
                break

            if not rows:
                logger.info("Page %d has an empty table, harvest complete", page_index)
                break

            logger.debug("Found %d rows on page %d", len(rows), page_index)
            for row in rows:
                link = self._harvest_row(row)
                if link is None:
                    continue
                links.append(link)
                if limit and len(links) >= limit:
                    logger.info("Reached limit of %d links", limit)
                    return links

            page_index += 1

        logger.info("Harvested %d product links from %d pages", len(links), self.pages_visited)
        return links

    def _harvest_row(self, row: ListingRow) -> Optional[ProductLink]:
        self.rows_seen += 1

        try:
            if row.is_listing_removed():
                logger.debug("Skipping product with removed supplier listing")
                self.rows_removed += 1
                return None

            internal_ref = row.internal_ref(self.settings.row_timeout_ms)
            external_ref = row.external_ref(self.settings.row_timeout_ms)
        except InteractionError as e:
            logger.warning("Could not read row links, skipping row: %s", e)
            self.rows_skipped += 1
            return None

        if not internal_ref or not external_ref:
            logger.debug("Row without both links, skipping")
            self.rows_skipped += 1
            return None

        return ProductLink(internal_ref=internal_ref, external_ref=external_ref)

    def get_stats(self) -> dict:
        """Return harvest statistics."""
        return {
            "pages_visited": self.pages_visited,
            "rows_seen": self.rows_seen,
            "rows_removed": self.rows_removed,
            "rows_skipped": self.rows_skipped,
        }
