"""
Browser Session

One persistent Chromium context for the whole run. The user data
directory keeps the back-office login between runs.
"""

import logging
from typing import Optional

from playwright.sync_api import BrowserContext, Page, Playwright, sync_playwright

from ..common.constants import VIEWPORT
from .playwright_pages import PlaywrightListingPage, PlaywrightProductDetailPage

logger = logging.getLogger(__name__)


class BrowserSession:
    """
    Scoped Playwright session.

    Usage:
        with BrowserSession(user_data_dir="browser-data") as session:
            listing = session.listing_page()
            detail = session.product_page()

    Both page objects wrap the same tab: the session's navigation state is
    shared, so it must never be driven from two places at once.
    """

    def __init__(self, user_data_dir: str, headless: bool = True, default_timeout_ms: int = 30000):
        self.user_data_dir = user_data_dir
        self.headless = headless
        self.default_timeout_ms = default_timeout_ms

        self._playwright: Optional[Playwright] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *args):
        self.close()

    def start(self) -> None:
        logger.info("Launching Chromium (headless=%s, profile=%s)", self.headless, self.user_data_dir)
        self._playwright = sync_playwright().start()
        try:
            self._context = self._playwright.chromium.launch_persistent_context(
                self.user_data_dir,
                headless=self.headless,
                viewport=VIEWPORT,
            )
            self._page = self._context.new_page()
            self._page.set_default_timeout(self.default_timeout_ms)
        except Exception:
            self.close()
            raise
        logger.debug("Browser session ready")

    @property
    def page(self) -> Page:
        if self._page is None:
            raise RuntimeError("Browser session is not started")
        return self._page

    def listing_page(self) -> PlaywrightListingPage:
        return PlaywrightListingPage(self.page)

    def product_page(self) -> PlaywrightProductDetailPage:
        return PlaywrightProductDetailPage(self.page)

    def close(self) -> None:
        """Release the context and stop Playwright. Safe to call twice."""
        logger.info("Closing browser session")
        context, playwright = self._context, self._playwright
        self._page = self._context = self._playwright = None

        if context is not None:
            try:
                context.close()
            except Exception as e:
                logger.warning("Error closing browser context: %s", e)
        if playwright is not None:
            try:
                playwright.stop()
            except Exception as e:
                logger.warning("Error stopping Playwright: %s", e)
