"""
Playwright implementations of the back-office page interfaces.

Playwright's TimeoutError becomes InteractionTimeout and any other
Playwright error becomes InteractionError, so callers never import
Playwright themselves.
"""

import logging
from contextlib import contextmanager
from typing import List, Optional

from playwright.sync_api import ElementHandle, Error as PlaywrightError, Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from . import selectors
from .pages import (
    CalculatorField,
    InteractionError,
    InteractionTimeout,
    ListingPage,
    ListingRow,
    ProductDetailPage,
    VariantRow,
)

logger = logging.getLogger(__name__)


@contextmanager
def translate_errors(action: str):
    """Re-raise Playwright errors as InteractionTimeout / InteractionError."""
    try:
        yield
    except PlaywrightTimeoutError as e:
        raise InteractionTimeout(f"{action}: {e.message}") from e
    except PlaywrightError as e:
        raise InteractionError(f"{action}: {e.message}") from e


class _PlaywrightPage:
    """Navigation and settle waits shared by both page objects."""

    def __init__(self, page: Page):
        self.page = page

    def open(self, url: str) -> None:
        with translate_errors(f"navigate to {url}"):
            self.page.goto(url)

    def pause(self, milliseconds: int) -> None:
        if milliseconds > 0:
            self.page.wait_for_timeout(milliseconds)


class PlaywrightListingRow(ListingRow):

    def __init__(self, handle: ElementHandle):
        self.handle = handle

    def is_listing_removed(self) -> bool:
        with translate_errors("check removed tag"):
            return self.handle.query_selector(selectors.LISTING_REMOVED_TAG) is not None

    def _href(self, selector: str, timeout_ms: int) -> Optional[str]:
        with translate_errors(f"find {selector}"):
            link = self.handle.wait_for_selector(selector, timeout=timeout_ms)
            return link.get_attribute("href") if link else None

    def internal_ref(self, timeout_ms: int) -> Optional[str]:
        return self._href(selectors.LISTING_INTERNAL_LINK, timeout_ms)

    def external_ref(self, timeout_ms: int) -> Optional[str]:
        return self._href(selectors.LISTING_EXTERNAL_LINK, timeout_ms)


class PlaywrightListingPage(_PlaywrightPage, ListingPage):

    def wait_for_content(self, timeout_ms: int) -> None:
        with translate_errors("wait for listing rows or empty state"):
            rows = self.page.locator(selectors.LISTING_ROW)
            empty_state = self.page.locator(selectors.LISTING_EMPTY_STATE)
            rows.or_(empty_state).first.wait_for(state="visible", timeout=timeout_ms)

    def has_empty_state(self) -> bool:
        with translate_errors("check empty state"):
            return self.page.query_selector(selectors.LISTING_EMPTY_STATE) is not None

    def rows(self) -> List[ListingRow]:
        with translate_errors("query listing rows"):
            handles = self.page.query_selector_all(selectors.LISTING_ROW)
        return [PlaywrightListingRow(handle) for handle in handles]


class PlaywrightVariantRow(VariantRow):

    def __init__(self, handle: ElementHandle):
        self.handle = handle

    def _sku_input(self) -> Optional[ElementHandle]:
        with translate_errors("find SKU input"):
            return self.handle.query_selector(selectors.VARIANT_SKU_INPUT)

    def sku(self) -> Optional[str]:
        sku_input = self._sku_input()
        if sku_input is None:
            return None
        with translate_errors("read SKU"):
            return sku_input.get_attribute("value")

    def row_id(self) -> Optional[str]:
        sku_input = self._sku_input()
        if sku_input is None:
            return None
        with translate_errors("read SKU input id"):
            input_id = sku_input.get_attribute("id") or ""
        return input_id.replace(selectors.VARIANT_SKU_ID_PREFIX, "") or None

    def open_calculator(self) -> bool:
        row_id = self.row_id()
        if row_id is None:
            return False
        with translate_errors("open profit calculator"):
            button = self.handle.query_selector(
                selectors.VARIANT_CALCULATOR_BUTTON.format(row_id=row_id)
            )
            if button is None:
                return False
            button.click()
        return True


class PlaywrightProductDetailPage(_PlaywrightPage, ProductDetailPage):

    def _click_when_visible(self, selector: str, timeout_ms: int, action: str) -> None:
        with translate_errors(action):
            self.page.wait_for_selector(selector, state="visible", timeout=timeout_ms).click()

    def open_prices_tab(self, timeout_ms: int) -> None:
        self._click_when_visible(selectors.PRICES_TAB, timeout_ms, "open prices tab")

    def wait_for_variant_rows(self, timeout_ms: int) -> None:
        with translate_errors("wait for variant rows"):
            self.page.wait_for_selector(selectors.VARIANT_ROW, state="visible", timeout=timeout_ms)

    def variant_rows(self) -> List[VariantRow]:
        with translate_errors("query variant rows"):
            handles = self.page.query_selector_all(selectors.VARIANT_ROW)
        return [PlaywrightVariantRow(handle) for handle in handles]

    def missing_calculator_fields(self, fields: List[CalculatorField]) -> List[CalculatorField]:
        with translate_errors("check calculator fields"):
            return [
                field for field in fields
                if self.page.query_selector(selectors.CALCULATOR_FIELDS[field.value]) is None
            ]

    def fill_calculator_field(self, field: CalculatorField, value: str) -> None:
        with translate_errors(f"fill {field.value}"):
            self.page.fill(selectors.CALCULATOR_FIELDS[field.value], value)

    def apply_calculation(self) -> bool:
        with translate_errors("apply calculation"):
            button = self.page.query_selector(selectors.CALCULATOR_APPLY_BUTTON)
            if button is None:
                return False
            button.click()
        return True

    def click_main_save(self, timeout_ms: int) -> None:
        self._click_when_visible(selectors.MAIN_SAVE_BUTTON, timeout_ms, "click main save")

    def confirm_ignore_cost(self, timeout_ms: int) -> bool:
        try:
            self._click_when_visible(selectors.IGNORE_COST_LABEL, timeout_ms, "confirm ignore cost")
        except InteractionTimeout:
            return False
        return True

    def click_final_save(self, timeout_ms: int) -> None:
        self._click_when_visible(selectors.FINAL_SAVE_BUTTON, timeout_ms, "click final save")

    def wait_for_listing(self, timeout_ms: int) -> None:
        with translate_errors("wait for listing after save"):
            self.page.wait_for_url(selectors.LISTING_URL_GLOB, timeout=timeout_ms)
            self.page.wait_for_load_state()
