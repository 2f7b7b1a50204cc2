"""
Back-office page interfaces.

The harvester and the commit workflow only talk to these interfaces, never
to Playwright directly, so the workflow logic can run against in-memory
fakes. Every wait takes an explicit timeout in milliseconds.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional


class InteractionError(Exception):
    """A browser interaction failed (navigation error, detached element, ...)."""


class InteractionTimeout(InteractionError):
    """An expected element or navigation did not appear within its timeout."""


class CalculatorField(Enum):
    """Inputs of the per-variant profit calculator."""
    PRICE = "price"
    SHIPPING = "shipping"
    MARKETING = "marketing"
    MARKUP = "markup"
    PROMO_MARKUP = "promo_markup"


class BrowserPage(ABC):

    @abstractmethod
    def open(self, url: str) -> None:
        """Navigate to url. Raises InteractionError on navigation failure."""

    @abstractmethod
    def pause(self, milliseconds: int) -> None:
        """Fixed settle wait."""


class ListingRow(ABC):
    """One row of the product listing table."""

    @abstractmethod
    def is_listing_removed(self) -> bool:
        """True if the row carries the 'supplier listing removed' tag."""

    @abstractmethod
    def internal_ref(self, timeout_ms: int) -> Optional[str]:
        """Href of the back-office edit link. Raises InteractionTimeout."""

    @abstractmethod
    def external_ref(self, timeout_ms: int) -> Optional[str]:
        """Href of the marketplace link. Raises InteractionTimeout."""


class ListingPage(BrowserPage):
    """Paginated product listing."""

    @abstractmethod
    def wait_for_content(self, timeout_ms: int) -> None:
        """
        Wait until a row or the empty-state indicator is visible.
        Raises InteractionTimeout if neither appears.
        """

    @abstractmethod
    def has_empty_state(self) -> bool:
        """True if the page shows the explicit 'no products' indicator."""

    @abstractmethod
    def rows(self) -> List[ListingRow]:
        ...


class VariantRow(ABC):
    """One variant row of the product's prices tab."""

    @abstractmethod
    def sku(self) -> Optional[str]:
        """SKU field value, or None if the row has no SKU field."""

    @abstractmethod
    def row_id(self) -> Optional[str]:
        """Identifier used to address the row's own action controls."""

    @abstractmethod
    def open_calculator(self) -> bool:
        """Press the row's profit calculator action. False if it is missing."""


class ProductDetailPage(BrowserPage):
    """Product edit surface with its prices tab and save flow."""

    @abstractmethod
    def open_prices_tab(self, timeout_ms: int) -> None:
        """Raises InteractionTimeout if the tab does not appear."""

    @abstractmethod
    def wait_for_variant_rows(self, timeout_ms: int) -> None:
        """Raises InteractionTimeout if no variant row appears."""

    @abstractmethod
    def variant_rows(self) -> List[VariantRow]:
        ...

    @abstractmethod
    def missing_calculator_fields(self, fields: List[CalculatorField]) -> List[CalculatorField]:
        """Return the subset of fields not present on the page."""

    @abstractmethod
    def fill_calculator_field(self, field: CalculatorField, value: str) -> None:
        ...

    @abstractmethod
    def apply_calculation(self) -> bool:
        """Press the calculator's apply action. False if it is missing."""

    @abstractmethod
    def click_main_save(self, timeout_ms: int) -> None:
        """Raises InteractionTimeout if the save button does not appear."""

    @abstractmethod
    def confirm_ignore_cost(self, timeout_ms: int) -> bool:
        """Acknowledge the 'ignore cost update' step. False if it never appears."""

    @abstractmethod
    def click_final_save(self, timeout_ms: int) -> None:
        """Raises InteractionTimeout if the final save button does not appear."""

    @abstractmethod
    def wait_for_listing(self, timeout_ms: int) -> None:
        """Wait for the return navigation to the listing. Raises InteractionTimeout."""
