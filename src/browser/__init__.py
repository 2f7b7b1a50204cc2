"""
Browser automation for the seller back-office.

Modules:
    pages            - Page interfaces the workflows depend on
    selectors        - CSS/text selectors of the back-office UI
    playwright_pages - Playwright implementations of the page interfaces
    session          - Scoped persistent browser session
"""

from .pages import (
    CalculatorField,
    InteractionError,
    InteractionTimeout,
    ListingPage,
    ListingRow,
    ProductDetailPage,
    VariantRow,
)

__all__ = [
    'CalculatorField',
    'InteractionError',
    'InteractionTimeout',
    'ListingPage',
    'ListingRow',
    'ProductDetailPage',
    'VariantRow',
]
