"""
Repricing data models.

Pure data classes for the values that flow through a repricing run.
No business logic - only data structure definitions and their invariants.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

# Percent / currency values as the back-office forms expect them: "10,00"
COMMA_DECIMAL_PATTERN = re.compile(r'^\d+,\d{2}$')


@dataclass
class ProductLink:
    """
    A catalog entry paired with its external marketplace listing.

    internal_ref and external_ref are fixed when the harvester creates the
    link. sku is filled in by the commit workflow when a variant row is
    found (last write wins for products with several variants).
    """
    internal_ref: str
    external_ref: str
    sku: Optional[str] = None

    def __post_init__(self):
        """Only links with both references are eligible for commit."""
        if not self.internal_ref:
            raise ValueError("Internal reference is required")
        if not self.external_ref:
            raise ValueError("External reference is required")


@dataclass(frozen=True)
class PricedVariant:
    """Price resolved by the lookup service for one variant row."""
    sku: str
    resolved_price_minor_units: int

    def __post_init__(self):
        if self.resolved_price_minor_units < 0:
            raise ValueError("Resolved price cannot be negative")


@dataclass(frozen=True)
class PricingParameters:
    """
    Margin/markup values written into the product calculator.

    All values are comma-decimal strings with two fraction digits
    ("10,00"). They are written verbatim into the form fields.
    """
    marketing_percent: str
    markup_percent: str
    promo_markup_percent: str
    shipping_price: Optional[str] = None

    def __post_init__(self):
        values = {
            'marketing_percent': self.marketing_percent,
            'markup_percent': self.markup_percent,
            'promo_markup_percent': self.promo_markup_percent,
        }
        if self.shipping_price is not None:
            values['shipping_price'] = self.shipping_price

        for name, value in values.items():
            if not isinstance(value, str) or not COMMA_DECIMAL_PATTERN.match(value):
                raise ValueError(f"{name} must look like '10,00', got {value!r}")


@dataclass
class BatchOutcome:
    """Summary of one batch run."""
    processed_count: int = 0
    failed_count: int = 0
    threshold: float = 0.0
    failed_links: List[ProductLink] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return self.failed_count > 0
