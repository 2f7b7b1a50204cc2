"""
Pricing Rule Engine

Maps a resolved supplier price to the marketing/markup parameters the
back-office calculator expects. The tier table lives in
config/pricing_tiers.yaml; this module only validates and looks it up.
"""

import logging
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Sequence

from ..common.config_loader import load_manage_shipping, load_pricing_tiers
from ..common.constants import MINOR_UNITS_PER_MAJOR
from ..models import PricingParameters

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class PricingTier:
    """One row of the tier table. upper_bound=None marks the open last tier."""
    upper_bound: Optional[Decimal]
    parameters: PricingParameters
    label: str = ""

    def contains(self, price: Decimal) -> bool:
        return self.upper_bound is None or price <= self.upper_bound


def minor_to_major(minor_units: int) -> Decimal:
    """Convert minor currency units (centavos) to a two-decimal amount."""
    return (Decimal(minor_units) / MINOR_UNITS_PER_MAJOR).quantize(TWO_PLACES)


def format_price(price: Decimal) -> str:
    """
    Format a price for the calculator's price field.

    The price field takes a dot separator ("150.00"), unlike the
    percent fields which take a comma.
    """
    return f"{Decimal(price).quantize(TWO_PLACES):.2f}"


def tier_from_dict(row: Dict[str, Any]) -> PricingTier:
    """
    Build a PricingTier from one config row.

    Raises:
        ValueError: If the bound is not a number or a value is malformed
    """
    raw_bound = row.get('up_to')
    upper_bound = None
    if raw_bound is not None:
        try:
            upper_bound = Decimal(str(raw_bound))
        except InvalidOperation:
            raise ValueError(f"Invalid tier bound: {raw_bound!r}") from None

    parameters = PricingParameters(
        marketing_percent=row.get('marketing_percent'),
        markup_percent=row.get('markup_percent'),
        promo_markup_percent=row.get('promo_markup_percent'),
        shipping_price=row.get('shipping_price'),
    )
    return PricingTier(upper_bound=upper_bound, parameters=parameters, label=row.get('label', ''))


class PricingRuleEngine:
    """
    Tier lookup over an ascending table with an open-ended last tier.

    Pure and total: every non-negative price maps to exactly one tier,
    and a price equal to a bound belongs to that (lower) tier.

    Usage:
        engine = PricingRuleEngine.from_config()
        params = engine.derive_parameters(Decimal("150.00"))
        params.markup_percent  # "25,00"
    """

    def __init__(self, tiers: Sequence[PricingTier], manage_shipping: bool = True):
        """
        Args:
            tiers: Tiers in ascending bound order, last one open-ended
            manage_shipping: If False, shipping_price is dropped from results

        Raises:
            ValueError: If the table is empty, unordered, or not open-ended
        """
        if not tiers:
            raise ValueError("Pricing tier table is empty")
        if tiers[-1].upper_bound is not None:
            raise ValueError("Last pricing tier must be open-ended (no 'up_to')")

        bounds = [tier.upper_bound for tier in tiers[:-1]]
        if any(bound is None for bound in bounds):
            raise ValueError("Only the last pricing tier may be open-ended")
        if any(lower >= upper for lower, upper in zip(bounds, bounds[1:])):
            raise ValueError(f"Pricing tier bounds must be strictly ascending: {bounds}")

        self.tiers: List[PricingTier] = list(tiers)
        self.manage_shipping = manage_shipping

    @classmethod
    def from_config(cls) -> "PricingRuleEngine":
        """Build the engine from config/pricing_tiers.yaml."""
        tiers = [tier_from_dict(row) for row in load_pricing_tiers()]
        return cls(tiers, manage_shipping=load_manage_shipping())

    def find_tier(self, price: Decimal) -> PricingTier:
        for tier in self.tiers:
            if tier.contains(price):
                return tier
        # Unreachable: the last tier is open-ended
        return self.tiers[-1]

    def derive_parameters(self, price: Decimal) -> PricingParameters:
        """
        Derive calculator parameters for a supplier price.

        Args:
            price: Price in major units (e.g. Decimal("150.00"))

        Returns:
            PricingParameters of the matching tier
        """
        tier = self.find_tier(Decimal(price))
        logger.debug("Price %s falls in tier %s", price, tier.label or tier.upper_bound)

        if not self.manage_shipping and tier.parameters.shipping_price is not None:
            return replace(tier.parameters, shipping_price=None)
        return tier.parameters


_default_engine: Optional[PricingRuleEngine] = None


def derive_parameters(price: Decimal, engine: Optional[PricingRuleEngine] = None) -> PricingParameters:
    """Derive parameters using the given engine or the configured default table."""
    global _default_engine
    if engine is None:
        if _default_engine is None:
            _default_engine = PricingRuleEngine.from_config()
        engine = _default_engine
    return engine.derive_parameters(price)
