"""Shared test fixtures."""

from decimal import Decimal

import pytest

from src.common.settings import AutomationSettings
from src.models import PricingParameters, ProductLink
from src.pricing.rules import PricingRuleEngine, PricingTier

EDIT_URL = "https://app.dropi.com.br/editar/produto/{}"
ITEM_URL = "https://pt.aliexpress.com/item/{}.html"


@pytest.fixture
def fast_settings():
    """Settings with every wait and delay disabled."""
    return AutomationSettings(
        initial_load_ms=0,
        listing_settle_ms=0,
        variant_settle_ms=0,
        calculator_settle_ms=0,
        recalculation_settle_ms=0,
        apply_settle_ms=0,
        main_save_settle_ms=0,
        confirmation_settle_ms=0,
        post_save_settle_ms=0,
        retry_delay=0,
        cooldown=0,
    )


@pytest.fixture
def sample_tiers():
    """Small tier table: up to 100, up to 200, above."""
    return [
        PricingTier(
            upper_bound=Decimal("100.00"),
            parameters=PricingParameters("10,00", "30,00", "20,00", "24,00"),
            label="0-100",
        ),
        PricingTier(
            upper_bound=Decimal("200.00"),
            parameters=PricingParameters("10,00", "25,00", "15,00", "00,00"),
            label="101-200",
        ),
        PricingTier(
            upper_bound=None,
            parameters=PricingParameters("7,00", "10,00", "7,00", "00,00"),
            label="above 200",
        ),
    ]


@pytest.fixture
def engine(sample_tiers):
    return PricingRuleEngine(sample_tiers)


@pytest.fixture
def make_link():
    """Factory for ProductLinks with realistic URLs."""
    def _make(product_id: int = 1) -> ProductLink:
        return ProductLink(
            internal_ref=EDIT_URL.format(product_id),
            external_ref=ITEM_URL.format(1005000000 + product_id),
        )
    return _make
