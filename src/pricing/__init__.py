"""
Pricing modules.

Modules:
    rules    - Tiered pricing rule engine (price -> calculator parameters)
    resolver - Client for the remote price lookup service
"""

from .resolver import PriceLookupClient, ResolutionFailure, ResolutionResult
from .rules import (
    PricingRuleEngine,
    PricingTier,
    derive_parameters,
    format_price,
    minor_to_major,
    tier_from_dict,
)

__all__ = [
    # Lookup
    'PriceLookupClient',
    'ResolutionFailure',
    'ResolutionResult',
    # Rules
    'PricingRuleEngine',
    'PricingTier',
    'derive_parameters',
    'format_price',
    'minor_to_major',
    'tier_from_dict',
]
