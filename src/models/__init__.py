"""
Data models for catalog repricing.

This module contains pure data classes with no business logic.
"""

from .product import BatchOutcome, PricedVariant, PricingParameters, ProductLink

__all__ = ['ProductLink', 'PricedVariant', 'PricingParameters', 'BatchOutcome']
