"""
Price Lookup Client

Client for the remote price lookup service. Resolves the current
supplier price of one variant from its SKU and marketplace link.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

import requests

from ..common.settings import get_product_find_url
from ..models import PricedVariant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionFailure:
    """No price available for a variant. Always recoverable by the caller."""
    sku: str
    external_ref: str
    reason: str


ResolutionResult = Union[PricedVariant, ResolutionFailure]


class PriceLookupClient:
    """
    Client for POST {API_URL}/api/products/find.

    Handles:
    - JSON request/response
    - Error handling (every failure becomes a ResolutionFailure)

    There is no retry here; the batch controller retries whole products.

    Usage:
        with PriceLookupClient() as client:
            result = client.resolve("SKU-1", "https://pt.aliexpress.com/item/1.html")
            if isinstance(result, PricedVariant):
                ...
    """

    def __init__(self, endpoint: Optional[str] = None, timeout: int = 30):
        """
        Initialize the client.

        Args:
            endpoint: Full lookup URL (default: API_URL + /api/products/find)
            timeout: Request timeout in seconds
        """
        self.endpoint = endpoint or get_product_find_url()
        self.timeout = timeout

        self.session = requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json; charset=utf-8",
            "Accept": "application/json",
        })

        self.requests_made = 0

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def _failure(self, sku: str, external_ref: str, reason: str) -> ResolutionFailure:
        logger.error("Price lookup failed for SKU %s: %s", sku, reason)
        return ResolutionFailure(sku=sku, external_ref=external_ref, reason=reason)

    def resolve(self, sku: str, external_ref: str) -> ResolutionResult:
        """
        Resolve the supplier price of one variant.

        Args:
            sku: Variant SKU from the product's prices tab
            external_ref: Marketplace listing URL

        Returns:
            PricedVariant on a 2xx response with an integer 'price' (minor units),
            ResolutionFailure otherwise
        """
        payload = {"id": sku, "link": external_ref}
        logger.info("Requesting price for SKU %s from %s", sku, self.endpoint)
        logger.debug("Request body: %s", payload)

        self.requests_made += 1
        try:
            response = self.session.post(self.endpoint, json=payload, timeout=self.timeout)
        except requests.exceptions.Timeout:
            return self._failure(sku, external_ref, "request timeout")
        except requests.exceptions.RequestException as e:
            return self._failure(sku, external_ref, f"request failed: {e}")

        logger.debug("Response status: %d", response.status_code)

        if not 200 <= response.status_code < 300:
            return self._failure(
                sku, external_ref,
                f"HTTP {response.status_code}: {response.text[:200]}"
            )

        try:
            body = response.json()
        except ValueError:
            return self._failure(sku, external_ref, f"invalid JSON body: {response.text[:200]}")

        price = body.get("price") if isinstance(body, dict) else None
        if isinstance(price, bool) or not isinstance(price, int):
            return self._failure(sku, external_ref, f"missing or non-integer price: {price!r}")
        if price < 0:
            return self._failure(sku, external_ref, f"negative price: {price}")

        logger.info("Resolved price for SKU %s: %d", sku, price)
        return PricedVariant(sku=sku, resolved_price_minor_units=price)
