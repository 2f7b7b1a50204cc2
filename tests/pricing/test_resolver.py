"""Tests for src/pricing/resolver.py"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from src.models import PricedVariant
from src.pricing.resolver import PriceLookupClient, ResolutionFailure

SKU = "SKU-RED-M"
LINK = "https://pt.aliexpress.com/item/1005001.html"


@pytest.fixture
def client():
    return PriceLookupClient(endpoint="http://prices.test/api/products/find")


def make_response(status_code=200, body=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


class TestInit:
    def test_default_endpoint_from_env(self, monkeypatch):
        monkeypatch.setenv("API_URL", "http://prices.example:9000")
        c = PriceLookupClient()
        assert c.endpoint == "http://prices.example:9000/api/products/find"

    def test_json_content_type(self, client):
        assert client.session.headers["Content-Type"].startswith("application/json")


class TestResolve:
    def test_success(self, client):
        with patch.object(client.session, "post", return_value=make_response(body={"price": 15000})) as post:
            result = client.resolve(SKU, LINK)

        assert result == PricedVariant(sku=SKU, resolved_price_minor_units=15000)
        post.assert_called_once_with(
            "http://prices.test/api/products/find",
            json={"id": SKU, "link": LINK},
            timeout=30,
        )

    def test_created_status_is_success(self, client):
        with patch.object(client.session, "post", return_value=make_response(201, {"price": 990})):
            assert isinstance(client.resolve(SKU, LINK), PricedVariant)

    def test_extra_fields_ignored(self, client):
        body = {"price": 500, "name": "Mochila", "currency": "BRL"}
        with patch.object(client.session, "post", return_value=make_response(body=body)):
            assert client.resolve(SKU, LINK).resolved_price_minor_units == 500

    @pytest.mark.parametrize("status", [400, 404, 500, 503])
    def test_non_2xx_is_failure(self, client, status):
        with patch.object(client.session, "post", return_value=make_response(status, text="nope")):
            result = client.resolve(SKU, LINK)

        assert isinstance(result, ResolutionFailure)
        assert f"HTTP {status}" in result.reason
        assert result.sku == SKU

    def test_timeout_is_failure(self, client):
        with patch.object(client.session, "post", side_effect=requests.exceptions.Timeout):
            result = client.resolve(SKU, LINK)
        assert isinstance(result, ResolutionFailure)
        assert result.reason == "request timeout"

    def test_connection_error_is_failure(self, client):
        with patch.object(client.session, "post", side_effect=requests.exceptions.ConnectionError("refused")):
            result = client.resolve(SKU, LINK)
        assert isinstance(result, ResolutionFailure)
        assert "refused" in result.reason

    def test_invalid_json_is_failure(self, client):
        response = make_response(body=ValueError("Expecting value"), text="<html>")
        with patch.object(client.session, "post", return_value=response):
            assert isinstance(client.resolve(SKU, LINK), ResolutionFailure)

    @pytest.mark.parametrize("body", [{}, {"price": None}, {"price": "150"}, {"price": 150.5},
                                      {"price": True}, {"price": -1}, [15000]])
    def test_malformed_price_is_failure(self, client, body):
        with patch.object(client.session, "post", return_value=make_response(body=body)):
            assert isinstance(client.resolve(SKU, LINK), ResolutionFailure)

    def test_no_internal_retry(self, client):
        with patch.object(client.session, "post", return_value=make_response(503)) as post:
            client.resolve(SKU, LINK)
        assert post.call_count == 1
        assert client.requests_made == 1


class TestContextManager:
    def test_exit_closes_session(self):
        c = PriceLookupClient(endpoint="http://prices.test")
        with patch.object(c.session, "close") as close:
            with c:
                pass
        close.assert_called_once()
