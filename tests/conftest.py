"""
Pytest fixtures for the Kivio ecommerce client tests

The storefront is faked with httpx.MockTransport so every layer above the
transport runs for real.

Author: Kivio
Date: 2026-03-05
"""
import httpx
import pytest

from kivio_ecommerce.connectors.ecommerce_connector import EcommerceConnector
from kivio_ecommerce.domain.integration import IntegrationConfig, IntegrationResponse

BASE_URL = "https://shop.test"
API_KEY = "test-token"


@pytest.fixture
def base_url():
    return BASE_URL


@pytest.fixture
def api_key():
    return API_KEY


@pytest.fixture
def fake_storefront():
    """
    Provides a factory that wires an EcommerceConnector to a request handler

    Usage:
        connector, requests = fake_storefront(handler)

    Every request the connector sends is appended to `requests` before the
    handler sees it.
    """
    def build(handler):
        requests = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(recording_handler))
        return EcommerceConnector(client), requests

    return build


@pytest.fixture
def make_product():
    """Provides a factory for storefront listing products"""
    def build(product_id: int, published: bool = True, stock: int = 5, images=None):
        return {
            "id": product_id,
            "name": f"Product {product_id}",
            "short_description": f"Short description {product_id}",
            "stock_quantity": stock,
            "published": published,
            "images": images if images is not None else [{"src": f"https://cdn.test/{product_id}.jpg"}],
        }

    return build


@pytest.fixture
def make_integration():
    """Provides a factory for registry integrations"""
    def build(type_="kivio_ecommerce", status="Active", configs=None, integration_id="int-1"):
        return IntegrationResponse(
            integration_id=integration_id,
            pos_id="pos-1",
            name="Storefront",
            type=type_,
            status=status,
            configs=[IntegrationConfig(key=k, value=v) for k, v in (configs or [])],
        )

    return build


@pytest.fixture
def storefront_configs():
    return [
        ("apiUrl", BASE_URL),
        ("username", "merchant"),
        ("password", "secret"),
    ]
