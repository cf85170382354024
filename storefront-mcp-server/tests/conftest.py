"""Shared fixtures for storefront tests."""

import json

import httpx
import pytest

from storefront_server.config import ShopifyConfig
from storefront_server.shopify_client import StorefrontClient

SHOP_DOMAIN = "test-shop.myshopify.com"
ACCESS_TOKEN = "test-token"


def products_payload(price: str = "1999.00") -> dict:
    """Storefront API response for the products query, edge/node shaped."""
    return {
        "data": {
            "products": {
                "edges": [
                    {
                        "node": {
                            "id": "gid://shopify/Product/1",
                            "title": "Linen Shirt",
                            "handle": "linen-shirt",
                            "description": "Breathable linen shirt.",
                            "images": {
                                "edges": [
                                    {"node": {"url": "https://cdn.example.com/shirt-front.jpg", "altText": "Front"}},
                                    {"node": {"url": "https://cdn.example.com/shirt-back.jpg", "altText": None}},
                                ]
                            },
                            "variants": {
                                "edges": [
                                    {
                                        "node": {
                                            "id": "gid://shopify/ProductVariant/11",
                                            "title": "M / Blue",
                                            "price": {"amount": price},
                                            "availableForSale": True,
                                        }
                                    },
                                    {
                                        "node": {
                                            "id": "gid://shopify/ProductVariant/12",
                                            "title": "L / Blue",
                                            "price": {"amount": price},
                                            "availableForSale": False,
                                        }
                                    },
                                ]
                            },
                        }
                    }
                ]
            }
        }
    }


def checkout_payload(web_url: str = "https://test-shop.myshopify.com/checkouts/abc") -> dict:
    return {
        "data": {
            "checkoutCreate": {
                "checkout": {
                    "id": "gid://shopify/Checkout/abc",
                    "webUrl": web_url,
                    "totalPrice": {"amount": "3998.00"},
                    "lineItems": {
                        "edges": [
                            {"node": {"id": "gid://shopify/CheckoutLineItem/1", "title": "Linen Shirt", "quantity": 2}},
                        ]
                    },
                },
                "checkoutUserErrors": [],
            }
        }
    }


MALFORMED_CHECKOUT_IDS = ["null-result", "list-body", "list-data", "string-errors", "user-error-without-message"]


def malformed_checkout_responses() -> list:
    """Checkout replies that are valid HTTP but not the expected GraphQL shape."""
    return [
        {"data": {"checkoutCreate": None}},
        httpx.Response(200, json=[1, 2]),
        {"data": [1]},
        {"errors": "Throttled"},
        {"data": {"checkoutCreate": {"checkout": None, "checkoutUserErrors": [{"field": None}]}}},
    ]


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays canned responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        if isinstance(response, httpx.Response):
            return response
        return httpx.Response(200, json=response)

    def body(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def demo_config() -> ShopifyConfig:
    return ShopifyConfig()


@pytest.fixture
def shop_config() -> ShopifyConfig:
    return ShopifyConfig(domain=SHOP_DOMAIN, storefront_access_token=ACCESS_TOKEN)


@pytest.fixture
def demo_client(demo_config) -> StorefrontClient:
    return StorefrontClient(demo_config)


@pytest.fixture
def make_client(shop_config):
    """Build a configured client whose requests are served by a RecordingHandler."""

    def factory(*responses) -> tuple[StorefrontClient, RecordingHandler]:
        handler = RecordingHandler(*responses)
        client = StorefrontClient(shop_config, transport=httpx.MockTransport(handler))
        return client, handler

    return factory


@pytest.fixture(autouse=True)
def clear_shopify_env(monkeypatch):
    """Keep tests independent of the developer's environment."""
    for name in (
        "SHOPIFY_DOMAIN",
        "SHOPIFY_STOREFRONT_ACCESS_TOKEN",
        "SHOPIFY_API_VERSION",
        "SHOPIFY_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
