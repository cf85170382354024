"""Tests for the MCP tool handlers."""

import asyncio
from typing import Optional

import pytest

from storefront_server import server
from storefront_server.mock_catalog import get_mock_products
from storefront_server.models import CartLineItem
from storefront_server.session import StorefrontSession

from .conftest import checkout_payload


@pytest.fixture
def session(demo_client, monkeypatch):
    session = StorefrontSession(client=demo_client)
    monkeypatch.setattr(server, "session", session, raising=False)
    return session


def call(name: str, arguments: Optional[dict] = None) -> str:
    result = asyncio.run(server.call_tool(name, arguments or {}))
    return result[0].text


class TestListTools:
    def test_tool_names(self):
        tools = asyncio.run(server.list_tools())

        assert [tool.name for tool in tools] == [
            "storefront_list_products",
            "storefront_get_product",
            "storefront_add_to_cart",
            "storefront_update_quantity",
            "storefront_remove_from_cart",
            "storefront_clear_cart",
            "storefront_get_cart",
            "storefront_checkout",
        ]


class TestCallTool:
    def test_list_products(self, session):
        text = call("storefront_list_products")

        assert text.startswith("Found 6 product(s): (demo catalog)")
        assert "[variant-3] - out of stock" in text

    def test_list_products_with_query(self, session):
        text = call("storefront_list_products", {"query": "coffee"})

        assert "Found 1 product(s)" in text
        assert "Organic Coffee Beans" in text

    def test_get_product(self, session):
        assert '"handle": "leather-crossbody-bag"' in call("storefront_get_product", {"handle": "mock-4"})
        assert call("storefront_get_product", {"handle": "nope"}) == "Product not found: nope"

    def test_cart_flow(self, session):
        assert call("storefront_get_cart") == "Your cart is empty"

        text = call("storefront_add_to_cart", {"variant_id": "variant-1", "quantity": 2})
        assert text.startswith("✅ Added Premium Cotton T-Shirt")

        text = call("storefront_get_cart")
        assert "Shopping Cart (2 items)" in text
        assert "Total: ₹5,897.64" in text

        call("storefront_update_quantity", {"variant_id": "variant-1", "quantity": 0})
        assert session.cart.is_empty

    def test_add_unknown_variant(self, session):
        assert call("storefront_add_to_cart", {"variant_id": "variant-0"}).startswith("❌ Unknown variant")

    def test_remove_and_clear(self, session):
        call("storefront_add_to_cart", {"variant_id": "variant-1"})
        call("storefront_add_to_cart", {"variant_id": "variant-5"})

        call("storefront_remove_from_cart", {"variant_id": "variant-1"})
        assert [item.variant_id for item in session.cart.items] == ["variant-5"]

        assert call("storefront_clear_cart") == "✅ Cart cleared"
        assert session.cart.is_empty

    def test_checkout_demo_mode(self, session):
        call("storefront_add_to_cart", {"variant_id": "variant-1"})

        assert "Demo mode" in call("storefront_checkout")
        assert len(session.cart) == 1

    def test_checkout(self, make_client, monkeypatch):
        client, _ = make_client(checkout_payload(web_url="https://shop.example/checkouts/9"))
        configured = StorefrontSession(client=client)
        monkeypatch.setattr(server, "session", configured, raising=False)
        configured.cart.add_to_cart(CartLineItem.from_product(get_mock_products()[0]))

        assert call("storefront_checkout").endswith("https://shop.example/checkouts/9")

    def test_unknown_tool(self, session):
        assert call("storefront_bogus") == "Unknown tool: storefront_bogus"

    def test_missing_argument_is_reported(self, session):
        assert call("storefront_remove_from_cart", {}).startswith("Error:")
