"""Tests for the storefront session."""

import asyncio
from decimal import Decimal

import pytest

from storefront_server.session import StorefrontSession

from .conftest import products_payload


class TestCatalogCache:
    def test_demo_catalog(self, demo_client):
        session = StorefrontSession(client=demo_client)

        products = asyncio.run(session.get_products())

        assert session.is_demo_mode
        assert len(products) == 6

    def test_catalog_is_fetched_once(self, make_client):
        client, handler = make_client(products_payload())
        session = StorefrontSession(client=client)

        asyncio.run(session.get_products())
        asyncio.run(session.get_products())

        assert len(handler.requests) == 1

    def test_refresh_refetches(self, make_client):
        client, handler = make_client(products_payload("100.00"), products_payload("200.00"))
        session = StorefrontSession(client=client)

        asyncio.run(session.get_products())
        products = asyncio.run(session.get_products(refresh=True))

        assert len(handler.requests) == 2
        assert products[0].variants[0].price == Decimal("200.00")

    def test_find_product_by_handle_or_id(self, demo_client):
        session = StorefrontSession(client=demo_client)

        assert asyncio.run(session.find_product("organic-coffee-beans")).id == "mock-6"
        assert asyncio.run(session.find_product("mock-6")).handle == "organic-coffee-beans"
        assert asyncio.run(session.find_product("missing")) is None

    def test_builds_client_from_environment(self):
        session = StorefrontSession()

        assert session.is_demo_mode
        asyncio.run(session.close())


class TestAddVariant:
    def test_adds_snapshot_of_variant(self, demo_client):
        session = StorefrontSession(client=demo_client)

        item = asyncio.run(session.add_variant("variant-9", 2))

        assert item.product.title == "Stainless Steel Water Bottle"
        assert item.product.price == Decimal("3319.00")
        assert session.cart.get_total_items() == 2

    def test_adding_twice_merges_lines(self, demo_client):
        session = StorefrontSession(client=demo_client)

        asyncio.run(session.add_variant("variant-1", 2))
        asyncio.run(session.add_variant("variant-1", 3))

        assert len(session.cart) == 1
        assert session.cart.items[0].quantity == 5

    def test_unknown_variant(self, demo_client):
        session = StorefrontSession(client=demo_client)

        with pytest.raises(ValueError, match="Unknown variant"):
            asyncio.run(session.add_variant("variant-999"))
        assert session.cart.is_empty

    def test_unavailable_variant(self, demo_client):
        session = StorefrontSession(client=demo_client)

        with pytest.raises(ValueError, match="out of stock"):
            asyncio.run(session.add_variant("variant-3"))
        assert session.cart.is_empty

    def test_quantity_must_be_positive(self, demo_client):
        session = StorefrontSession(client=demo_client)

        with pytest.raises(ValueError, match="at least 1"):
            asyncio.run(session.add_variant("variant-1", 0))

    def test_price_is_kept_after_catalog_refresh(self, make_client):
        client, _ = make_client(products_payload("1999.00"), products_payload("2999.00"))
        session = StorefrontSession(client=client)

        asyncio.run(session.add_variant("gid://shopify/ProductVariant/11", 2))
        asyncio.run(session.get_products(refresh=True))

        assert session.cart.get_total_price() == Decimal("3998.00")
