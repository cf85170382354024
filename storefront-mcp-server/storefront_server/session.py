"""Per-process storefront state: client, catalog cache and cart."""

import logging
from typing import Optional

from .cart import CartStore
from .config import ShopifyConfig
from .models import CartLineItem, Product, Variant
from .shopify_client import StorefrontClient

logger = logging.getLogger(__name__)


class StorefrontSession:
    """Wires one storefront client to one cart and caches the catalog."""

    def __init__(
        self,
        config: Optional[ShopifyConfig] = None,
        client: Optional[StorefrontClient] = None,
    ) -> None:
        if client is None:
            client = StorefrontClient(config or ShopifyConfig.from_env())
        self.client = client
        self.cart = CartStore(client)
        self._products: Optional[list[Product]] = None

    @property
    def is_demo_mode(self) -> bool:
        return not self.client.is_configured

    async def get_products(self, refresh: bool = False) -> list[Product]:
        """Return the catalog, fetching it on first use or when refresh is requested."""
        if self._products is None or refresh:
            self._products = await self.client.fetch_catalog()
            logger.info(f"Catalog loaded: {len(self._products)} products")
        return self._products

    async def find_product(self, handle: str) -> Optional[Product]:
        products = await self.get_products()
        return next((p for p in products if p.handle == handle or p.id == handle), None)

    async def find_variant(self, variant_id: str) -> Optional[tuple[Product, Variant]]:
        for product in await self.get_products():
            variant = product.get_variant(variant_id)
            if variant is not None:
                return product, variant
        return None

    async def add_variant(self, variant_id: str, quantity: int = 1) -> CartLineItem:
        """
        Add a catalog variant to the cart.

        Args:
            variant_id: Variant ID from the catalog
            quantity: Quantity to add

        Returns:
            The line item that was added

        Raises:
            ValueError: If the variant is unknown or unavailable, or quantity < 1
        """
        if quantity < 1:
            raise ValueError(f"Quantity must be at least 1, got {quantity}")

        match = await self.find_variant(variant_id)
        if match is None:
            raise ValueError(f"Unknown variant: {variant_id}")

        product, variant = match
        if not variant.available:
            raise ValueError(f"{product.title} ({variant.title}) is out of stock")

        item = CartLineItem.from_product(product, variant, quantity)
        self.cart.add_to_cart(item)
        logger.info(f"Added {variant_id} to cart (qty: {quantity})")
        return item

    async def close(self) -> None:
        await self.client.close()
