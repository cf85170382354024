"""Shopify Storefront API client."""

import logging
from collections.abc import Sequence
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from .config import ShopifyConfig
from .mock_catalog import get_mock_products
from .models import (
    CheckoutLineItem,
    CheckoutSession,
    CheckoutSessionLine,
    CheckoutUserError,
    Product,
    ProductImage,
    Variant,
)

logger = logging.getLogger(__name__)

PRODUCTS_PAGE_SIZE = 20

GET_PRODUCTS_QUERY = """
  query GetProducts($first: Int!) {
    products(first: $first) {
      edges {
        node {
          id
          title
          handle
          description
          images(first: 5) {
            edges {
              node {
                url
                altText
              }
            }
          }
          variants(first: 10) {
            edges {
              node {
                id
                title
                price {
                  amount
                }
                availableForSale
              }
            }
          }
        }
      }
    }
  }
"""

CREATE_CHECKOUT_MUTATION = """
  mutation CreateCheckout($input: CheckoutCreateInput!) {
    checkoutCreate(input: $input) {
      checkout {
        id
        webUrl
        totalPrice {
          amount
        }
        lineItems(first: 250) {
          edges {
            node {
              id
              title
              quantity
            }
          }
        }
      }
      checkoutUserErrors {
        field
        message
      }
    }
  }
"""

DEMO_MODE_MESSAGE = (
    "Demo mode: Checkout functionality requires Shopify configuration. "
    "Set SHOPIFY_DOMAIN and SHOPIFY_STOREFRONT_ACCESS_TOKEN to enable it."
)


class ShopifyError(Exception):
    """Raised when a Storefront API call fails."""


class CredentialsMissingError(ShopifyError):
    """Raised when a request is attempted without Shopify credentials."""


class DemoModeError(ShopifyError):
    """Raised when checkout is requested while running on the mock catalog."""


class CheckoutUserErrorsError(ShopifyError):
    """Raised when the provider rejects a checkout with user-facing errors."""

    def __init__(self, errors: list[CheckoutUserError]) -> None:
        self.errors = errors
        super().__init__(errors[0].message if errors else "Checkout rejected")


def _edges(connection: Optional[dict[str, Any]]) -> list[dict[str, Any]]:
    """Flatten a GraphQL connection ({edges: [{node}]}) into its nodes."""
    if not connection:
        return []
    return [edge["node"] for edge in connection.get("edges") or []]


def _parse_products(data: dict[str, Any]) -> list[Product]:
    """Map the nested products connection onto flat Product models."""
    products = []
    for node in _edges(data["products"]):
        products.append(
            Product(
                id=node["id"],
                title=node["title"],
                handle=node["handle"],
                description=node.get("description") or "",
                images=[
                    ProductImage(url=image["url"], alt_text=image.get("altText"))
                    for image in _edges(node.get("images"))
                ],
                variants=[
                    Variant(
                        id=variant["id"],
                        title=variant["title"],
                        price=variant["price"]["amount"],
                        available=bool(variant.get("availableForSale")),
                    )
                    for variant in _edges(node.get("variants"))
                ],
            )
        )
    return products


class StorefrontClient:
    """Client for the Shopify Storefront GraphQL API with a mock catalog fallback."""

    def __init__(
        self,
        config: ShopifyConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the storefront client.

        Args:
            config: Shopify connection settings
            transport: Optional httpx transport (used by tests)
        """
        self.config = config
        self.client = httpx.AsyncClient(
            timeout=config.timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    @property
    def is_configured(self) -> bool:
        return self.config.is_configured

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()

    async def _graphql(self, query: str, variables: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Execute a GraphQL request and return its ``data`` object.

        Raises:
            CredentialsMissingError: If Shopify is not configured
            ShopifyError: On transport failure, non-success status or GraphQL errors
        """
        if not self.config.is_configured:
            raise CredentialsMissingError("SHOPIFY_CREDENTIALS_MISSING")

        logger.info(
            f"Fetching from Shopify: domain={self.config.domain}, "
            f"has_token={bool(self.config.storefront_access_token)}"
        )

        try:
            response = await self.client.post(
                self.config.api_url,
                json={"query": query, "variables": variables or {}},
                headers={"X-Shopify-Storefront-Access-Token": self.config.storefront_access_token},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ShopifyError(f"Shopify request failed: {e}") from e

        logger.info(f"Shopify API response status: {response.status_code}")

        if response.is_error:
            logger.error(
                f"Shopify API error: status={response.status_code}, "
                f"reason={response.reason_phrase}, body={response.text[:500]}"
            )
            raise ShopifyError(
                f"Shopify API error! status: {response.status_code} - {response.reason_phrase}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ShopifyError(f"Invalid JSON from Shopify: {e}") from e

        if not isinstance(payload, dict):
            raise ShopifyError(f"Unexpected response from Shopify: {type(payload).__name__}")

        errors = payload.get("errors")
        if errors:
            logger.error(f"GraphQL errors: {errors}")
            first = errors[0] if isinstance(errors, list) else errors
            message = first.get("message") if isinstance(first, dict) else str(first)
            raise ShopifyError(message or "GraphQL error")

        data = payload.get("data") or {}
        if not isinstance(data, dict):
            raise ShopifyError("Unexpected data object from Shopify")
        return data

    async def fetch_catalog(self) -> list[Product]:
        """
        Fetch the product catalog.

        Never raises: without credentials, or on any API failure, the built-in
        mock catalog is returned instead.
        """
        if not self.config.is_configured:
            logger.info("Using mock data - Shopify credentials not configured")
            return get_mock_products()

        try:
            data = await self._graphql(GET_PRODUCTS_QUERY, {"first": PRODUCTS_PAGE_SIZE})
            products = _parse_products(data)
            logger.info(f"Fetched {len(products)} products from Shopify")
            return products
        except Exception as e:
            logger.error(f"Error fetching products from Shopify: {e}")
            logger.info("Shopify API error, falling back to mock data")
            return get_mock_products()

    async def create_checkout(self, line_items: Sequence[CheckoutLineItem]) -> CheckoutSession:
        """
        Create a checkout for the given line items.

        Args:
            line_items: Variant/quantity pairs, in cart order

        Returns:
            The created checkout

        Raises:
            DemoModeError: If Shopify is not configured
            CheckoutUserErrorsError: If Shopify rejects the line items
            ShopifyError: If the request fails
        """
        if not self.config.is_configured:
            logger.info("Simulating checkout - Shopify credentials not configured")
            raise DemoModeError(DEMO_MODE_MESSAGE)

        variables = {
            "input": {
                "lineItems": [
                    {"variantId": item.variant_id, "quantity": item.quantity}
                    for item in line_items
                ],
            },
        }

        try:
            data = await self._graphql(CREATE_CHECKOUT_MUTATION, variables)
            result = data["checkoutCreate"]
            if not isinstance(result, dict):
                raise ShopifyError("Shopify did not return a checkoutCreate result")

            errors = [
                CheckoutUserError(field=error.get("field") or [], message=error["message"])
                for error in result.get("checkoutUserErrors") or []
            ]
            if errors:
                raise CheckoutUserErrorsError(errors)

            checkout = result.get("checkout")
            if not checkout:
                raise ShopifyError("Shopify did not return a checkout")

            session = CheckoutSession(
                id=checkout["id"],
                web_url=checkout["webUrl"],
                total_price=(checkout.get("totalPrice") or {}).get("amount") or "0",
                line_items=[
                    CheckoutSessionLine(id=line["id"], title=line["title"], quantity=line["quantity"])
                    for line in _edges(checkout.get("lineItems"))
                ],
            )
        except ShopifyError as e:
            logger.error(f"Error creating checkout: {e}")
            raise
        except (AttributeError, KeyError, TypeError, ValidationError) as e:
            logger.error(f"Unexpected checkout response: {e}")
            raise ShopifyError(f"Unexpected checkout response from Shopify: {e}") from e

        logger.info(f"Created checkout {session.id}")
        return session

    async def create_checkout_session(self, line_items: Sequence[CheckoutLineItem]) -> str:
        """Create a checkout and return its redirect URL unmodified."""
        session = await self.create_checkout(line_items)
        return session.web_url
