"""Storefront MCP Server - catalog, cart and checkout against a Shopify storefront."""

__version__ = "0.1.0"
