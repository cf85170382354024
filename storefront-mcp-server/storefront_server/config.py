"""Shopify storefront configuration."""

import os
from typing import Optional

from pydantic import BaseModel, Field

# Values shipped in example env files; treated as "not configured"
PLACEHOLDER_DOMAIN = "your-shop.myshopify.com"
PLACEHOLDER_ACCESS_TOKEN = "your-storefront-access-token"

DEFAULT_API_VERSION = "2023-10"
DEFAULT_TIMEOUT = 30.0


class ShopifyConfig(BaseModel):
    """Connection settings for the Shopify Storefront API."""

    domain: Optional[str] = Field(None, description="Shop domain, e.g. my-shop.myshopify.com")
    storefront_access_token: Optional[str] = Field(None, description="Storefront API access token")
    api_version: str = Field(default=DEFAULT_API_VERSION, description="Storefront API version")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="HTTP timeout in seconds")

    @classmethod
    def from_env(cls) -> "ShopifyConfig":
        """Load configuration from environment variables."""
        return cls(
            domain=os.environ.get("SHOPIFY_DOMAIN"),
            storefront_access_token=os.environ.get("SHOPIFY_STOREFRONT_ACCESS_TOKEN"),
            api_version=os.environ.get("SHOPIFY_API_VERSION") or DEFAULT_API_VERSION,
            timeout=float(os.environ.get("SHOPIFY_TIMEOUT") or DEFAULT_TIMEOUT),
        )

    @property
    def is_configured(self) -> bool:
        """True when both settings are present and are not the placeholders."""
        domain = (self.domain or "").strip()
        token = (self.storefront_access_token or "").strip()
        return bool(
            domain
            and token
            and domain != PLACEHOLDER_DOMAIN
            and token != PLACEHOLDER_ACCESS_TOKEN
        )

    @property
    def api_url(self) -> Optional[str]:
        if not self.is_configured:
            return None
        return f"https://{self.domain.strip()}/api/{self.api_version}/graphql.json"
