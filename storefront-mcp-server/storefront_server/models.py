"""Data models for storefront entities."""

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ProductImage(BaseModel):
    """Represents a product image."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(description="Image URL")
    alt_text: Optional[str] = Field(None, description="Alternative text")


class Variant(BaseModel):
    """A purchasable configuration of a product (size, color, etc.)."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Variant ID, unique across the catalog")
    title: str = Field(description="Variant title, e.g. 'Small / Black'")
    price: Decimal = Field(description="Unit price in the display currency")
    available: bool = Field(default=True, description="Whether the variant can be bought")


class Product(BaseModel):
    """Represents a product from the storefront catalog."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Product ID")
    title: str = Field(description="Product title")
    handle: str = Field(description="URL slug")
    description: str = Field(default="", description="Product description")
    images: list[ProductImage] = Field(default_factory=list, description="Product images")
    variants: list[Variant] = Field(default_factory=list, description="Product variants")

    @property
    def first_image(self) -> Optional[ProductImage]:
        return self.images[0] if self.images else None

    def get_variant(self, variant_id: str) -> Optional[Variant]:
        """Return the variant with the given ID, or None."""
        return next((v for v in self.variants if v.id == variant_id), None)


class CartProduct(BaseModel):
    """Product snapshot stored on a cart line, captured when the line is added."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    handle: str
    image: Optional[ProductImage] = None
    price: Decimal = Field(description="Unit price of the selected variant at add-time")


class CartLineItem(BaseModel):
    """Represents one line in the shopping cart."""

    model_config = ConfigDict(frozen=True)

    variant_id: str = Field(description="Variant ID, unique per cart")
    quantity: int = Field(ge=1, description="Quantity of the variant")
    product: CartProduct

    @classmethod
    def from_product(
        cls, product: Product, variant: Optional[Variant] = None, quantity: int = 1
    ) -> "CartLineItem":
        """
        Build a cart line from a catalog product.

        Args:
            product: Catalog product
            variant: Selected variant (default: the product's first variant)
            quantity: Quantity to add

        Raises:
            ValueError: If the product has no variants
        """
        if variant is None:
            if not product.variants:
                raise ValueError(f"Product {product.id} has no variants")
            variant = product.variants[0]

        return cls(
            variant_id=variant.id,
            quantity=quantity,
            product=CartProduct(
                id=product.id,
                title=product.title,
                handle=product.handle,
                image=product.first_image,
                price=variant.price,
            ),
        )

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity


class CheckoutLineItem(BaseModel):
    """A variant/quantity pair sent to the checkout provider."""

    variant_id: str
    quantity: int = Field(ge=1)


class CheckoutUserError(BaseModel):
    """User-facing validation error returned by the checkout provider."""

    field: list[str] = Field(default_factory=list)
    message: str


class CheckoutSessionLine(BaseModel):
    """Line item echoed back on a created checkout."""

    id: str
    title: str
    quantity: int


class CheckoutSession(BaseModel):
    """A checkout created by the provider."""

    id: str = Field(description="Checkout ID")
    web_url: str = Field(description="URL the buyer is redirected to")
    total_price: Decimal = Field(default=Decimal("0"), description="Checkout total")
    line_items: list[CheckoutSessionLine] = Field(default_factory=list)


class OrderSummaryLine(BaseModel):
    """One row of an order summary."""

    variant_id: str
    title: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal
    unit_price_formatted: str
    line_total_formatted: str
    image_url: Optional[str] = None


class OrderSummary(BaseModel):
    """Cart totals as shown to the buyer."""

    items: list[OrderSummaryLine] = Field(default_factory=list)
    item_count: int = 0
    subtotal: Decimal = Decimal("0")
    shipping: Decimal = Decimal("0")
    tax: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    subtotal_formatted: str = ""
    shipping_formatted: str = ""
    tax_formatted: str = ""
    total_formatted: str = ""
