"""Order summary shown next to the cart: subtotal, shipping, GST and total."""

from decimal import Decimal

from .cart import CartStore
from .currency import format_price_compact
from .models import OrderSummary, OrderSummaryLine

TAX_RATE = Decimal("0.18")  # GST
SHIPPING_COST = Decimal("0")  # free shipping


def build_order_summary(cart: CartStore) -> OrderSummary:
    """Compute display totals from the cart's subtotal."""
    items = cart.items
    subtotal = sum((item.line_total for item in items), Decimal("0"))
    tax = subtotal * TAX_RATE
    total = subtotal + SHIPPING_COST + tax

    lines = [
        OrderSummaryLine(
            variant_id=item.variant_id,
            title=item.product.title,
            quantity=item.quantity,
            unit_price=item.product.price,
            line_total=item.line_total,
            unit_price_formatted=format_price_compact(item.product.price),
            line_total_formatted=format_price_compact(item.line_total),
            image_url=item.product.image.url if item.product.image else None,
        )
        for item in items
    ]

    return OrderSummary(
        items=lines,
        item_count=sum(item.quantity for item in items),
        subtotal=subtotal,
        shipping=SHIPPING_COST,
        tax=tax,
        total=total,
        subtotal_formatted=format_price_compact(subtotal),
        shipping_formatted="Free" if SHIPPING_COST == 0 else format_price_compact(SHIPPING_COST),
        tax_formatted=format_price_compact(tax),
        total_formatted=format_price_compact(total),
    )
