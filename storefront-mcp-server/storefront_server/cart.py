"""In-memory shopping cart."""

import logging
import threading
from decimal import Decimal
from typing import Optional

from .currency import format_price_compact
from .models import CartLineItem, CheckoutLineItem
from .shopify_client import ShopifyError, StorefrontClient

logger = logging.getLogger(__name__)


class CartStore:
    """
    Shopping cart state for a single session.

    Lines are kept in insertion order with at most one line per variant.
    Mutations hold a lock, so readers only ever see fully applied updates.
    """

    def __init__(self, client: StorefrontClient) -> None:
        """
        Initialize an empty cart.

        Args:
            client: Storefront client used for checkout
        """
        self.client = client
        self._items: list[CartLineItem] = []
        self._lock = threading.RLock()

    @property
    def items(self) -> tuple[CartLineItem, ...]:
        """Snapshot of the current cart lines."""
        with self._lock:
            return tuple(self._items)

    @property
    def is_empty(self) -> bool:
        with self._lock:
            return not self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def add_to_cart(self, item: CartLineItem) -> None:
        """Add a line, or increase the quantity of the existing line for the same variant."""
        with self._lock:
            for index, existing in enumerate(self._items):
                if existing.variant_id == item.variant_id:
                    self._items[index] = existing.model_copy(
                        update={"quantity": existing.quantity + item.quantity}
                    )
                    logger.debug(f"Cart: {item.variant_id} quantity -> {self._items[index].quantity}")
                    return

            self._items.append(item)
            logger.debug(f"Cart: added {item.variant_id} (qty: {item.quantity})")

    def update_quantity(self, variant_id: str, quantity: int) -> None:
        """Set a line's quantity. Zero or less removes the line; unknown variants are ignored."""
        with self._lock:
            if quantity <= 0:
                self._remove(variant_id)
                return

            for index, existing in enumerate(self._items):
                if existing.variant_id == variant_id:
                    self._items[index] = existing.model_copy(update={"quantity": quantity})
                    return

    def remove_from_cart(self, variant_id: str) -> None:
        with self._lock:
            self._remove(variant_id)

    def _remove(self, variant_id: str) -> None:
        self._items = [item for item in self._items if item.variant_id != variant_id]

    def clear_cart(self) -> None:
        with self._lock:
            self._items = []

    def get_total_items(self) -> int:
        """Total number of units across all lines."""
        with self._lock:
            return sum(item.quantity for item in self._items)

    def get_total_price(self) -> Decimal:
        """Pre-tax subtotal, using the unit prices captured when lines were added."""
        with self._lock:
            return sum((item.line_total for item in self._items), Decimal("0"))

    def get_formatted_total_price(self) -> str:
        return format_price_compact(self.get_total_price())

    def get_checkout_line_items(self) -> list[CheckoutLineItem]:
        with self._lock:
            return [
                CheckoutLineItem(variant_id=item.variant_id, quantity=item.quantity)
                for item in self._items
            ]

    async def create_checkout(self) -> Optional[str]:
        """
        Start a checkout for the current cart.

        The line items are captured before the request is sent; later cart
        changes do not affect it. The cart itself is never modified.

        Returns:
            The checkout URL, or None if the checkout could not be created
        """
        line_items = self.get_checkout_line_items()

        try:
            return await self.client.create_checkout_session(line_items)
        except ShopifyError as e:
            logger.error(f"Error creating checkout: {e}")
            return None
