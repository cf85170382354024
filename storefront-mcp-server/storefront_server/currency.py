"""Price formatting for the storefront display currency (INR, en-IN)."""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

CURRENCY_CODE = "INR"
CURRENCY_SYMBOL = "₹"

# Approximate rate, update as needed
USD_TO_INR_RATE = 83.12

Amount = Union[str, int, float, Decimal]


def _to_float(amount: Amount) -> float:
    """Parse a price the way the display layer does: anything non-numeric is NaN."""
    if isinstance(amount, str):
        try:
            return float(amount.strip())
        except ValueError:
            return math.nan
    return float(amount)


def _group_indian(digits: str) -> str:
    """Group integer digits as en-IN does: 12,34,567."""
    if len(digits) <= 3:
        return digits

    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def _format(value: float, min_fraction_digits: int, max_fraction_digits: int = 2) -> str:
    if math.isnan(value):
        return f"{CURRENCY_SYMBOL}NaN"

    sign = "-" if value < 0 else ""
    if math.isinf(value):
        return f"{sign}{CURRENCY_SYMBOL}∞"

    quantum = Decimal(1).scaleb(-max_fraction_digits)
    rounded = Decimal(repr(abs(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    integer, _, fraction = f"{rounded:f}".partition(".")

    fraction = fraction.rstrip("0").ljust(min_fraction_digits, "0")
    if rounded == 0:
        sign = ""

    text = f"{sign}{CURRENCY_SYMBOL}{_group_indian(integer)}"
    if fraction:
        text += f".{fraction}"
    return text


def format_price(price: Amount) -> str:
    """Format a price with up to two fractional digits, e.g. ₹2,499.5."""
    return _format(_to_float(price), min_fraction_digits=0)


def format_price_compact(price: Amount) -> str:
    """
    Format a price without decimals for whole numbers.

    ``2499`` renders as ``₹2,499`` while ``2499.5`` renders as ``₹2,499.50``.
    """
    value = _to_float(price)
    fraction_digits = 0 if value % 1 == 0 else 2
    return _format(value, min_fraction_digits=fraction_digits)


def convert_usd_to_inr(usd_price: Amount) -> float:
    """
    Convert USD to INR (approximate conversion).

    Note: rates are static, use a real-time currency API where accuracy matters.
    """
    return _to_float(usd_price) * USD_TO_INR_RATE
