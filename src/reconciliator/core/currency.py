#!/usr/bin/env python3
"""
Currency Conversion and Handling Utilities

All balance arithmetic uses integer cents to avoid floating-point drift.

Currency Systems:
- Firefly transmits amounts as decimal strings or floats: "45.99"
- Internal calculations use cents: 100 cents = $1.00
- Display uses dollar strings: "$12.34"

Key Principles:
- Convert to cents once, at the edge, and never accumulate floats
- Round half away from zero when converting floats to cents
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union


def float_to_cents(amount: Union[float, str]) -> int:
    """
    Convert a Firefly amount to integer cents.

    Rounds ``amount * 100`` half away from zero. The float product is
    converted to Decimal exactly, so no second rounding error is introduced.

    Args:
        amount: Amount in dollars as float, or as a numeric string

    Returns:
        Amount in cents

    Examples:
        float_to_cents(45.99) -> 4599
        float_to_cents(0.125) -> 13
        float_to_cents(-0.125) -> -13
        float_to_cents("12.5") -> 1250
    """
    product = Decimal(float(amount) * 100)
    return int(product.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def cents_to_dollars_str(cents: int) -> str:
    """
    Convert cents to dollar string using pure integer arithmetic.

    Args:
        cents: Amount in cents

    Returns:
        Formatted dollar string

    Example:
        cents_to_dollars_str(4599) -> "45.99"
    """
    is_negative = cents < 0
    abs_cents = abs(int(cents))

    dollars = abs_cents // 100
    remainder = abs_cents % 100

    if is_negative:
        return f"-{dollars}.{remainder:02d}"
    return f"{dollars}.{remainder:02d}"


def cents_to_amount_str(cents: int) -> str:
    """
    Format a magnitude in cents as a Firefly amount string.

    Firefly amounts are always positive; the direction is carried by the
    transaction type.

    Example:
        cents_to_amount_str(-5000) -> "50.00"
    """
    return cents_to_dollars_str(abs(cents))


def format_cents(cents: int) -> str:
    """Format cents as dollar string with $ prefix."""
    return f"${cents_to_dollars_str(cents)}"
