"""
Money Utilities - Decimal handling for product prices.

Prices arrive from the shop API as JSON numbers; converting via str keeps
the value the API sent instead of its binary float approximation.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

MONEY_PRECISION = Decimal("0.01")


def to_decimal(value: Union[str, int, float, Decimal, None]) -> Decimal:
    """Convert value to Decimal; None becomes 0, garbage raises ValueError."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    try:
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Invalid money value: {value!r}") from e


def round_money(value: Union[str, int, float, Decimal]) -> Decimal:
    """Round to cents."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def line_total(price: Decimal, amount: int) -> Decimal:
    """Price of `amount` units, rounded to cents."""
    return round_money(to_decimal(price) * amount)


def to_float(value: Union[str, int, float, Decimal, None]) -> float:
    """Convert for JSON responses."""
    return float(to_decimal(value))
