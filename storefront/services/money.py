"""
Money Utilities - Safe Decimal operations for monetary values.

Prices are stored in Rupiah, which has no minor unit in practice,
so display rounding is to whole numbers.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Iterable, Union

Number = Union[str, int, float, Decimal, None]

CURRENCY = "IDR"
CURRENCY_SYMBOL = "Rp"

# Default precision for money operations (2 decimal places)
MONEY_PRECISION = Decimal("0.01")

# Precision for integer currencies (IDR)
INTEGER_PRECISION = Decimal("1")


def to_decimal(value: Number) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def round_money(value: Number, to_int: bool = False) -> Decimal:
    """
    Round monetary value to appropriate precision.

    Args:
        value: Value to round
        to_int: If True, round to whole currency units

    Returns:
        Rounded Decimal value
    """
    precision = INTEGER_PRECISION if to_int else MONEY_PRECISION
    return to_decimal(value).quantize(precision, rounding=ROUND_HALF_UP)


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def money_sum(values: Iterable[Number]) -> Decimal:
    """Sum monetary values; an empty iterable sums to Decimal("0")."""
    total = Decimal("0")
    for value in values:
        total += to_decimal(value)
    return total


def format_money(value: Number) -> str:
    """
    Format a Rupiah amount for display, e.g. ``Rp 1.250.000``.

    Uses the Indonesian thousands separator (dot).
    """
    amount = int(round_money(value, to_int=True))
    formatted = f"{abs(amount):,}".replace(",", ".")
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL} {formatted}"


def to_float(value: Number) -> float:
    """
    Convert Decimal to float for JSON serialization.

    Use only at API boundaries, not for internal calculations.
    """
    return float(to_decimal(value))
