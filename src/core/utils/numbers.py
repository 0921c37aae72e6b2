"""
Utilities for working with numeric values.

All money, quantity and hour arithmetic in the project goes through
Decimal. Rounding is ROUND_HALF_UP, the way amounts are rounded on a quote.
"""

from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")
QUARTER = Decimal("0.25")


def _quantizer(precision: int) -> Decimal:
    return Decimal("1").scaleb(-precision)


def to_decimal(value: Any, default: Decimal | None = None) -> Decimal:
    """
    Converts a number or a numeric string to Decimal.

    Strings may use a comma as decimal separator ("12,5").
    Floats are converted through str() so 0.1 stays 0.1.

    Raises:
        InvalidOperation: value is not numeric and no default was given
    """
    if isinstance(value, Decimal):
        return value
    if value is None or isinstance(value, bool):
        if default is not None:
            return default
        raise InvalidOperation(f"Not a number: {value!r}")

    candidate = str(value).strip()
    if "," in candidate and "." not in candidate:
        candidate = candidate.replace(",", ".", 1)

    try:
        return Decimal(candidate)
    except InvalidOperation:
        if default is not None:
            return default
        raise


def round_decimal_value(value: Any, precision: int = 2) -> Decimal:
    """
    Rounds a value to the given precision.

    Returns Decimal so the result can be used in further calculations.
    """

    return to_decimal(value).quantize(_quantizer(precision), rounding=ROUND_HALF_UP)


def round_money(value: Any) -> Decimal:
    return round_decimal_value(value, 2)


def round_to_quarter(hours: Any) -> Decimal:
    """
    Rounds hours to the nearest quarter of an hour.

    Example:
        >>> round_to_quarter(Decimal("1.13"))
        Decimal('1.25')
        >>> round_to_quarter(15)
        Decimal('15.00')
    """
    quarters = (to_decimal(hours) * 4).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return (quarters * QUARTER).quantize(_quantizer(2))


def ceil_int(value: Any) -> int:
    return int(to_decimal(value).to_integral_value(rounding=ROUND_CEILING))


def percentage_of(value: Any, percentage: Any) -> Decimal:
    """Part of value for a percentage given as a whole number (21 -> 21%)."""
    return to_decimal(value) * to_decimal(percentage) / Decimal("100")


def format_compact(value: Any) -> str:
    """
    Formats a number without trailing zeros, for use in descriptions.

    Example:
        >>> format_compact(Decimal("5.00"))
        '5'
        >>> format_compact(Decimal("2.50"))
        '2.5'
    """
    decimal_value = to_decimal(value)
    if decimal_value == decimal_value.to_integral_value():
        return str(decimal_value.quantize(Decimal("1")))
    return format(decimal_value.normalize(), "f")
