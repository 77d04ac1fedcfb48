"""Decimal helpers for monetary amounts.

Amounts are carried as ``Decimal`` at full precision and only quantized to
cents when a value leaves the engine.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from .errors import ValidationError, errmsg

Number = Union[int, float, str, Decimal]

ZERO = Decimal("0")
CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def to_decimal(value: Number, field: str = "") -> Decimal:
    """Convert a number to Decimal.

    Floats go through ``str`` so that ``9.99`` becomes ``Decimal("9.99")``
    rather than its binary expansion.
    """
    if isinstance(value, bool):
        raise ValidationError(errmsg.NOT_A_NUMBER, field)
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise ValidationError(errmsg.NOT_A_NUMBER, field, e) from e
    else:
        raise ValidationError(errmsg.NOT_A_NUMBER, field)

    if not result.is_finite():
        raise ValidationError(errmsg.NOT_A_NUMBER, field)
    return result


def round_money(amount: Decimal) -> Decimal:
    """Quantize to two decimal places, rounding half up."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(amount: Decimal) -> str:
    """Render a monetary amount with exactly two decimals, e.g. ``"9.99"``."""
    return f"{round_money(amount):.2f}"
