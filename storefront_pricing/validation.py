"""Validation helpers for pricing precondition checks.

Eliminates repeated validation boilerplate across the models and the engine.
"""

from decimal import Decimal

from .errors import ValidationError, errmsg
from .money import ZERO


def require_non_negative(value: Decimal, error_msg: str, field: str = "") -> None:
    """Require that a value is zero or greater."""
    if value < ZERO:
        raise ValidationError(error_msg, field)


def require_positive_int(value: object, error_msg: str, field: str = "") -> None:
    """Require an integer (not a bool) greater than zero."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(error_msg, field)


def require_at_least(value: Decimal, floor: Decimal, error_msg: str, field: str = "") -> None:
    """Require that ``value`` is not below ``floor``."""
    if value < floor:
        raise ValidationError(error_msg, field)


def require_between(
    value: Decimal, low: Decimal, high: Decimal, error_msg: str, field: str = ""
) -> None:
    """Require ``low <= value <= high``."""
    if value < low or value > high:
        raise ValidationError(error_msg, field)


def require_not_empty(value: str, error_msg: str, field: str = "") -> None:
    """Require a non-blank string."""
    if not value or not value.strip():
        raise ValidationError(error_msg, field)


def require_tax_rate(tax_rate: Decimal) -> None:
    require_between(tax_rate, ZERO, Decimal("1"), errmsg.TAX_RATE_RANGE, "tax_rate")
