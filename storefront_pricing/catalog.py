"""Promotion catalog and shipping option table.

Both are read-only once built. Lookups never mutate, so a catalog can be
shared across threads without locking.
"""

from collections.abc import Iterable, Iterator
from decimal import Decimal
from typing import Optional

from .errors import ValidationError, errmsg
from .models import FIXED, PERCENTAGE, PromotionCode, ShippingOption, normalize_code


class PromotionCatalog:
    """Immutable lookup of promotion codes by their normalized code."""

    def __init__(self, codes: Iterable[PromotionCode] = ()) -> None:
        by_code: dict[str, PromotionCode] = {}
        for promotion in codes:
            key = promotion.normalized
            if key in by_code:
                raise ValidationError(f"{errmsg.DUPLICATE_PROMOTION}: {key}", "code")
            by_code[key] = promotion
        self._codes = by_code

    def find(self, code: Optional[str]) -> Optional[PromotionCode]:
        """Return the promotion for ``code`` (case-insensitive), or None."""
        if not code or not code.strip():
            return None
        return self._codes.get(normalize_code(code))

    def available(self, subtotal: Decimal) -> list[tuple[PromotionCode, bool]]:
        """List every code with whether ``subtotal`` meets its minimum order."""
        return [(promotion, promotion.is_eligible(subtotal)) for promotion in self]

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and self.find(code) is not None

    def __iter__(self) -> Iterator[PromotionCode]:
        return iter(self._codes.values())

    def __len__(self) -> int:
        return len(self._codes)


DEFAULT_PROMOTIONS = PromotionCatalog(
    [
        PromotionCode(
            code="WELCOME10",
            kind=PERCENTAGE,
            amount="10",
            description="10% off for new customers",
        ),
        PromotionCode(
            code="SAVE20",
            kind=FIXED,
            amount="20",
            minimum_subtotal="100",
            description="$20 off your order",
        ),
        PromotionCode(
            code="FLASH25",
            kind=PERCENTAGE,
            amount="25",
            minimum_subtotal="50",
            description="Flash sale - 25% off!",
        ),
    ]
)


SHIPPING_OPTIONS: tuple[ShippingOption, ...] = (
    ShippingOption(id="standard", price="9.99", name="Standard Shipping", estimated_days="5-7 business days"),
    ShippingOption(id="express", price="19.99", name="Express Shipping", estimated_days="2-3 business days"),
    ShippingOption(id="overnight", price="34.99", name="Overnight Shipping", estimated_days="1 business day"),
    ShippingOption(id="scheduled", price="14.99", name="Scheduled Delivery", estimated_days="Pick a date"),
)


def shipping_option(option_id: str) -> ShippingOption:
    """Look up a shipping option from the storefront table by id."""
    for option in SHIPPING_OPTIONS:
        if option.id == option_id:
            return option
    raise ValidationError(f"{errmsg.UNKNOWN_SHIPPING_OPTION}: {option_id}", "shipping_option")
