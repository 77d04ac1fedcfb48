"""Pricing value types.

All types are frozen dataclasses. Monetary fields are normalized to
``Decimal`` on construction, so callers may pass ints, floats or strings.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .errors import ValidationError, errmsg
from .money import HUNDRED, ZERO, to_decimal
from .validation import (
    require_at_least,
    require_between,
    require_non_negative,
    require_not_empty,
    require_positive_int,
)

PERCENTAGE = "percentage"
FIXED = "fixed"
PROMOTION_KINDS = (PERCENTAGE, FIXED)

STANDARD_SHIPPING = "standard"


def normalize_code(code: str) -> str:
    """Case-insensitive identity of a promotion code."""
    return code.strip().upper()


def validate_line_item(item: "LineItem") -> None:
    """Check the line item invariants, raising ValidationError."""
    require_non_negative(item.unit_price, errmsg.UNIT_PRICE_NEGATIVE, "unit_price")
    require_positive_int(item.quantity, errmsg.QUANTITY_POSITIVE, "quantity")
    if item.original_unit_price is not None:
        require_at_least(
            item.original_unit_price,
            item.unit_price,
            errmsg.ORIGINAL_PRICE_BELOW_PRICE,
            "original_unit_price",
        )


@dataclass(frozen=True)
class LineItem:
    unit_price: Decimal
    quantity: int = 1
    original_unit_price: Optional[Decimal] = None
    product_id: str = ""
    name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "unit_price", to_decimal(self.unit_price, "unit_price"))
        if self.original_unit_price is not None:
            object.__setattr__(
                self,
                "original_unit_price",
                to_decimal(self.original_unit_price, "original_unit_price"),
            )
        validate_line_item(self)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    @property
    def savings(self) -> Decimal:
        """Savings against the list price, zero when not discounted."""
        if self.original_unit_price is None:
            return ZERO
        return max(ZERO, self.original_unit_price - self.unit_price) * self.quantity


@dataclass(frozen=True)
class PromotionCode:
    code: str
    kind: str
    amount: Decimal
    minimum_subtotal: Optional[Decimal] = None
    description: str = ""

    def __post_init__(self) -> None:
        require_not_empty(self.code, errmsg.PROMOTION_CODE_REQUIRED, "code")
        if self.kind not in PROMOTION_KINDS:
            raise ValidationError(errmsg.PROMOTION_KIND_INVALID, "kind")

        amount = to_decimal(self.amount, "amount")
        require_non_negative(amount, errmsg.PROMOTION_AMOUNT_NEGATIVE, "amount")
        if self.kind == PERCENTAGE:
            require_between(amount, ZERO, HUNDRED, errmsg.PERCENTAGE_RANGE, "amount")
        object.__setattr__(self, "amount", amount)

        if self.minimum_subtotal is not None:
            minimum = to_decimal(self.minimum_subtotal, "minimum_subtotal")
            require_non_negative(minimum, errmsg.MINIMUM_SUBTOTAL_NEGATIVE, "minimum_subtotal")
            object.__setattr__(self, "minimum_subtotal", minimum)

    @property
    def normalized(self) -> str:
        return normalize_code(self.code)

    def is_eligible(self, subtotal: Decimal) -> bool:
        """True when the subtotal meets the code's minimum order, if any."""
        return self.minimum_subtotal is None or subtotal >= self.minimum_subtotal


@dataclass(frozen=True)
class ShippingOption:
    id: str
    price: Decimal
    name: str = ""
    estimated_days: str = ""

    def __post_init__(self) -> None:
        require_not_empty(self.id, errmsg.SHIPPING_ID_REQUIRED, "id")
        price = to_decimal(self.price, "price")
        require_non_negative(price, errmsg.SHIPPING_PRICE_NEGATIVE, "price")
        object.__setattr__(self, "price", price)

    @property
    def free_shipping_eligible(self) -> bool:
        """Only the standard tier is waived above the free-shipping threshold."""
        return self.id == STANDARD_SHIPPING


@dataclass(frozen=True)
class PriceBreakdown:
    """Priced cart summary. Every monetary field has exactly two decimals."""

    subtotal: Decimal
    item_savings: Decimal
    discount: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal
    applied_code: Optional[str] = None
