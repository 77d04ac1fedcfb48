"""Order pricing and promotion-code evaluation.

Every function here is pure: inputs are never mutated, nothing is read from
the clock or the environment, and identical inputs give identical results.
Intermediate amounts stay at full Decimal precision; only ``price_cart`` and
``amount_to_free_shipping`` round, and they round once at the end.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

import structlog

from .catalog import DEFAULT_PROMOTIONS, PromotionCatalog
from .money import CENT, HUNDRED, ZERO, Number, round_money, to_decimal
from .models import PERCENTAGE, LineItem, PriceBreakdown, PromotionCode, ShippingOption
from .errors import ValidationError, errmsg
from .validation import require_non_negative, require_tax_rate

logger = structlog.get_logger()

DEFAULT_TAX_RATE = Decimal("0.08")
DEFAULT_FREE_SHIPPING_THRESHOLD = Decimal("100")

# PromotionResult.status values
STATUS_NONE = "none"
STATUS_APPLIED = "applied"
STATUS_NOT_FOUND = "not_found"
STATUS_MINIMUM_NOT_MET = "minimum_not_met"


@dataclass(frozen=True)
class PromotionResult:
    status: str
    promotion: Optional[PromotionCode] = None
    discount: Decimal = ZERO

    @property
    def applied(self) -> bool:
        return self.status == STATUS_APPLIED

    @property
    def applied_code(self) -> Optional[str]:
        if self.applied and self.promotion is not None:
            return self.promotion.code
        return None


def calculate_subtotal(items: Iterable[LineItem]) -> Decimal:
    return sum((item.line_total for item in items), ZERO)


def calculate_savings(items: Iterable[LineItem]) -> Decimal:
    """Sum of list-price savings; items without a higher original price add nothing."""
    return sum((item.savings for item in items), ZERO)


def count_items(items: Iterable[LineItem]) -> int:
    return sum(item.quantity for item in items)


def calculate_discount(promotion: PromotionCode, subtotal: Decimal) -> Decimal:
    """Discount for an eligible promotion, never more than the subtotal."""
    if promotion.kind == PERCENTAGE:
        discount = subtotal * promotion.amount / HUNDRED
    else:
        discount = promotion.amount
    return min(discount, subtotal)


def evaluate_promotion(
    code: Optional[str], subtotal: Decimal, catalog: PromotionCatalog = DEFAULT_PROMOTIONS
) -> PromotionResult:
    """Resolve a promotion code against ``catalog`` for a given subtotal.

    Unknown and ineligible codes do not raise; the returned status says which
    case occurred so the caller can tell the user why a code was refused.

    Raises:
        ValidationError: ``subtotal`` is negative or ``code`` is not a string.
    """
    require_non_negative(subtotal, errmsg.SUBTOTAL_NEGATIVE, "subtotal")
    if code is not None and not isinstance(code, str):
        raise ValidationError(errmsg.PROMOTION_CODE_NOT_STRING, "promotion_code")
    if code is None or not code.strip():
        return PromotionResult(status=STATUS_NONE)

    promotion = catalog.find(code)
    if promotion is None:
        return PromotionResult(status=STATUS_NOT_FOUND)
    if not promotion.is_eligible(subtotal):
        return PromotionResult(status=STATUS_MINIMUM_NOT_MET, promotion=promotion)

    return PromotionResult(
        status=STATUS_APPLIED,
        promotion=promotion,
        discount=calculate_discount(promotion, subtotal),
    )


def calculate_shipping(option: ShippingOption, subtotal: Decimal, free_shipping_threshold: Decimal) -> Decimal:
    if option.free_shipping_eligible and subtotal >= free_shipping_threshold:
        return ZERO
    return option.price


def calculate_tax(subtotal: Decimal, discount: Decimal, tax_rate: Decimal) -> Decimal:
    # Tax base is the post-discount subtotal, floored at zero.
    return max(ZERO, subtotal - discount) * tax_rate


def amount_to_free_shipping(subtotal: Number, free_shipping_threshold: Number = DEFAULT_FREE_SHIPPING_THRESHOLD) -> Decimal:
    """Remaining spend before standard shipping is waived, zero once reached.

    Pass the unrounded subtotal. Any shortfall reports at least one cent.
    """
    subtotal = to_decimal(subtotal, "subtotal")
    threshold = to_decimal(free_shipping_threshold, "free_shipping_threshold")
    require_non_negative(subtotal, errmsg.SUBTOTAL_NEGATIVE, "subtotal")
    require_non_negative(threshold, errmsg.THRESHOLD_NEGATIVE, "free_shipping_threshold")
    if subtotal >= threshold:
        return round_money(ZERO)
    return max(CENT, round_money(threshold - subtotal))


def price_cart(
    items: Sequence[LineItem],
    promotion_code: Optional[str],
    shipping_option: ShippingOption,
    tax_rate: Number = DEFAULT_TAX_RATE,
    free_shipping_threshold: Number = DEFAULT_FREE_SHIPPING_THRESHOLD,
    catalog: PromotionCatalog = DEFAULT_PROMOTIONS,
) -> PriceBreakdown:
    """Price a cart into a PriceBreakdown.

    Args:
        items: Line items in cart order; may be empty.
        promotion_code: Code typed by the shopper, matched case-insensitively.
        shipping_option: Selected shipping tier.
        tax_rate: Fraction in [0, 1].
        free_shipping_threshold: Subtotal at which standard shipping is free.
        catalog: Promotion lookup exposing ``find(code)``.

    Raises:
        ValidationError: A line item, pricing parameter or promotion code is malformed.
    """
    tax_rate = to_decimal(tax_rate, "tax_rate")
    require_tax_rate(tax_rate)
    threshold = to_decimal(free_shipping_threshold, "free_shipping_threshold")
    require_non_negative(threshold, errmsg.THRESHOLD_NEGATIVE, "free_shipping_threshold")

    items = [_as_line_item(item) for item in items]

    subtotal = calculate_subtotal(items)
    item_savings = calculate_savings(items)

    promotion = evaluate_promotion(promotion_code, subtotal, catalog)
    if promotion_code and not promotion.applied:
        logger.debug("promotion_not_applied", code=promotion_code, status=promotion.status)

    discount = promotion.discount
    shipping = calculate_shipping(shipping_option, subtotal, threshold)
    tax = calculate_tax(subtotal, discount, tax_rate)
    total = max(ZERO, subtotal - discount + shipping + tax)

    breakdown = PriceBreakdown(
        subtotal=round_money(subtotal),
        item_savings=round_money(item_savings),
        discount=round_money(discount),
        shipping=round_money(shipping),
        tax=round_money(tax),
        total=round_money(total),
        applied_code=promotion.applied_code,
    )

    logger.debug(
        "cart_priced",
        item_count=len(items),
        applied_code=breakdown.applied_code,
        total=str(breakdown.total),
    )
    return breakdown


def _as_line_item(item) -> LineItem:
    # Re-checks carts built outside this package (duck-typed items).
    if isinstance(item, LineItem):
        return item
    try:
        unit_price, quantity = item.unit_price, item.quantity
    except AttributeError as e:
        raise ValidationError(errmsg.LINE_ITEM_MALFORMED, "items", cause=e) from e
    return LineItem(
        unit_price=unit_price,
        quantity=quantity,
        original_unit_price=getattr(item, "original_unit_price", None),
        product_id=getattr(item, "product_id", ""),
        name=getattr(item, "name", ""),
    )
