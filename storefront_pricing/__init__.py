"""Order pricing and promotion-code evaluation for the storefront."""

from .errors import (
    PricingError,
    ValidationError,
    ServiceError,
    errmsg,
)
from .models import (
    LineItem,
    PromotionCode,
    ShippingOption,
    PriceBreakdown,
    PERCENTAGE,
    FIXED,
    STANDARD_SHIPPING,
    normalize_code,
)
from .catalog import (
    PromotionCatalog,
    DEFAULT_PROMOTIONS,
    SHIPPING_OPTIONS,
    shipping_option,
)
from .pricing import (
    PromotionResult,
    price_cart,
    evaluate_promotion,
    calculate_subtotal,
    calculate_savings,
    calculate_discount,
    calculate_shipping,
    calculate_tax,
    amount_to_free_shipping,
    count_items,
    DEFAULT_TAX_RATE,
    DEFAULT_FREE_SHIPPING_THRESHOLD,
    STATUS_NONE,
    STATUS_APPLIED,
    STATUS_NOT_FOUND,
    STATUS_MINIMUM_NOT_MET,
)
from .config import PricingConfig

__all__ = [
    "PricingError",
    "ValidationError",
    "ServiceError",
    "errmsg",
    "LineItem",
    "PromotionCode",
    "ShippingOption",
    "PriceBreakdown",
    "PERCENTAGE",
    "FIXED",
    "STANDARD_SHIPPING",
    "normalize_code",
    "PromotionCatalog",
    "DEFAULT_PROMOTIONS",
    "SHIPPING_OPTIONS",
    "shipping_option",
    "PromotionResult",
    "price_cart",
    "evaluate_promotion",
    "calculate_subtotal",
    "calculate_savings",
    "calculate_discount",
    "calculate_shipping",
    "calculate_tax",
    "amount_to_free_shipping",
    "count_items",
    "DEFAULT_TAX_RATE",
    "DEFAULT_FREE_SHIPPING_THRESHOLD",
    "STATUS_NONE",
    "STATUS_APPLIED",
    "STATUS_NOT_FOUND",
    "STATUS_MINIMUM_NOT_MET",
    "PricingConfig",
]
