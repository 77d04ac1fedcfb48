"""Error types and error message constants for the pricing engine."""

from typing import Optional


class errmsg:
    """Error message constants for the pricing domain."""

    UNIT_PRICE_NEGATIVE = "Unit price cannot be negative"
    QUANTITY_POSITIVE = "Quantity must be a positive integer"
    LINE_ITEM_MALFORMED = "Line item needs a unit_price and a quantity"
    ORIGINAL_PRICE_BELOW_PRICE = "Original price cannot be below the current price"
    PROMOTION_CODE_REQUIRED = "Promotion code is required"
    PROMOTION_CODE_NOT_STRING = "Promotion code must be a string"
    PROMOTION_KIND_INVALID = "Promotion kind must be 'percentage' or 'fixed'"
    PROMOTION_AMOUNT_NEGATIVE = "Promotion amount cannot be negative"
    PERCENTAGE_RANGE = "Percentage must be 0-100"
    MINIMUM_SUBTOTAL_NEGATIVE = "Minimum subtotal cannot be negative"
    DUPLICATE_PROMOTION = "Duplicate promotion code"
    SHIPPING_ID_REQUIRED = "Shipping option ID is required"
    SHIPPING_PRICE_NEGATIVE = "Shipping price cannot be negative"
    UNKNOWN_SHIPPING_OPTION = "Unknown shipping option"
    TAX_RATE_RANGE = "Tax rate must be between 0 and 1"
    THRESHOLD_NEGATIVE = "Free shipping threshold cannot be negative"
    SUBTOTAL_NEGATIVE = "Subtotal cannot be negative"
    NOT_A_NUMBER = "Value is not a number"
    INVALID_SETTING = "Invalid setting"


class PricingError(Exception):
    """Base class for pricing errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


class ValidationError(PricingError):
    """Input violates a pricing invariant (malformed item, code, or parameter)."""

    def __init__(self, message: str, field: str = "", cause: Optional[Exception] = None):
        super().__init__(message, cause)
        self.field = field


class ServiceError(PricingError):
    """gRPC error returned by the pricing service."""

    def __init__(self, cause: Exception):
        super().__init__("pricing service error", cause)
        self._rpc_error = cause

    @property
    def code(self):
        """Return the gRPC status code."""
        return self._rpc_error.code()

    @property
    def details(self) -> str:
        """Return the error details."""
        return self._rpc_error.details()
