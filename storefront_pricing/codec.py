"""Wire codec for the pricing service.

Requests and responses travel as ``google.protobuf.Struct`` messages so the
service needs no generated stubs. Monetary amounts are accepted as numbers
or strings and always returned as two-decimal strings.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from google.protobuf import json_format, struct_pb2

from .catalog import shipping_option
from .errors import ValidationError, errmsg
from .models import LineItem, PriceBreakdown, ShippingOption
from .money import format_money, to_decimal
from .pricing import PromotionResult


@dataclass(frozen=True)
class PriceCartRequest:
    items: list[LineItem]
    promotion_code: Optional[str]
    shipping_option: ShippingOption
    tax_rate: Optional[Decimal] = None
    free_shipping_threshold: Optional[Decimal] = None


@dataclass(frozen=True)
class CheckPromotionRequest:
    promotion_code: str
    subtotal: Decimal


def struct_to_dict(message: struct_pb2.Struct) -> dict[str, Any]:
    return json_format.MessageToDict(message)


def dict_to_struct(data: dict[str, Any]) -> struct_pb2.Struct:
    return json_format.ParseDict(data, struct_pb2.Struct())


def decode_price_cart(message: struct_pb2.Struct) -> PriceCartRequest:
    """Decode a PriceCart request.

    Raises:
        ValidationError: The request is missing fields or holds bad values.
    """
    data = struct_to_dict(message)

    raw_items = data.get("items", [])
    if not isinstance(raw_items, list):
        raise ValidationError("items must be a list", "items")

    return PriceCartRequest(
        items=[_decode_line_item(raw, index) for index, raw in enumerate(raw_items)],
        promotion_code=_optional_str(data, "promotion_code"),
        shipping_option=_decode_shipping(data.get("shipping_option")),
        tax_rate=_optional_decimal(data, "tax_rate"),
        free_shipping_threshold=_optional_decimal(data, "free_shipping_threshold"),
    )


def decode_check_promotion(message: struct_pb2.Struct) -> CheckPromotionRequest:
    data = struct_to_dict(message)
    code = _optional_str(data, "promotion_code")
    if code is None:
        raise ValidationError(errmsg.PROMOTION_CODE_REQUIRED, "promotion_code")
    if "subtotal" not in data:
        raise ValidationError("subtotal is required", "subtotal")
    return CheckPromotionRequest(
        promotion_code=code,
        subtotal=to_decimal(_number(data["subtotal"], "subtotal"), "subtotal"),
    )


def encode_breakdown(breakdown: PriceBreakdown, amount_to_free_shipping: Decimal) -> struct_pb2.Struct:
    return dict_to_struct(
        {
            "subtotal": format_money(breakdown.subtotal),
            "item_savings": format_money(breakdown.item_savings),
            "discount": format_money(breakdown.discount),
            "shipping": format_money(breakdown.shipping),
            "tax": format_money(breakdown.tax),
            "total": format_money(breakdown.total),
            "applied_code": breakdown.applied_code,
            "amount_to_free_shipping": format_money(amount_to_free_shipping),
        }
    )


def encode_promotion_result(result: PromotionResult) -> struct_pb2.Struct:
    promotion = result.promotion
    return dict_to_struct(
        {
            "status": result.status,
            "code": promotion.code if promotion else None,
            "description": promotion.description if promotion else "",
            "minimum_subtotal": (
                format_money(promotion.minimum_subtotal)
                if promotion and promotion.minimum_subtotal is not None
                else None
            ),
            "discount": format_money(result.discount),
        }
    )


def _decode_line_item(raw: Any, index: int) -> LineItem:
    field = f"items[{index}]"
    if not isinstance(raw, dict):
        raise ValidationError(f"{field} must be an object", field)
    for name in ("unit_price", "quantity"):
        if name not in raw:
            raise ValidationError(f"{field}.{name} is required", f"{field}.{name}")

    original = raw.get("original_unit_price")
    return LineItem(
        unit_price=_number(raw["unit_price"], f"{field}.unit_price"),
        quantity=_quantity(raw["quantity"], f"{field}.quantity"),
        original_unit_price=None if original is None else _number(original, f"{field}.original_unit_price"),
        product_id=str(raw.get("product_id", "")),
        name=str(raw.get("name", "")),
    )


def _decode_shipping(raw: Any) -> ShippingOption:
    if isinstance(raw, str):
        return shipping_option(raw)
    if isinstance(raw, dict):
        if "id" not in raw or "price" not in raw:
            raise ValidationError("shipping_option needs id and price", "shipping_option")
        return ShippingOption(
            id=str(raw["id"]),
            price=_number(raw["price"], "shipping_option.price"),
            name=str(raw.get("name", "")),
        )
    raise ValidationError(errmsg.SHIPPING_ID_REQUIRED, "shipping_option")


def _quantity(raw: Any, field: str) -> int:
    # Struct carries every number as a double.
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    raise ValidationError(errmsg.QUANTITY_POSITIVE, field)


def _number(raw: Any, field: str) -> Any:
    if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
        raise ValidationError(errmsg.NOT_A_NUMBER, field)
    return raw


def _optional_decimal(data: dict[str, Any], key: str) -> Optional[Decimal]:
    if data.get(key) is None:
        return None
    return to_decimal(_number(data[key], key), key)


def _optional_str(data: dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string", key)
    return value
