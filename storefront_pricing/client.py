"""Client for the pricing gRPC service."""

import os
from decimal import Decimal
from typing import Any, Optional, Sequence, Union

import grpc
from google.protobuf import struct_pb2

from .codec import dict_to_struct, struct_to_dict
from .errors import ServiceError
from .models import LineItem, ShippingOption
from .server import SERVICE_NAME


def _item_to_dict(item: LineItem) -> dict[str, Any]:
    data: dict[str, Any] = {"unit_price": str(item.unit_price), "quantity": item.quantity}
    if item.original_unit_price is not None:
        data["original_unit_price"] = str(item.original_unit_price)
    if item.product_id:
        data["product_id"] = item.product_id
    if item.name:
        data["name"] = item.name
    return data


class PricingClient:
    """Client for the PricingService.

    Responses are returned as plain dicts; monetary values are two-decimal
    strings exactly as the service renders them.
    """

    def __init__(self, channel: grpc.Channel):
        self._channel = channel
        self._price_cart = channel.unary_unary(
            f"/{SERVICE_NAME}/PriceCart",
            request_serializer=struct_pb2.Struct.SerializeToString,
            response_deserializer=struct_pb2.Struct.FromString,
        )
        self._check_promotion = channel.unary_unary(
            f"/{SERVICE_NAME}/CheckPromotion",
            request_serializer=struct_pb2.Struct.SerializeToString,
            response_deserializer=struct_pb2.Struct.FromString,
        )

    @classmethod
    def connect(cls, endpoint: str) -> "PricingClient":
        """Connect to a pricing service at host:port."""
        return cls(grpc.insecure_channel(endpoint))

    @classmethod
    def from_env(cls, env_var: str = "PRICING_ENDPOINT", default: str = "localhost:50310") -> "PricingClient":
        """Connect using an environment variable with fallback."""
        return cls.connect(os.environ.get(env_var, default))

    def price_cart(
        self,
        items: Sequence[LineItem],
        shipping: Union[str, ShippingOption],
        promotion_code: Optional[str] = None,
        tax_rate: Optional[Decimal] = None,
        free_shipping_threshold: Optional[Decimal] = None,
    ) -> dict[str, Any]:
        request: dict[str, Any] = {
            "items": [_item_to_dict(item) for item in items],
            "shipping_option": (
                shipping if isinstance(shipping, str) else {"id": shipping.id, "price": str(shipping.price)}
            ),
        }
        if promotion_code is not None:
            request["promotion_code"] = promotion_code
        if tax_rate is not None:
            request["tax_rate"] = str(tax_rate)
        if free_shipping_threshold is not None:
            request["free_shipping_threshold"] = str(free_shipping_threshold)

        try:
            return struct_to_dict(self._price_cart(dict_to_struct(request)))
        except grpc.RpcError as e:
            raise ServiceError(e) from e

    def check_promotion(self, promotion_code: str, subtotal: Decimal) -> dict[str, Any]:
        request = {"promotion_code": promotion_code, "subtotal": str(subtotal)}
        try:
            return struct_to_dict(self._check_promotion(dict_to_struct(request)))
        except grpc.RpcError as e:
            raise ServiceError(e) from e

    def close(self) -> None:
        """Close the underlying channel."""
        self._channel.close()
