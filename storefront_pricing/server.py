"""Pricing gRPC service.

Exposes the pricing engine so that every storefront view consumes a single
computation of cart totals. Messages are ``google.protobuf.Struct`` values;
see ``codec`` for their shape.
"""

from concurrent import futures
from typing import Optional

import grpc
import structlog
from google.protobuf import struct_pb2
from grpc_health.v1 import health, health_pb2, health_pb2_grpc

from .catalog import DEFAULT_PROMOTIONS, PromotionCatalog
from .codec import (
    decode_check_promotion,
    decode_price_cart,
    encode_breakdown,
    encode_promotion_result,
)
from .config import PricingConfig
from .errors import ValidationError
from .pricing import amount_to_free_shipping, calculate_subtotal, evaluate_promotion, price_cart

SERVICE_NAME = "storefront.pricing.PricingService"

logger = structlog.get_logger()


def configure_logging(level: int = 0) -> None:
    """Configure structlog with JSON rendering and ISO timestamps."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )


class PricingServicer:
    """Prices carts and checks promotion codes.

    Maps domain errors to gRPC status codes:
    - ValidationError -> INVALID_ARGUMENT
    """

    def __init__(
        self, config: Optional[PricingConfig] = None, catalog: PromotionCatalog = DEFAULT_PROMOTIONS
    ) -> None:
        self.config = config or PricingConfig()
        self.catalog = catalog
        self.log = logger.bind(service="pricing")

    def PriceCart(self, request: struct_pb2.Struct, context: grpc.ServicerContext) -> struct_pb2.Struct:
        log = self.log.bind(method="PriceCart")
        try:
            req = decode_price_cart(request)
            threshold = (
                req.free_shipping_threshold
                if req.free_shipping_threshold is not None
                else self.config.free_shipping_threshold
            )
            breakdown = price_cart(
                req.items,
                req.promotion_code,
                req.shipping_option,
                tax_rate=req.tax_rate if req.tax_rate is not None else self.config.tax_rate,
                free_shipping_threshold=threshold,
                catalog=self.catalog,
            )
            remaining = amount_to_free_shipping(calculate_subtotal(req.items), threshold)
        except ValidationError as e:
            log.warning("request_rejected", reason=str(e), field=e.field)
            context.abort(grpc.StatusCode.INVALID_ARGUMENT, str(e))

        log.info("cart_priced", total=str(breakdown.total), applied_code=breakdown.applied_code)
        return encode_breakdown(breakdown, remaining)

    def CheckPromotion(self, request: struct_pb2.Struct, context: grpc.ServicerContext) -> struct_pb2.Struct:
        log = self.log.bind(method="CheckPromotion")
        try:
            req = decode_check_promotion(request)
            result = evaluate_promotion(req.promotion_code, req.subtotal, self.catalog)
        except ValidationError as e:
            log.warning("request_rejected", reason=str(e), field=e.field)
            context.abort(grpc.StatusCode.INVALID_ARGUMENT, str(e))

        log.info("promotion_checked", code=req.promotion_code, status=result.status)
        return encode_promotion_result(result)


def add_PricingServicer_to_server(servicer: PricingServicer, server: grpc.Server) -> None:
    rpc_method_handlers = {
        "PriceCart": grpc.unary_unary_rpc_method_handler(
            servicer.PriceCart,
            request_deserializer=struct_pb2.Struct.FromString,
            response_serializer=struct_pb2.Struct.SerializeToString,
        ),
        "CheckPromotion": grpc.unary_unary_rpc_method_handler(
            servicer.CheckPromotion,
            request_deserializer=struct_pb2.Struct.FromString,
            response_serializer=struct_pb2.Struct.SerializeToString,
        ),
    }
    generic_handler = grpc.method_handlers_generic_handler(SERVICE_NAME, rpc_method_handlers)
    server.add_generic_rpc_handlers((generic_handler,))


def create_server(
    config: PricingConfig, address: Optional[str] = None, catalog: PromotionCatalog = DEFAULT_PROMOTIONS
) -> tuple[grpc.Server, int]:
    """Create a pricing server with health checking.

    Returns:
        Tuple of (server, bound_port). Pass an address ending in ``:0`` to
        bind an ephemeral port.
    """
    server = grpc.server(futures.ThreadPoolExecutor(max_workers=config.max_workers))

    add_PricingServicer_to_server(PricingServicer(config, catalog), server)

    health_servicer = health.HealthServicer()
    health_pb2_grpc.add_HealthServicer_to_server(health_servicer, server)
    health_servicer.set("", health_pb2.HealthCheckResponse.SERVING)
    health_servicer.set(SERVICE_NAME, health_pb2.HealthCheckResponse.SERVING)

    port = server.add_insecure_port(address or config.address)
    return server, port


def serve() -> None:
    config = PricingConfig.from_env()
    configure_logging(config.log_level_number)

    server, port = create_server(config)

    logger.info("server_started", service=SERVICE_NAME, port=port, tax_rate=str(config.tax_rate))

    server.start()
    server.wait_for_termination()


if __name__ == "__main__":
    serve()
