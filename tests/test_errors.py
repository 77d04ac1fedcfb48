"""Tests for error types."""

from unittest.mock import Mock

import grpc

from storefront_pricing.errors import PricingError, ServiceError, ValidationError


class TestPricingError:
    def test_message_only(self) -> None:
        err = PricingError("something went wrong")
        assert err.message == "something went wrong"
        assert err.cause is None
        assert str(err) == "something went wrong"

    def test_with_cause(self) -> None:
        cause = ValueError("underlying issue")
        err = PricingError("wrapper", cause)
        assert str(err) == "wrapper: underlying issue"


class TestValidationError:
    def test_carries_field(self) -> None:
        err = ValidationError("Quantity must be a positive integer", "quantity")
        assert err.field == "quantity"
        assert isinstance(err, PricingError)

    def test_field_optional(self) -> None:
        assert ValidationError("bad").field == ""


class MockRpcError(grpc.RpcError):
    """RpcError with the grpc.Call accessors real errors carry."""

    def __init__(self, code: grpc.StatusCode, details: str):
        self._code = code
        self._details = details

    def code(self) -> grpc.StatusCode:
        return self._code

    def details(self) -> str:
        return self._details

    def __str__(self) -> str:
        return self._details


class TestServiceError:
    def test_exposes_status(self) -> None:
        err = ServiceError(MockRpcError(grpc.StatusCode.INVALID_ARGUMENT, "bad cart"))
        assert err.code == grpc.StatusCode.INVALID_ARGUMENT
        assert err.details == "bad cart"
        assert str(err) == "pricing service error: bad cart"

    def test_accepts_any_call_like_cause(self) -> None:
        cause = Mock()
        cause.code.return_value = grpc.StatusCode.UNAVAILABLE
        assert ServiceError(cause).code == grpc.StatusCode.UNAVAILABLE
