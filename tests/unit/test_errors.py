"""Tests for rs_common.errors and rs_common.response."""

from src.rs_common.errors import (
    AcceptanceRequiredError,
    AppError,
    BranchNotFoundError,
    DuplicatePartLineError,
    InsufficientStockError,
    InvalidQuantityError,
    InvalidStatusTransitionError,
    InvalidWarrantyError,
    LineIndexError,
    MissingActorError,
    NegativeAmountError,
    OrderNotFoundError,
    PartNotFoundError,
    RateLimitError,
    ValidationError,
)
from src.rs_common.response import ApiResponse, error_response, success_response


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9002, message="Internal error")
        assert err.code == 9002
        assert err.message == "Internal error"
        assert err.http_status == 500
        assert err.field is None

    def test_custom_http_status(self) -> None:
        err = AppError(code=1000, message="bad", http_status=422, field="x")
        assert err.http_status == 422
        assert err.field == "x"

    def test_is_exception(self) -> None:
        err = AppError(code=1000, message="test")
        assert isinstance(err, Exception)


class TestValidationErrors:
    def test_validation_error_is_422_with_field(self) -> None:
        err = ValidationError("device_imei", "required")
        assert err.code == 1000
        assert err.http_status == 422
        assert err.field == "device_imei"

    def test_status_transition(self) -> None:
        err = InvalidStatusTransitionError("Recibido")
        assert err.code == 1001
        assert err.field == "status"
        assert "Recibido" in err.message

    def test_invalid_quantity(self) -> None:
        err = InvalidQuantityError(0)
        assert err.code == 1002
        assert err.field == "quantity"

    def test_negative_amount_keeps_field(self) -> None:
        err = NegativeAmountError("cost_labor", -100)
        assert err.code == 1003
        assert err.field == "cost_labor"
        assert "-100" in err.message

    def test_invalid_warranty(self) -> None:
        err = InvalidWarrantyError("warranty_end_date", "end before start")
        assert err.code == 1004
        assert err.field == "warranty_end_date"

    def test_duplicate_line(self) -> None:
        assert DuplicatePartLineError("p1").code == 1005

    def test_line_index(self) -> None:
        err = LineIndexError(3)
        assert err.code == 1006
        assert err.field == "line_index"

    def test_acceptance_required(self) -> None:
        err = AcceptanceRequiredError("data_loss_disclaimer_accepted", "must accept")
        assert err.code == 1007
        assert err.http_status == 422

    def test_all_validation_errors_share_base(self) -> None:
        assert isinstance(InvalidQuantityError(0), ValidationError)
        assert isinstance(NegativeAmountError("f", -1), ValidationError)


class TestNotFoundAndConflict:
    def test_order_not_found(self) -> None:
        err = OrderNotFoundError("ord_1")
        assert err.code == 2001
        assert err.http_status == 404

    def test_part_not_found(self) -> None:
        err = PartNotFoundError("p1")
        assert err.code == 2002
        assert err.field == "part_id"

    def test_branch_not_found(self) -> None:
        assert BranchNotFoundError("b1").code == 2003

    def test_insufficient_stock(self) -> None:
        err = InsufficientStockError("p1", requested=3, available=1)
        assert err.code == 3001
        assert err.http_status == 409
        assert err.requested == 3
        assert err.available == 1
        assert "available 1" in err.message


class TestSystemErrors:
    def test_rate_limit(self) -> None:
        err = RateLimitError()
        assert err.code == 9001
        assert err.http_status == 429

    def test_missing_actor(self) -> None:
        err = MissingActorError()
        assert err.code == 9003
        assert err.http_status == 401


class TestApiResponse:
    def test_success_response(self) -> None:
        resp = success_response({"key": "value"})
        assert resp.code == 0
        assert resp.message == "success"
        assert resp.data == {"key": "value"}

    def test_error_response_without_field(self) -> None:
        resp = error_response(2001, "Order not found")
        assert resp.code == 2001
        assert resp.data is None

    def test_error_response_with_field(self) -> None:
        resp = error_response(1003, "negative", "cost_labor")
        assert resp.data == {"field": "cost_labor"}

    def test_has_timestamp_and_request_id(self) -> None:
        resp = ApiResponse()
        assert resp.timestamp
        assert resp.request_id.startswith("req_")
