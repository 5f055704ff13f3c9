"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Validation   (422) — input rejected, state unchanged
  2xxx: Not found    (404) — id does not resolve
  3xxx: Conflict     (409) — shared resource cannot satisfy the request
  9xxx: System

Every error may carry the name of the input field that caused it so the
client can render the message next to that field.
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
        field: str | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        self.field = field
        super().__init__(message)


# --- 1xxx: Validation ---

class ValidationError(AppError):
    def __init__(self, field: str, message: str, code: int = 1000) -> None:
        super().__init__(code, message, 422, field=field)


class InvalidStatusTransitionError(ValidationError):
    def __init__(self, status: str) -> None:
        super().__init__(
            "status",
            f"Order is already in status '{status}'",
            code=1001,
        )


class InvalidQuantityError(ValidationError):
    def __init__(self, quantity: int) -> None:
        super().__init__(
            "quantity",
            f"Quantity must be a positive integer, got {quantity}",
            code=1002,
        )


class NegativeAmountError(ValidationError):
    def __init__(self, field: str, amount: int) -> None:
        super().__init__(
            field,
            f"Amount must not be negative, got {amount} cents",
            code=1003,
        )


class InvalidWarrantyError(ValidationError):
    def __init__(self, field: str, detail: str) -> None:
        super().__init__(field, detail, code=1004)


class DuplicatePartLineError(ValidationError):
    def __init__(self, part_id: str) -> None:
        super().__init__(
            "part_id",
            f"Part {part_id} is already on this order; update its quantity instead",
            code=1005,
        )


class LineIndexError(ValidationError):
    def __init__(self, line_index: int) -> None:
        super().__init__(
            "line_index",
            f"No part line at index {line_index}",
            code=1006,
        )


class AcceptanceRequiredError(ValidationError):
    def __init__(self, field: str, detail: str) -> None:
        super().__init__(field, detail, code=1007)


# --- 2xxx: Not found ---

class OrderNotFoundError(AppError):
    def __init__(self, order_id: str) -> None:
        super().__init__(2001, f"Order not found: {order_id}", 404, field="order_id")


class PartNotFoundError(AppError):
    def __init__(self, part_id: str) -> None:
        super().__init__(2002, f"Part not found: {part_id}", 404, field="part_id")


class BranchNotFoundError(AppError):
    def __init__(self, branch_id: str) -> None:
        super().__init__(2003, f"Branch not found: {branch_id}", 404, field="branch_id")


class ClientNotFoundError(AppError):
    def __init__(self, client_id: str) -> None:
        super().__init__(2004, f"Client not found: {client_id}", 404, field="client_id")


# --- 3xxx: Conflict ---

class InsufficientStockError(AppError):
    def __init__(self, part_id: str, requested: int, available: int) -> None:
        super().__init__(
            3001,
            f"Insufficient stock for part {part_id}: requested {requested}, available {available}",
            409,
            field="quantity",
        )
        self.part_id = part_id
        self.requested = requested
        self.available = available


# --- 9xxx: System ---

class RateLimitError(AppError):
    def __init__(self) -> None:
        super().__init__(9001, "Rate limit exceeded", 429)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class MissingActorError(AppError):
    def __init__(self) -> None:
        super().__init__(9003, "Caller identity headers are required", 401)
