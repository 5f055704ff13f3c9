"""Pydantic schemas and cursor utilities for rs_order API.

Request models forbid unknown fields: cost_spare_part is derived and the
legal snapshot is write-once, so a request that tries to set either is
rejected before it reaches the service.
"""

import base64
import json
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.rs_common.cents import cents_to_display
from src.rs_common.datetime_utils import utc_today
from src.rs_common.enums import (
    AlertReason,
    ChecklistItem,
    ChecklistValue,
    OrderClassification,
    OrderStatus,
    WarrantyType,
)
from src.rs_order.domain import ledger
from src.rs_order.domain.codec import checklist_to_document, legal_to_document
from src.rs_order.domain.models import Order, OrderAlert, OrderComment, OrderPartItem
from src.rs_order.domain.state_machine import next_status
from src.rs_order.domain.warranty import is_under_warranty

# ---------------------------------------------------------------------------
# Cursor-based pagination utilities
# ---------------------------------------------------------------------------


def cursor_encode(last_id: str) -> str:
    """Encode an order id into an opaque Base64 cursor string."""
    payload = json.dumps({"id": last_id})
    return base64.b64encode(payload.encode()).decode()


def cursor_decode(cursor: str | None) -> str | None:
    """Decode a cursor string back to the last seen id. Returns None on error."""
    if cursor is None:
        return None
    try:
        payload = json.loads(base64.b64decode(cursor.encode()).decode())
        return str(payload["id"])
    except Exception:
        return None


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class AddPartRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    part_id: str = Field(..., min_length=1, max_length=64)
    quantity: int = Field(..., description="Units consumed from stock")
    # Default to the part's current prices when omitted
    unit_sale_price: int | None = Field(None, description="Cents")
    unit_cost_price: int | None = Field(None, description="Cents")


class CreateOrderRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    branch_id: str = Field(..., min_length=1, max_length=64)
    client_id: str = Field(..., min_length=1, max_length=64)
    assigned_technician_id: str | None = Field(None, max_length=64)
    previous_order_id: str | None = Field(None, max_length=32)

    device_brand: str = Field(..., min_length=1, max_length=100)
    device_model: str = Field(..., min_length=1, max_length=100)
    device_imei: str | None = Field(None, max_length=64)
    imei_not_visible: bool = False
    declared_fault: str = Field(..., min_length=1)

    unlock_pattern_provided: bool = False
    unlock_code: str | None = Field(None, max_length=100)
    checklist: dict[ChecklistItem, ChecklistValue] = Field(default_factory=dict)
    battery_consumption: str | None = Field(None, max_length=50)
    battery_capacity_mah: str | None = Field(None, max_length=50)
    damage_risk: str | None = None
    observations: str | None = None
    classification: OrderClassification | None = None

    customer_accepted: bool = False
    customer_signature_name: str | None = Field(None, max_length=200)
    data_loss_disclaimer_accepted: bool = False
    privacy_policy_accepted: bool = False

    parts: list[AddPartRequest] = Field(default_factory=list)
    cost_labor: int = Field(0, description="Cents")
    cost_pending: int = Field(0, description="Cents")

    warranty_type: WarrantyType = WarrantyType.NONE
    warranty_start_date: date | None = None
    warranty_end_date: date | None = None
    warranty_covered_item: str | None = None
    warranty_notes: str | None = None

    promised_delivery_date: date | None = None

    @model_validator(mode="after")
    def imei_required_when_visible(self) -> "CreateOrderRequest":
        if not self.imei_not_visible and not (self.device_imei or "").strip():
            raise ValueError("device_imei is required unless imei_not_visible is set")
        return self


_NON_NULLABLE_UPDATE_FIELDS = (
    "device_brand",
    "device_model",
    "declared_fault",
    "imei_not_visible",
    "unlock_pattern_provided",
    "checklist",
)


class UpdateOrderRequest(BaseModel):
    """Partial update of intake details. Only fields present in the body change."""

    model_config = ConfigDict(extra="forbid")

    assigned_technician_id: str | None = Field(None, max_length=64)
    previous_order_id: str | None = Field(None, max_length=32)
    device_brand: str | None = Field(None, min_length=1, max_length=100)
    device_model: str | None = Field(None, min_length=1, max_length=100)
    device_imei: str | None = Field(None, max_length=64)
    imei_not_visible: bool | None = None
    declared_fault: str | None = Field(None, min_length=1)
    unlock_pattern_provided: bool | None = None
    unlock_code: str | None = Field(None, max_length=100)
    checklist: dict[ChecklistItem, ChecklistValue] | None = None
    battery_consumption: str | None = Field(None, max_length=50)
    battery_capacity_mah: str | None = Field(None, max_length=50)
    damage_risk: str | None = None
    observations: str | None = None
    classification: OrderClassification | None = None
    promised_delivery_date: date | None = None

    @model_validator(mode="after")
    def reject_null_for_required(self) -> "UpdateOrderRequest":
        for name in _NON_NULLABLE_UPDATE_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class StatusChangeRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: OrderStatus


class SetCostsRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    cost_labor: int | None = Field(None, description="Cents")
    cost_pending: int | None = Field(None, description="Cents")


class UpdatePartLineRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    quantity: int


class AddCommentRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    description: str = Field(..., min_length=1, max_length=4000)


class SetWarrantyRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    warranty_type: WarrantyType
    warranty_start_date: date | None = None
    warranty_end_date: date | None = None
    warranty_covered_item: str | None = None
    warranty_notes: str | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PartLineResponse(BaseModel):
    line_index: int
    part_id: str
    part_name: str
    quantity: int
    unit_sale_price_cents: int
    unit_cost_price_cents: int
    line_total_cents: int
    line_total_display: str

    @classmethod
    def from_domain(cls, index: int, line: OrderPartItem) -> "PartLineResponse":
        return cls(
            line_index=index,
            part_id=line.part_id,
            part_name=line.part_name,
            quantity=line.quantity,
            unit_sale_price_cents=line.unit_sale_price,
            unit_cost_price_cents=line.unit_cost_price,
            line_total_cents=line.line_total,
            line_total_display=cents_to_display(line.line_total),
        )


class CommentResponse(BaseModel):
    id: str
    user_id: str
    user_name: str
    description: str
    timestamp: str  # ISO8601 string

    @classmethod
    def from_domain(cls, comment: OrderComment) -> "CommentResponse":
        return cls(
            id=comment.id,
            user_id=comment.user_id,
            user_name=comment.user_name,
            description=comment.description,
            timestamp=comment.timestamp.isoformat(),
        )


class CostsResponse(BaseModel):
    cost_spare_part_cents: int
    cost_labor_cents: int
    cost_pending_cents: int
    total_estimate_cents: int
    total_estimate_display: str
    margin_cents: int

    @classmethod
    def from_domain(cls, order: Order) -> "CostsResponse":
        total = ledger.total_estimate(order)
        return cls(
            cost_spare_part_cents=order.cost_spare_part,
            cost_labor_cents=order.cost_labor,
            cost_pending_cents=order.cost_pending,
            total_estimate_cents=total,
            total_estimate_display=cents_to_display(total),
            margin_cents=ledger.margin(order),
        )


class WarrantyResponse(BaseModel):
    has_warranty: bool
    warranty_type: WarrantyType
    warranty_start_date: date | None
    warranty_end_date: date | None
    warranty_covered_item: str | None
    warranty_notes: str | None
    under_warranty: bool


class OrderResponse(BaseModel):
    id: str
    order_number: str
    branch_id: str
    client_id: str
    assigned_technician_id: str | None
    previous_order_id: str | None
    device_brand: str
    device_model: str
    device_imei: str | None
    imei_not_visible: bool
    declared_fault: str
    unlock_pattern_provided: bool
    unlock_code: str | None
    checklist: dict[str, str]
    battery_consumption: str | None
    battery_capacity_mah: str | None
    damage_risk: str | None
    observations: str | None
    classification: OrderClassification | None
    customer_accepted: bool
    customer_signature_name: str | None
    data_loss_disclaimer_accepted: bool
    privacy_policy_accepted: bool
    parts_used: list[PartLineResponse]
    costs: CostsResponse
    warranty: WarrantyResponse
    legal: dict[str, str | int]
    status: OrderStatus
    # Suggested next step on the standard path; None at the end or off-path
    next_status: OrderStatus | None
    entry_date: str
    promised_delivery_date: date | None
    ready_for_pickup_date: str | None
    delivery_date: str | None
    comments_history: list[CommentResponse]
    created_by: str
    created_at: str | None
    updated_at: str | None
    last_updated_by: str | None

    @classmethod
    def from_domain(cls, order: Order) -> "OrderResponse":
        return cls(
            id=order.id,
            order_number=order.order_number,
            branch_id=order.branch_id,
            client_id=order.client_id,
            assigned_technician_id=order.assigned_technician_id,
            previous_order_id=order.previous_order_id,
            device_brand=order.device_brand,
            device_model=order.device_model,
            device_imei=order.device_imei,
            imei_not_visible=order.imei_not_visible,
            declared_fault=order.declared_fault,
            unlock_pattern_provided=order.unlock_pattern_provided,
            unlock_code=order.unlock_code,
            checklist=checklist_to_document(order.checklist),
            battery_consumption=order.battery_consumption,
            battery_capacity_mah=order.battery_capacity_mah,
            damage_risk=order.damage_risk,
            observations=order.observations,
            classification=order.classification,
            customer_accepted=order.customer_accepted,
            customer_signature_name=order.customer_signature_name,
            data_loss_disclaimer_accepted=order.data_loss_disclaimer_accepted,
            privacy_policy_accepted=order.privacy_policy_accepted,
            parts_used=[
                PartLineResponse.from_domain(i, line) for i, line in enumerate(order.parts_used)
            ],
            costs=CostsResponse.from_domain(order),
            warranty=WarrantyResponse(
                has_warranty=order.has_warranty,
                warranty_type=order.warranty_type,
                warranty_start_date=order.warranty_start_date,
                warranty_end_date=order.warranty_end_date,
                warranty_covered_item=order.warranty_covered_item,
                warranty_notes=order.warranty_notes,
                under_warranty=is_under_warranty(order, utc_today()),
            ),
            legal=legal_to_document(order.legal),
            status=order.status,
            next_status=next_status(order.status),
            entry_date=order.entry_date.isoformat(),
            promised_delivery_date=order.promised_delivery_date,
            ready_for_pickup_date=(
                order.ready_for_pickup_date.isoformat() if order.ready_for_pickup_date else None
            ),
            delivery_date=order.delivery_date.isoformat() if order.delivery_date else None,
            comments_history=[CommentResponse.from_domain(c) for c in order.comments_history],
            created_by=order.created_by,
            created_at=order.created_at.isoformat() if order.created_at else None,
            updated_at=order.updated_at.isoformat() if order.updated_at else None,
            last_updated_by=order.last_updated_by,
        )


class OrderSummary(BaseModel):
    id: str
    order_number: str
    branch_id: str
    client_id: str
    device: str
    device_imei: str | None
    status: OrderStatus
    classification: OrderClassification | None
    total_estimate_cents: int
    entry_date: str

    @classmethod
    def from_domain(cls, order: Order) -> "OrderSummary":
        return cls(
            id=order.id,
            order_number=order.order_number,
            branch_id=order.branch_id,
            client_id=order.client_id,
            device=f"{order.device_brand} {order.device_model}",
            device_imei=order.device_imei,
            status=order.status,
            classification=order.classification,
            total_estimate_cents=ledger.total_estimate(order),
            entry_date=order.entry_date.isoformat(),
        )


class OrderListResponse(BaseModel):
    items: list[OrderSummary]
    next_cursor: str | None
    has_more: bool


class AlertResponse(BaseModel):
    order_id: str
    order_number: str
    status: OrderStatus
    reason: AlertReason
    days: int
    message: str

    @classmethod
    def from_domain(cls, alert: OrderAlert) -> "AlertResponse":
        return cls(
            order_id=alert.order_id,
            order_number=alert.order_number,
            status=alert.status,
            reason=alert.reason,
            days=alert.days,
            message=alert.message,
        )


class AlertListResponse(BaseModel):
    items: list[AlertResponse]
    total: int
