"""Order domain models — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass, field
from datetime import date, datetime

from src.rs_common.enums import (
    TERMINAL_STATUSES,
    AlertReason,
    ChecklistItem,
    ChecklistValue,
    OrderClassification,
    OrderStatus,
    WarrantyType,
)


@dataclass(frozen=True)
class LegalSnapshot:
    """Store policy copied verbatim into the order at intake. Never rewritten."""

    company_name: str
    company_logo_url: str
    company_cuit: str
    company_address: str
    company_contact_details: str
    warranty_conditions: str
    pickup_conditions: str
    unlock_disclaimer_text: str
    abandonment_policy_text: str
    data_loss_policy_text: str
    untested_device_policy_text: str
    budget_variation_text: str
    high_risk_device_text: str
    partial_damage_display_text: str
    warranty_void_conditions_text: str
    privacy_policy_text: str
    abandonment_risk_days: int
    abandonment_final_days: int


@dataclass
class OrderPartItem:
    part_id: str
    part_name: str
    quantity: int
    unit_sale_price: int  # cents, frozen when the line is added
    unit_cost_price: int  # cents, internal margin reporting only

    @property
    def line_total(self) -> int:
        return self.quantity * self.unit_sale_price


@dataclass(frozen=True)
class OrderComment:
    id: str
    user_id: str
    user_name: str
    description: str
    timestamp: datetime


@dataclass
class Order:
    id: str
    order_number: str
    branch_id: str
    client_id: str
    # Device facts
    device_brand: str
    device_model: str
    declared_fault: str
    legal: LegalSnapshot
    entry_date: datetime
    created_by: str
    device_imei: str | None = None
    imei_not_visible: bool = False
    assigned_technician_id: str | None = None
    previous_order_id: str | None = None
    # Device access (unlock_code is internal-only)
    unlock_pattern_provided: bool = False
    unlock_code: str | None = None
    checklist: dict[ChecklistItem, ChecklistValue] = field(default_factory=dict)
    battery_consumption: str | None = None
    battery_capacity_mah: str | None = None
    damage_risk: str | None = None
    observations: str | None = None
    classification: OrderClassification | None = None
    # Customer acceptance at intake
    customer_accepted: bool = False
    customer_signature_name: str | None = None
    data_loss_disclaimer_accepted: bool = False
    privacy_policy_accepted: bool = False
    # Costs (cents); cost_spare_part is derived from parts_used
    parts_used: list[OrderPartItem] = field(default_factory=list)
    cost_spare_part: int = 0
    cost_labor: int = 0
    cost_pending: int = 0
    # Warranty
    has_warranty: bool = False
    warranty_type: WarrantyType = WarrantyType.NONE
    warranty_start_date: date | None = None
    warranty_end_date: date | None = None
    warranty_covered_item: str | None = None
    warranty_notes: str | None = None
    # Lifecycle
    status: OrderStatus = OrderStatus.RECEIVED
    promised_delivery_date: date | None = None
    ready_for_pickup_date: datetime | None = None
    delivery_date: datetime | None = None
    comments_history: list[OrderComment] = field(default_factory=list)
    # Audit
    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_updated_by: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def touch(self, actor_id: str, now: datetime) -> None:
        self.updated_at = now
        self.last_updated_by = actor_id


@dataclass(frozen=True)
class OrderAlert:
    order_id: str
    order_number: str
    status: OrderStatus
    reason: AlertReason
    days: int
    message: str
