"""SQLAlchemy ORM model for the orders table (DDL reference only — queries use raw SQL)."""

from datetime import date, datetime
from typing import Any

from sqlalchemy import BigInteger, Boolean, Date, DateTime, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from src.rs_common.database import Base


class OrderORM(Base):
    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    order_number: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    branch_id: Mapped[str] = mapped_column(String(64), nullable=False)
    client_id: Mapped[str] = mapped_column(String(64), nullable=False)
    assigned_technician_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    previous_order_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    device_brand: Mapped[str] = mapped_column(String(100), nullable=False)
    device_model: Mapped[str] = mapped_column(String(100), nullable=False)
    device_imei: Mapped[str | None] = mapped_column(String(64), nullable=True)
    imei_not_visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    declared_fault: Mapped[str] = mapped_column(Text, nullable=False)
    unlock_pattern_provided: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    unlock_code: Mapped[str | None] = mapped_column(String(100), nullable=True)
    checklist: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False)
    battery_consumption: Mapped[str | None] = mapped_column(String(50), nullable=True)
    battery_capacity_mah: Mapped[str | None] = mapped_column(String(50), nullable=True)
    damage_risk: Mapped[str | None] = mapped_column(Text, nullable=True)
    observations: Mapped[str | None] = mapped_column(Text, nullable=True)
    classification: Mapped[str | None] = mapped_column(String(16), nullable=True)
    customer_accepted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    customer_signature_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    data_loss_disclaimer_accepted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    privacy_policy_accepted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    parts_used: Mapped[list[Any]] = mapped_column(JSONB, nullable=False)
    cost_spare_part: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    cost_labor: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    cost_pending: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    has_warranty: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    warranty_type: Mapped[str] = mapped_column(String(10), nullable=False, default="none")
    warranty_start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    warranty_end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    warranty_covered_item: Mapped[str | None] = mapped_column(Text, nullable=True)
    warranty_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    legal_snapshot: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False)
    entry_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    promised_delivery_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    ready_for_pickup_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    delivery_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="Recibido")
    comments_history: Mapped[list[Any]] = mapped_column(JSONB, nullable=False)
    created_by: Mapped[str] = mapped_column(String(64), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    last_updated_by: Mapped[str | None] = mapped_column(String(64), nullable=True)
