"""OrderRepository — raw SQL persistence implementation.

Nested order data (checklist, parts lines, comments, legal snapshot) lives in
JSONB columns. legal_snapshot is written by INSERT only; comments_history is
written by an atomic JSONB append only.
"""

import json
from datetime import datetime
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.rs_common.enums import (
    TERMINAL_STATUSES,
    OrderClassification,
    OrderStatus,
    WarrantyType,
)
from src.rs_common.errors import InternalError
from src.rs_order.domain.codec import (
    checklist_from_document,
    checklist_to_document,
    comment_from_document,
    comment_to_document,
    legal_from_document,
    legal_to_document,
    part_from_document,
    part_to_document,
)
from src.rs_order.domain.models import Order, OrderComment

# ---------------------------------------------------------------------------
# SQL statements
# ---------------------------------------------------------------------------

_NEXT_ORDER_NUMBER_SQL = text("SELECT nextval('order_number_seq') AS n")

_INSERT_ORDER_SQL = text("""
    INSERT INTO orders (id, order_number, branch_id, client_id,
        assigned_technician_id, previous_order_id,
        device_brand, device_model, device_imei, imei_not_visible, declared_fault,
        unlock_pattern_provided, unlock_code, checklist,
        battery_consumption, battery_capacity_mah, damage_risk, observations,
        classification,
        customer_accepted, customer_signature_name,
        data_loss_disclaimer_accepted, privacy_policy_accepted,
        parts_used, cost_spare_part, cost_labor, cost_pending,
        has_warranty, warranty_type, warranty_start_date, warranty_end_date,
        warranty_covered_item, warranty_notes,
        legal_snapshot, entry_date, promised_delivery_date,
        ready_for_pickup_date, delivery_date, status, comments_history,
        created_by, created_at, updated_at, last_updated_by)
    VALUES (:id, :order_number, :branch_id, :client_id,
        :assigned_technician_id, :previous_order_id,
        :device_brand, :device_model, :device_imei, :imei_not_visible, :declared_fault,
        :unlock_pattern_provided, :unlock_code, CAST(:checklist AS JSONB),
        :battery_consumption, :battery_capacity_mah, :damage_risk, :observations,
        :classification,
        :customer_accepted, :customer_signature_name,
        :data_loss_disclaimer_accepted, :privacy_policy_accepted,
        CAST(:parts_used AS JSONB), :cost_spare_part, :cost_labor, :cost_pending,
        :has_warranty, :warranty_type, :warranty_start_date, :warranty_end_date,
        :warranty_covered_item, :warranty_notes,
        CAST(:legal_snapshot AS JSONB), :entry_date, :promised_delivery_date,
        :ready_for_pickup_date, :delivery_date, :status, CAST(:comments_history AS JSONB),
        :created_by, :created_at, :updated_at, :last_updated_by)
""")

# Update write set: legal_snapshot, order_number, entry_date, created_*
# and comments_history are deliberately absent.
_UPDATE_ORDER_SQL = text("""
    UPDATE orders
    SET assigned_technician_id = :assigned_technician_id,
        previous_order_id = :previous_order_id,
        device_brand = :device_brand,
        device_model = :device_model,
        device_imei = :device_imei,
        imei_not_visible = :imei_not_visible,
        declared_fault = :declared_fault,
        unlock_pattern_provided = :unlock_pattern_provided,
        unlock_code = :unlock_code,
        checklist = CAST(:checklist AS JSONB),
        battery_consumption = :battery_consumption,
        battery_capacity_mah = :battery_capacity_mah,
        damage_risk = :damage_risk,
        observations = :observations,
        classification = :classification,
        parts_used = CAST(:parts_used AS JSONB),
        cost_spare_part = :cost_spare_part,
        cost_labor = :cost_labor,
        cost_pending = :cost_pending,
        has_warranty = :has_warranty,
        warranty_type = :warranty_type,
        warranty_start_date = :warranty_start_date,
        warranty_end_date = :warranty_end_date,
        warranty_covered_item = :warranty_covered_item,
        warranty_notes = :warranty_notes,
        promised_delivery_date = :promised_delivery_date,
        ready_for_pickup_date = :ready_for_pickup_date,
        delivery_date = :delivery_date,
        status = :status,
        updated_at = :updated_at,
        last_updated_by = :last_updated_by
    WHERE id = :id
""")

_APPEND_COMMENT_SQL = text("""
    UPDATE orders
    SET comments_history = comments_history || CAST(:comment AS JSONB),
        updated_at = :updated_at,
        last_updated_by = :last_updated_by
    WHERE id = :id
""")

_SELECT_COLUMNS = """
    id, order_number, branch_id, client_id, assigned_technician_id, previous_order_id,
    device_brand, device_model, device_imei, imei_not_visible, declared_fault,
    unlock_pattern_provided, unlock_code, checklist,
    battery_consumption, battery_capacity_mah, damage_risk, observations,
    classification,
    customer_accepted, customer_signature_name,
    data_loss_disclaimer_accepted, privacy_policy_accepted,
    parts_used, cost_spare_part, cost_labor, cost_pending,
    has_warranty, warranty_type, warranty_start_date, warranty_end_date,
    warranty_covered_item, warranty_notes,
    legal_snapshot, entry_date, promised_delivery_date,
    ready_for_pickup_date, delivery_date, status, comments_history,
    created_by, created_at, updated_at, last_updated_by
"""

_GET_ORDER_BY_ID_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM orders WHERE id = :id
""")

# Row lock is held until the transaction ends. Every mutation loads through this.
_GET_ORDER_FOR_UPDATE_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM orders WHERE id = :id
    FOR UPDATE
""")

_LIST_ORDERS_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM orders
    WHERE (CAST(:branch_id AS TEXT) IS NULL OR branch_id = :branch_id)
      AND (CAST(:client_id AS TEXT) IS NULL OR client_id = :client_id)
      AND (CAST(:order_number_pattern AS TEXT) IS NULL
           OR order_number ILIKE :order_number_pattern ESCAPE '\\')
      AND (CAST(:imei_pattern AS TEXT) IS NULL
           OR device_imei LIKE :imei_pattern ESCAPE '\\')
      AND (CAST(:cursor_id AS TEXT) IS NULL OR id < :cursor_id)
      AND (CAST(:statuses_csv AS TEXT) IS NULL
           OR status = ANY(string_to_array(CAST(:statuses_csv AS TEXT), ',')))
    ORDER BY id DESC
    LIMIT :limit
""")

_LIST_OPEN_ORDERS_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM orders
    WHERE status <> ALL(string_to_array(CAST(:terminal_csv AS TEXT), ','))
      AND (CAST(:branch_id AS TEXT) IS NULL OR branch_id = :branch_id)
    ORDER BY id
""")

_LIST_ALL_ORDERS_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM orders ORDER BY id
""")

_DELETE_ALL_ORDERS_SQL = text("DELETE FROM orders")

# Keep the sequence ahead of every restored order number so numbers are never reused.
_RESYNC_ORDER_NUMBER_SQL = text(r"""
    SELECT setval(
        'order_number_seq',
        COALESCE(MAX(NULLIF(regexp_replace(order_number, '\D', '', 'g'), '')::BIGINT), 0) + 1,
        false
    )
    FROM orders
""")


# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def _contains_pattern(value: str | None) -> str | None:
    """Substring LIKE pattern with the user's wildcards escaped."""
    if not value or not value.strip():
        return None
    escaped = value.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _load_json(value: Any) -> Any:
    # asyncpg hands back JSONB as text unless a codec is registered
    return json.loads(value) if isinstance(value, str) else value


def _row_to_order(row: Any) -> Order:
    """Convert a DB result row to an Order domain object."""
    return Order(
        id=row.id,
        order_number=row.order_number,
        branch_id=row.branch_id,
        client_id=row.client_id,
        assigned_technician_id=row.assigned_technician_id,
        previous_order_id=row.previous_order_id,
        device_brand=row.device_brand,
        device_model=row.device_model,
        device_imei=row.device_imei,
        imei_not_visible=row.imei_not_visible,
        declared_fault=row.declared_fault,
        unlock_pattern_provided=row.unlock_pattern_provided,
        unlock_code=row.unlock_code,
        checklist=checklist_from_document(_load_json(row.checklist)),
        battery_consumption=row.battery_consumption,
        battery_capacity_mah=row.battery_capacity_mah,
        damage_risk=row.damage_risk,
        observations=row.observations,
        classification=(
            OrderClassification(row.classification) if row.classification else None
        ),
        customer_accepted=row.customer_accepted,
        customer_signature_name=row.customer_signature_name,
        data_loss_disclaimer_accepted=row.data_loss_disclaimer_accepted,
        privacy_policy_accepted=row.privacy_policy_accepted,
        parts_used=[part_from_document(p) for p in _load_json(row.parts_used) or []],
        cost_spare_part=row.cost_spare_part,
        cost_labor=row.cost_labor,
        cost_pending=row.cost_pending,
        has_warranty=row.has_warranty,
        warranty_type=WarrantyType(row.warranty_type),
        warranty_start_date=row.warranty_start_date,
        warranty_end_date=row.warranty_end_date,
        warranty_covered_item=row.warranty_covered_item,
        warranty_notes=row.warranty_notes,
        legal=legal_from_document(_load_json(row.legal_snapshot)),
        entry_date=row.entry_date,
        promised_delivery_date=row.promised_delivery_date,
        ready_for_pickup_date=row.ready_for_pickup_date,
        delivery_date=row.delivery_date,
        status=OrderStatus(row.status),
        comments_history=[
            comment_from_document(c) for c in _load_json(row.comments_history) or []
        ],
        created_by=row.created_by,
        created_at=row.created_at,
        updated_at=row.updated_at,
        last_updated_by=row.last_updated_by,
    )


def _mutable_params(order: Order) -> dict[str, Any]:
    return {
        "id": order.id,
        "assigned_technician_id": order.assigned_technician_id,
        "previous_order_id": order.previous_order_id,
        "device_brand": order.device_brand,
        "device_model": order.device_model,
        "device_imei": order.device_imei,
        "imei_not_visible": order.imei_not_visible,
        "declared_fault": order.declared_fault,
        "unlock_pattern_provided": order.unlock_pattern_provided,
        "unlock_code": order.unlock_code,
        "checklist": json.dumps(checklist_to_document(order.checklist)),
        "battery_consumption": order.battery_consumption,
        "battery_capacity_mah": order.battery_capacity_mah,
        "damage_risk": order.damage_risk,
        "observations": order.observations,
        "classification": order.classification.value if order.classification else None,
        "parts_used": json.dumps([part_to_document(p) for p in order.parts_used]),
        "cost_spare_part": order.cost_spare_part,
        "cost_labor": order.cost_labor,
        "cost_pending": order.cost_pending,
        "has_warranty": order.has_warranty,
        "warranty_type": order.warranty_type.value,
        "warranty_start_date": order.warranty_start_date,
        "warranty_end_date": order.warranty_end_date,
        "warranty_covered_item": order.warranty_covered_item,
        "warranty_notes": order.warranty_notes,
        "promised_delivery_date": order.promised_delivery_date,
        "ready_for_pickup_date": order.ready_for_pickup_date,
        "delivery_date": order.delivery_date,
        "status": order.status.value,
        "updated_at": order.updated_at,
        "last_updated_by": order.last_updated_by,
    }


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class OrderRepository:
    """Concrete implementation of OrderRepositoryProtocol using raw SQL."""

    async def next_order_number(self, db: AsyncSession) -> int:
        result = await db.execute(_NEXT_ORDER_NUMBER_SQL)
        return int(result.scalar_one())

    async def save(self, db: AsyncSession, order: Order) -> None:
        params = _mutable_params(order)
        params.update(
            {
                "order_number": order.order_number,
                "branch_id": order.branch_id,
                "client_id": order.client_id,
                "customer_accepted": order.customer_accepted,
                "customer_signature_name": order.customer_signature_name,
                "data_loss_disclaimer_accepted": order.data_loss_disclaimer_accepted,
                "privacy_policy_accepted": order.privacy_policy_accepted,
                "legal_snapshot": json.dumps(legal_to_document(order.legal)),
                "entry_date": order.entry_date,
                "comments_history": json.dumps(
                    [comment_to_document(c) for c in order.comments_history]
                ),
                "created_by": order.created_by,
                "created_at": order.created_at,
            }
        )
        await db.execute(_INSERT_ORDER_SQL, params)

    async def update(self, db: AsyncSession, order: Order) -> None:
        result = await db.execute(_UPDATE_ORDER_SQL, _mutable_params(order))
        if result.rowcount == 0:
            raise InternalError(f"Order update matched no row: {order.id}")

    async def append_comment(
        self, db: AsyncSession, order_id: str, comment: OrderComment, now: datetime
    ) -> None:
        result = await db.execute(
            _APPEND_COMMENT_SQL,
            {
                "id": order_id,
                "comment": json.dumps([comment_to_document(comment)]),
                "updated_at": now,
                "last_updated_by": comment.user_id,
            },
        )
        if result.rowcount == 0:
            raise InternalError(f"Comment append matched no row: {order_id}")

    async def get_by_id(self, db: AsyncSession, order_id: str) -> Order | None:
        result = await db.execute(_GET_ORDER_BY_ID_SQL, {"id": order_id})
        row = result.fetchone()
        return _row_to_order(row) if row else None

    async def get_for_update(self, db: AsyncSession, order_id: str) -> Order | None:
        result = await db.execute(_GET_ORDER_FOR_UPDATE_SQL, {"id": order_id})
        row = result.fetchone()
        return _row_to_order(row) if row else None

    async def list_orders(
        self,
        db: AsyncSession,
        branch_id: str | None,
        statuses: list[OrderStatus] | None,
        client_id: str | None,
        cursor_id: str | None,
        limit: int,
        order_number: str | None = None,
        imei: str | None = None,
    ) -> list[Order]:
        statuses_csv = ",".join(s.value for s in statuses) if statuses else None
        result = await db.execute(
            _LIST_ORDERS_SQL,
            {
                "branch_id": branch_id,
                "client_id": client_id,
                "order_number_pattern": _contains_pattern(order_number),
                "imei_pattern": _contains_pattern(imei),
                "cursor_id": cursor_id,
                "statuses_csv": statuses_csv,
                "limit": limit,
            },
        )
        return [_row_to_order(row) for row in result.fetchall()]

    async def list_open(self, db: AsyncSession, branch_id: str | None) -> list[Order]:
        terminal_csv = ",".join(s.value for s in TERMINAL_STATUSES)
        result = await db.execute(
            _LIST_OPEN_ORDERS_SQL,
            {"terminal_csv": terminal_csv, "branch_id": branch_id},
        )
        return [_row_to_order(row) for row in result.fetchall()]

    async def list_all(self, db: AsyncSession) -> list[Order]:
        result = await db.execute(_LIST_ALL_ORDERS_SQL)
        return [_row_to_order(row) for row in result.fetchall()]

    async def replace_all(self, db: AsyncSession, orders: list[Order]) -> None:
        await db.execute(_DELETE_ALL_ORDERS_SQL)
        for order in orders:
            await self.save(db, order)
        await db.execute(_RESYNC_ORDER_NUMBER_SQL)
