"""Order <-> plain JSON document mapping.

Used by the backup export/restore contract and by the JSONB columns of the
orders table. Dates are ISO-8601 strings, enums are their wire values, money
stays in integer cents. order_from_document(order_to_document(o)) == o.
"""

from dataclasses import asdict, fields
from datetime import date, datetime
from typing import Any

from src.rs_common.enums import (
    ChecklistItem,
    ChecklistValue,
    OrderClassification,
    OrderStatus,
    WarrantyType,
)
from src.rs_order.domain.models import LegalSnapshot, Order, OrderComment, OrderPartItem

_DATETIME_FIELDS = ("entry_date", "ready_for_pickup_date", "delivery_date", "created_at", "updated_at")
_DATE_FIELDS = ("promised_delivery_date", "warranty_start_date", "warranty_end_date")


def _iso(value: date | datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_datetime(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def _parse_date(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


# ---------------------------------------------------------------------------
# Nested values
# ---------------------------------------------------------------------------


def checklist_to_document(checklist: dict[ChecklistItem, ChecklistValue]) -> dict[str, str]:
    return {item.value: value.value for item, value in checklist.items()}


def checklist_from_document(data: dict[str, str] | None) -> dict[ChecklistItem, ChecklistValue]:
    return {ChecklistItem(key): ChecklistValue(value) for key, value in (data or {}).items()}


def part_to_document(line: OrderPartItem) -> dict[str, Any]:
    return asdict(line)


def part_from_document(data: dict[str, Any]) -> OrderPartItem:
    return OrderPartItem(
        part_id=data["part_id"],
        part_name=data["part_name"],
        quantity=int(data["quantity"]),
        unit_sale_price=int(data["unit_sale_price"]),
        unit_cost_price=int(data["unit_cost_price"]),
    )


def comment_to_document(comment: OrderComment) -> dict[str, Any]:
    return {
        "id": comment.id,
        "user_id": comment.user_id,
        "user_name": comment.user_name,
        "description": comment.description,
        "timestamp": comment.timestamp.isoformat(),
    }


def comment_from_document(data: dict[str, Any]) -> OrderComment:
    return OrderComment(
        id=data["id"],
        user_id=data["user_id"],
        user_name=data["user_name"],
        description=data["description"],
        timestamp=datetime.fromisoformat(data["timestamp"]),
    )


def legal_to_document(legal: LegalSnapshot) -> dict[str, Any]:
    return asdict(legal)


def legal_from_document(data: dict[str, Any]) -> LegalSnapshot:
    known = {f.name for f in fields(LegalSnapshot)}
    return LegalSnapshot(**{k: v for k, v in data.items() if k in known})


# ---------------------------------------------------------------------------
# Order
# ---------------------------------------------------------------------------


def order_to_document(order: Order) -> dict[str, Any]:
    doc: dict[str, Any] = {}
    for f in fields(Order):
        value = getattr(order, f.name)
        if f.name in _DATETIME_FIELDS or f.name in _DATE_FIELDS:
            value = _iso(value)
        elif f.name == "checklist":
            value = checklist_to_document(value)
        elif f.name == "parts_used":
            value = [part_to_document(line) for line in value]
        elif f.name == "comments_history":
            value = [comment_to_document(c) for c in value]
        elif f.name == "legal":
            value = legal_to_document(value)
        elif f.name in ("status", "warranty_type"):
            value = value.value
        elif f.name == "classification":
            value = value.value if value is not None else None
        doc[f.name] = value
    return doc


def order_from_document(doc: dict[str, Any]) -> Order:
    known = {f.name for f in fields(Order)}
    kwargs: dict[str, Any] = {k: v for k, v in doc.items() if k in known}

    for name in _DATETIME_FIELDS:
        if name in kwargs:
            kwargs[name] = _parse_datetime(kwargs[name])
    for name in _DATE_FIELDS:
        if name in kwargs:
            kwargs[name] = _parse_date(kwargs[name])

    kwargs["checklist"] = checklist_from_document(kwargs.get("checklist"))
    kwargs["parts_used"] = [part_from_document(p) for p in kwargs.get("parts_used") or []]
    kwargs["comments_history"] = [
        comment_from_document(c) for c in kwargs.get("comments_history") or []
    ]
    kwargs["legal"] = legal_from_document(kwargs["legal"])
    if "status" in kwargs:
        kwargs["status"] = OrderStatus(kwargs["status"])
    if "warranty_type" in kwargs:
        kwargs["warranty_type"] = WarrantyType(kwargs["warranty_type"])
    if kwargs.get("classification") is not None:
        kwargs["classification"] = OrderClassification(kwargs["classification"])
    return Order(**kwargs)
