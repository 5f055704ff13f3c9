"""Unit tests for the order <-> JSON document mapping used by backups and JSONB columns."""

import json
from datetime import UTC, date, datetime

import pytest

from src.rs_common.enums import (
    ChecklistItem,
    ChecklistValue,
    OrderClassification,
    OrderStatus,
    WarrantyType,
)
from src.rs_order.domain.checklist import normalize_checklist
from src.rs_order.domain.codec import (
    legal_from_document,
    legal_to_document,
    order_from_document,
    order_to_document,
)
from src.rs_order.domain.models import Order, OrderComment, OrderPartItem
from src.rs_order.domain.snapshot import take_snapshot


def _full_order() -> Order:
    return Order(
        id="ord_42", order_number="ORD042", branch_id="br-1", client_id="cli-1",
        device_brand="Samsung", device_model="S21", declared_fault="Cambio de módulo",
        legal=take_snapshot("br-1", None),
        entry_date=datetime(2026, 3, 1, 9, 30, tzinfo=UTC),
        created_by="u1",
        device_imei="356938035643809",
        unlock_pattern_provided=True,
        unlock_code="1234",
        classification=OrderClassification.OUT_OF_STOCK,
        checklist=normalize_checklist({ChecklistItem.TOUCH: ChecklistValue.NO}, True),
        parts_used=[OrderPartItem("p1", "Módulo", 1, 90000, 60000)],
        cost_spare_part=90000,
        cost_labor=20000,
        has_warranty=True,
        warranty_type=WarrantyType.DAYS_90,
        warranty_start_date=date(2026, 3, 4),
        warranty_end_date=date(2026, 6, 2),
        status=OrderStatus.DELIVERED,
        ready_for_pickup_date=datetime(2026, 3, 3, tzinfo=UTC),
        delivery_date=datetime(2026, 3, 4, tzinfo=UTC),
        comments_history=[
            OrderComment("cmt_1", "tech-1", "Ana", "Módulo cambiado", datetime(2026, 3, 2, tzinfo=UTC))
        ],
        created_at=datetime(2026, 3, 1, 9, 30, tzinfo=UTC),
        updated_at=datetime(2026, 3, 4, tzinfo=UTC),
        last_updated_by="tech-1",
    )


class TestOrderDocument:
    def test_round_trip_through_json(self) -> None:
        order = _full_order()
        doc = json.loads(json.dumps(order_to_document(order)))
        assert order_from_document(doc) == order

    def test_wire_values(self) -> None:
        doc = order_to_document(_full_order())
        assert doc["status"] == "Entregado"
        assert doc["warranty_type"] == "90d"
        assert doc["checklist"]["tactil"] == "no"
        assert doc["entry_date"] == "2026-03-01T09:30:00+00:00"
        assert doc["warranty_start_date"] == "2026-03-04"
        assert doc["parts_used"][0]["unit_sale_price"] == 90000
        assert doc["classification"] == "sin stock"

    def test_unknown_keys_ignored(self) -> None:
        doc = order_to_document(_full_order())
        doc["legacy_field"] = "x"
        assert order_from_document(doc).id == "ord_42"

    def test_missing_classification_is_none(self) -> None:
        doc = order_to_document(_full_order())
        del doc["classification"]
        assert order_from_document(doc).classification is None

    def test_missing_legal_raises(self) -> None:
        doc = order_to_document(_full_order())
        del doc["legal"]
        with pytest.raises(KeyError):
            order_from_document(doc)

    def test_bad_status_raises(self) -> None:
        doc = order_to_document(_full_order())
        doc["status"] = "Perdido"
        with pytest.raises(ValueError):
            order_from_document(doc)


class TestLegalDocument:
    def test_round_trip(self) -> None:
        legal = take_snapshot("br-1", None)
        assert legal_from_document(legal_to_document(legal)) == legal
