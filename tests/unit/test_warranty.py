"""Unit tests for warranty date calculation and re-anchoring."""

from datetime import UTC, date, datetime

import pytest

from src.rs_common.enums import WarrantyType
from src.rs_common.errors import InvalidWarrantyError
from src.rs_order.domain.models import Order
from src.rs_order.domain.snapshot import take_snapshot
from src.rs_order.domain.warranty import (
    apply_terms,
    calculate_warranty,
    is_under_warranty,
    reanchor_warranty,
    warranty_anchor,
)


def _make_order(**kwargs) -> Order:
    defaults = dict(
        id="ord_1", order_number="ORD001", branch_id="br-1", client_id="cli-1",
        device_brand="Motorola", device_model="G8", declared_fault="Pantalla",
        legal=take_snapshot("br-1", None), entry_date=datetime(2026, 3, 1, tzinfo=UTC),
        created_by="u1",
    )
    defaults.update(kwargs)
    return Order(**defaults)


class TestCalculateWarranty:
    def test_none(self) -> None:
        terms = calculate_warranty(WarrantyType.NONE, date(2026, 3, 1))
        assert terms.has_warranty is False
        assert terms.start_date is None
        assert terms.end_date is None

    @pytest.mark.parametrize(
        "warranty_type,days",
        [(WarrantyType.DAYS_30, 30), (WarrantyType.DAYS_60, 60), (WarrantyType.DAYS_90, 90)],
    )
    def test_templates(self, warranty_type: WarrantyType, days: int) -> None:
        terms = calculate_warranty(warranty_type, date(2026, 3, 1))
        assert terms.has_warranty is True
        assert terms.start_date == date(2026, 3, 1)
        assert (terms.end_date - terms.start_date).days == days

    def test_ninety_days_crosses_month(self) -> None:
        terms = calculate_warranty(WarrantyType.DAYS_90, date(2026, 3, 10))
        assert terms.end_date == date(2026, 6, 8)

    def test_custom_keeps_dates(self) -> None:
        terms = calculate_warranty(
            WarrantyType.CUSTOM, date(2026, 3, 1), date(2026, 4, 1), date(2026, 10, 1)
        )
        assert terms.start_date == date(2026, 4, 1)
        assert terms.end_date == date(2026, 10, 1)

    def test_custom_without_start(self) -> None:
        with pytest.raises(InvalidWarrantyError) as exc_info:
            calculate_warranty(WarrantyType.CUSTOM, date(2026, 3, 1), None, date(2026, 4, 1))
        assert exc_info.value.field == "warranty_start_date"

    def test_custom_end_before_start(self) -> None:
        with pytest.raises(InvalidWarrantyError) as exc_info:
            calculate_warranty(
                WarrantyType.CUSTOM, date(2026, 3, 1), date(2026, 4, 1), date(2026, 4, 1)
            )
        assert exc_info.value.field == "warranty_end_date"


class TestReanchor:
    def test_template_before_delivery_moves(self) -> None:
        order = _make_order()
        apply_terms(order, calculate_warranty(WarrantyType.DAYS_30, date(2026, 3, 1)))
        assert reanchor_warranty(order, date(2026, 3, 5)) is True
        assert order.warranty_start_date == date(2026, 3, 5)
        assert order.warranty_end_date == date(2026, 4, 4)

    def test_after_delivery_needs_force(self) -> None:
        order = _make_order(delivery_date=datetime(2026, 3, 3, tzinfo=UTC))
        apply_terms(order, calculate_warranty(WarrantyType.DAYS_30, date(2026, 3, 3)))
        assert reanchor_warranty(order, date(2026, 3, 9)) is False
        assert order.warranty_start_date == date(2026, 3, 3)
        assert reanchor_warranty(order, date(2026, 3, 9), force=True) is True

    def test_custom_never_moves(self) -> None:
        order = _make_order()
        apply_terms(
            order,
            calculate_warranty(
                WarrantyType.CUSTOM, date(2026, 3, 1), date(2026, 3, 2), date(2026, 5, 2)
            ),
        )
        assert reanchor_warranty(order, date(2026, 4, 1), force=True) is False
        assert order.warranty_start_date == date(2026, 3, 2)

    def test_unchanged_returns_false(self) -> None:
        order = _make_order()
        apply_terms(order, calculate_warranty(WarrantyType.DAYS_60, date(2026, 3, 1)))
        assert reanchor_warranty(order, date(2026, 3, 1)) is False


class TestAnchorAndCoverage:
    def test_anchor_is_delivery_date(self) -> None:
        order = _make_order(delivery_date=datetime(2026, 3, 7, 15, tzinfo=UTC))
        assert warranty_anchor(order, date(2026, 9, 1)) == date(2026, 3, 7)

    def test_anchor_defaults_to_today(self) -> None:
        assert warranty_anchor(_make_order(), date(2026, 9, 1)) == date(2026, 9, 1)

    def test_under_warranty_inclusive(self) -> None:
        order = _make_order()
        apply_terms(order, calculate_warranty(WarrantyType.DAYS_30, date(2026, 3, 1)))
        assert is_under_warranty(order, date(2026, 3, 31))
        assert not is_under_warranty(order, date(2026, 4, 1))

    def test_no_warranty(self) -> None:
        assert not is_under_warranty(_make_order(), date(2026, 3, 1))
