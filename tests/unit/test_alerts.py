"""Unit tests for the operational alert engine."""

from dataclasses import replace
from datetime import UTC, datetime, timedelta

import pytest

from src.rs_common.enums import AlertReason, OrderStatus
from src.rs_order.domain.alerts import AlertThresholds, evaluate_alert, evaluate_alerts
from src.rs_order.domain.models import Order
from src.rs_order.domain.snapshot import take_snapshot

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=UTC)


def _make_order(**kwargs) -> Order:
    defaults = dict(
        id="ord_1", order_number="ORD001", branch_id="br-1", client_id="cli-1",
        device_brand="Xiaomi", device_model="Note 10", declared_fault="Batería",
        legal=take_snapshot("br-1", None), entry_date=NOW - timedelta(days=1),
        created_by="u1",
    )
    defaults.update(kwargs)
    return Order(**defaults)


def _ready(days_ago: float, **kwargs) -> Order:
    return _make_order(
        status=OrderStatus.READY_FOR_PICKUP,
        ready_for_pickup_date=NOW - timedelta(days=days_ago),
        **kwargs,
    )


class TestAwaitingParts:
    def test_always_alerts(self) -> None:
        alert = evaluate_alert(_make_order(status=OrderStatus.AWAITING_PARTS), NOW)
        assert alert is not None
        assert alert.reason is AlertReason.AWAITING_PARTS
        assert alert.message == "Esperando repuestos"


class TestStaleQuote:
    def test_not_yet_stale(self) -> None:
        order = _make_order(status=OrderStatus.QUOTED, entry_date=NOW - timedelta(days=3))
        assert evaluate_alert(order, NOW) is None

    def test_stale(self) -> None:
        order = _make_order(status=OrderStatus.QUOTED, entry_date=NOW - timedelta(days=4))
        alert = evaluate_alert(order, NOW)
        assert alert.reason is AlertReason.STALE_QUOTE
        assert alert.message == "Esperando aprobación hace 4 días"


class TestReadyForPickup:
    def test_within_grace(self) -> None:
        assert evaluate_alert(_ready(7), NOW) is None

    def test_stale_pickup(self) -> None:
        alert = evaluate_alert(_ready(10), NOW)
        assert alert.reason is AlertReason.STALE_PICKUP
        assert alert.message == "Listo hace 10 días"

    def test_risk(self) -> None:
        alert = evaluate_alert(_ready(30), NOW)
        assert alert.reason is AlertReason.ABANDONMENT_RISK
        assert alert.message == "Equipo en riesgo de abandono (30+ días)."

    def test_abandoned(self) -> None:
        alert = evaluate_alert(_ready(60), NOW)
        assert alert.reason is AlertReason.ABANDONED
        assert alert.message == "Equipo considerado abandonado (60+ días)."

    def test_seven_days_twenty_three_hours_is_seven(self) -> None:
        assert evaluate_alert(_ready(7 + 23 / 24), NOW) is None

    def test_swapped_thresholds_use_smaller_as_risk(self) -> None:
        order = _ready(10)
        order.legal = replace(order.legal, abandonment_risk_days=14, abandonment_final_days=7)
        alert = evaluate_alert(order, NOW)
        assert alert.reason is AlertReason.ABANDONMENT_RISK
        assert alert.days == 10

    def test_thresholds_override_snapshot(self) -> None:
        thresholds = AlertThresholds(abandonment_risk_days=8, abandonment_final_days=9)
        alert = evaluate_alert(_ready(9), NOW, thresholds)
        assert alert.reason is AlertReason.ABANDONED

    def test_missing_ready_date_never_alerts(self) -> None:
        order = _make_order(status=OrderStatus.READY_FOR_PICKUP)
        assert evaluate_alert(order, NOW) is None


class TestNoAlert:
    @pytest.mark.parametrize(
        "status",
        [
            OrderStatus.DELIVERED,
            OrderStatus.QUOTE_REJECTED,
            OrderStatus.NOT_REPAIRED,
            OrderStatus.RECEIVED,
            OrderStatus.REPAIRING,
        ],
    )
    def test_status_without_alert(self, status: OrderStatus) -> None:
        order = _make_order(
            status=status,
            entry_date=NOW - timedelta(days=200),
            ready_for_pickup_date=NOW - timedelta(days=200),
        )
        assert evaluate_alert(order, NOW) is None


class TestEvaluateAlerts:
    def test_filters_and_keeps_order(self) -> None:
        orders = [
            _make_order(id="a", status=OrderStatus.AWAITING_PARTS),
            _make_order(id="b", status=OrderStatus.RECEIVED),
            _ready(61, id="c"),
        ]
        alerts = evaluate_alerts(orders, NOW)
        assert [a.order_id for a in alerts] == ["a", "c"]

    def test_does_not_mutate(self) -> None:
        order = _ready(61)
        before = replace(order)
        evaluate_alerts([order], NOW)
        assert order == before
