"""AlertEngine — operational alerts derived from status and elapsed time.

Pure read-side function: nothing here mutates the order.
"""

from dataclasses import dataclass
from datetime import datetime

from src.rs_common.datetime_utils import elapsed_days
from src.rs_common.enums import AlertReason, OrderStatus
from src.rs_order.domain.models import Order, OrderAlert


@dataclass(frozen=True)
class AlertThresholds:
    stale_quote_days: int = 3
    stale_pickup_days: int = 7
    # When set, these override the thresholds snapshotted into the order.
    abandonment_risk_days: int | None = None
    abandonment_final_days: int | None = None


def _abandonment_thresholds(order: Order, thresholds: AlertThresholds) -> tuple[int, int]:
    """Return (risk, final). Tolerates the pair being supplied in either order."""
    risk = thresholds.abandonment_risk_days
    final = thresholds.abandonment_final_days
    if risk is None and final is None:
        risk = order.legal.abandonment_risk_days
        final = order.legal.abandonment_final_days
    if final is None or final <= 0:
        final = risk or 0
    if risk is None or risk <= 0:
        risk = final // 2
    return min(risk, final), max(risk, final)


def evaluate_alert(
    order: Order,
    now: datetime,
    thresholds: AlertThresholds | None = None,
) -> OrderAlert | None:
    thresholds = thresholds or AlertThresholds()

    if order.status == OrderStatus.AWAITING_PARTS:
        return OrderAlert(
            order_id=order.id,
            order_number=order.order_number,
            status=order.status,
            reason=AlertReason.AWAITING_PARTS,
            days=max(elapsed_days(order.entry_date, now), 0),
            message="Esperando repuestos",
        )

    if order.status == OrderStatus.QUOTED:
        days = elapsed_days(order.entry_date, now)
        if days > thresholds.stale_quote_days:
            return OrderAlert(
                order_id=order.id,
                order_number=order.order_number,
                status=order.status,
                reason=AlertReason.STALE_QUOTE,
                days=days,
                message=f"Esperando aprobación hace {days} días",
            )
        return None

    if order.status == OrderStatus.READY_FOR_PICKUP and order.ready_for_pickup_date:
        days = elapsed_days(order.ready_for_pickup_date, now)
        if days <= thresholds.stale_pickup_days:
            return None
        risk, final = _abandonment_thresholds(order, thresholds)
        if final and days >= final:
            reason = AlertReason.ABANDONED
            message = f"Equipo considerado abandonado ({final}+ días)."
        elif risk and days >= risk:
            reason = AlertReason.ABANDONMENT_RISK
            message = f"Equipo en riesgo de abandono ({risk}+ días)."
        else:
            reason = AlertReason.STALE_PICKUP
            message = f"Listo hace {days} días"
        return OrderAlert(
            order_id=order.id,
            order_number=order.order_number,
            status=order.status,
            reason=reason,
            days=days,
            message=message,
        )

    # Terminal and every other status never alert.
    return None


def evaluate_alerts(
    orders: list[Order],
    now: datetime,
    thresholds: AlertThresholds | None = None,
) -> list[OrderAlert]:
    alerts = []
    for order in orders:
        alert = evaluate_alert(order, now, thresholds)
        if alert is not None:
            alerts.append(alert)
    return alerts
