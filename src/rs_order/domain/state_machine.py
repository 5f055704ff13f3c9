"""OrderStateMachine — status transitions and milestone stamps.

Operators may move an order between any two statuses (including backwards and
out of terminal statuses). The only rejected request is a no-op. Milestone
dates are stamped on first entry only.
"""

import logging
from datetime import datetime

from src.rs_common.actor import Actor
from src.rs_common.enums import OrderStatus
from src.rs_common.errors import InvalidStatusTransitionError
from src.rs_order.domain.models import Order
from src.rs_order.domain.warranty import reanchor_warranty

logger = logging.getLogger(__name__)

INITIAL_STATUS = OrderStatus.RECEIVED

# Forward path used by UIs to suggest the next step; not enforced.
HAPPY_PATH: tuple[OrderStatus, ...] = (
    OrderStatus.RECEIVED,
    OrderStatus.DIAGNOSING,
    OrderStatus.QUOTED,
    OrderStatus.QUOTE_APPROVED,
    OrderStatus.AWAITING_PARTS,
    OrderStatus.REPAIRING,
    OrderStatus.REPAIRED,
    OrderStatus.QUALITY_CHECK,
    OrderStatus.READY_FOR_PICKUP,
    OrderStatus.DELIVERED,
)


def is_valid_transition(current: OrderStatus, new: OrderStatus) -> bool:
    return new != current


def next_status(current: OrderStatus) -> OrderStatus | None:
    if current not in HAPPY_PATH:
        return None
    index = HAPPY_PATH.index(current)
    return HAPPY_PATH[index + 1] if index + 1 < len(HAPPY_PATH) else None


def apply_transition(
    order: Order,
    new_status: OrderStatus,
    actor: Actor,
    now: datetime,
) -> OrderStatus:
    """Move the order to new_status. Returns the previous status.

    Raises InvalidStatusTransitionError without touching the order when the
    request is a no-op.
    """
    previous = order.status
    if not is_valid_transition(previous, new_status):
        raise InvalidStatusTransitionError(previous.value)

    order.status = new_status

    if new_status == OrderStatus.READY_FOR_PICKUP and order.ready_for_pickup_date is None:
        order.ready_for_pickup_date = now

    if new_status == OrderStatus.DELIVERED and order.delivery_date is None:
        order.delivery_date = now
        # Template warranties start counting on the day the device leaves the shop.
        reanchor_warranty(order, now.date(), force=True)

    order.touch(actor.user_id, now)
    logger.info(
        "Order %s status %s -> %s by %s",
        order.order_number,
        previous.value,
        new_status.value,
        actor.user_id,
    )
    return previous
