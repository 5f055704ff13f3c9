"""CostLedger — itemized parts usage and budget totals for one order.

All amounts are integer cents. Every line mutation ends by recomputing
cost_spare_part, which is the only place that field is written. Invalid input
is rejected, never clamped.
"""

from src.rs_common.cents import validate_amount
from src.rs_common.errors import (
    DuplicatePartLineError,
    InvalidQuantityError,
    LineIndexError,
)
from src.rs_order.domain.models import Order, OrderPartItem


def _validate_quantity(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise InvalidQuantityError(quantity)


def _line_at(order: Order, line_index: int) -> OrderPartItem:
    if line_index < 0 or line_index >= len(order.parts_used):
        raise LineIndexError(line_index)
    return order.parts_used[line_index]


def spare_part_cost(lines: list[OrderPartItem]) -> int:
    return sum(line.quantity * line.unit_sale_price for line in lines)


def recompute_spare_part_cost(order: Order) -> int:
    order.cost_spare_part = spare_part_cost(order.parts_used)
    return order.cost_spare_part


def find_line(order: Order, part_id: str) -> int | None:
    for index, line in enumerate(order.parts_used):
        if line.part_id == part_id:
            return index
    return None


def add_part(
    order: Order,
    part_id: str,
    part_name: str,
    quantity: int,
    unit_sale_price: int,
    unit_cost_price: int,
) -> OrderPartItem:
    _validate_quantity(quantity)
    validate_amount("unit_sale_price", unit_sale_price)
    validate_amount("unit_cost_price", unit_cost_price)
    if find_line(order, part_id) is not None:
        raise DuplicatePartLineError(part_id)

    line = OrderPartItem(
        part_id=part_id,
        part_name=part_name,
        quantity=quantity,
        unit_sale_price=unit_sale_price,
        unit_cost_price=unit_cost_price,
    )
    order.parts_used.append(line)
    recompute_spare_part_cost(order)
    return line


def update_quantity(order: Order, line_index: int, quantity: int) -> int:
    """Set a line's quantity. Returns the stock delta (new - old)."""
    _validate_quantity(quantity)
    line = _line_at(order, line_index)
    delta = quantity - line.quantity
    line.quantity = quantity
    recompute_spare_part_cost(order)
    return delta


def remove_line(order: Order, line_index: int) -> OrderPartItem:
    line = _line_at(order, line_index)
    del order.parts_used[line_index]
    recompute_spare_part_cost(order)
    return line


def set_labor_cost(order: Order, amount: int) -> None:
    validate_amount("cost_labor", amount)
    order.cost_labor = amount


def set_pending_cost(order: Order, amount: int) -> None:
    validate_amount("cost_pending", amount)
    order.cost_pending = amount


def total_estimate(order: Order) -> int:
    """Budget total shown to the customer; cost_pending is tracked separately."""
    return order.cost_spare_part + order.cost_labor


def margin(order: Order) -> int:
    """Internal reporting only. Never rendered on customer documents."""
    return sum(
        line.quantity * (line.unit_sale_price - line.unit_cost_price)
        for line in order.parts_used
    )
