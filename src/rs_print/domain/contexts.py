"""Status context buckets and the section gates that depend on them.

Buckets overlap on purpose: a rejected or unrepaired order is still being
quoted (the customer saw a budget) and is also going back to the customer.
"""

from enum import Enum

from src.rs_common.enums import OrderStatus, StatusContext
from src.rs_order.domain import ledger
from src.rs_order.domain.models import Order

STATUS_CONTEXTS: dict[StatusContext, frozenset[OrderStatus]] = {
    StatusContext.INTAKE: frozenset({OrderStatus.RECEIVED, OrderStatus.DIAGNOSING}),
    StatusContext.QUOTE: frozenset(
        {
            OrderStatus.QUOTED,
            OrderStatus.QUOTE_APPROVED,
            OrderStatus.QUOTE_REJECTED,
            OrderStatus.NOT_REPAIRED,
        }
    ),
    StatusContext.REPAIR: frozenset(
        {
            OrderStatus.AWAITING_PARTS,
            OrderStatus.REPAIRING,
            OrderStatus.REPAIRED,
            OrderStatus.QUALITY_CHECK,
        }
    ),
    StatusContext.DELIVERY: frozenset(
        {
            OrderStatus.READY_FOR_PICKUP,
            OrderStatus.DELIVERED,
            OrderStatus.QUOTE_REJECTED,
            OrderStatus.NOT_REPAIRED,
        }
    ),
}


class Section(str, Enum):
    CHECKLIST = "checklist"
    BUDGET = "budget"
    COMMENTS = "comments"
    WARRANTY = "warranty"
    CLIENT_RECEPTION_SIGNATURE = "client_reception_signature"
    TECHNICIAN_RECEPTION_SIGNATURE = "technician_reception_signature"
    CLIENT_QUOTE_SIGNATURE = "client_quote_signature"
    CLIENT_DELIVERY_SIGNATURE = "client_delivery_signature"


_SECTION_BUCKETS: dict[Section, frozenset[StatusContext]] = {
    Section.CHECKLIST: frozenset(
        {StatusContext.INTAKE, StatusContext.QUOTE, StatusContext.REPAIR}
    ),
    Section.BUDGET: frozenset(
        {StatusContext.QUOTE, StatusContext.REPAIR, StatusContext.DELIVERY}
    ),
    Section.COMMENTS: frozenset(
        {StatusContext.QUOTE, StatusContext.REPAIR, StatusContext.DELIVERY}
    ),
    Section.WARRANTY: frozenset({StatusContext.REPAIR, StatusContext.DELIVERY}),
    Section.CLIENT_RECEPTION_SIGNATURE: frozenset({StatusContext.INTAKE}),
    Section.TECHNICIAN_RECEPTION_SIGNATURE: frozenset({StatusContext.INTAKE}),
    Section.CLIENT_QUOTE_SIGNATURE: frozenset({StatusContext.QUOTE}),
    Section.CLIENT_DELIVERY_SIGNATURE: frozenset({StatusContext.DELIVERY}),
}

# First matching bucket wins.
_TITLES: tuple[tuple[StatusContext, str], ...] = (
    (StatusContext.DELIVERY, "Comprobante de Entrega"),
    (StatusContext.QUOTE, "Presupuesto"),
    (StatusContext.REPAIR, "Orden de Trabajo"),
    (StatusContext.INTAKE, "Comprobante de Ingreso"),
)


def contexts_for(status: OrderStatus) -> frozenset[StatusContext]:
    return frozenset(ctx for ctx, statuses in STATUS_CONTEXTS.items() if status in statuses)


def _data_condition(section: Section, order: Order) -> bool:
    if section is Section.BUDGET:
        return ledger.total_estimate(order) > 0
    if section is Section.COMMENTS:
        return len(order.comments_history) > 0
    if section is Section.WARRANTY:
        return order.has_warranty
    if section is Section.CLIENT_RECEPTION_SIGNATURE:
        return order.customer_accepted
    return True


def visible_sections(order: Order) -> frozenset[Section]:
    contexts = contexts_for(order.status)
    return frozenset(
        section
        for section, buckets in _SECTION_BUCKETS.items()
        if contexts & buckets and _data_condition(section, order)
    )


def document_title(status: OrderStatus) -> str:
    contexts = contexts_for(status)
    for context, title in _TITLES:
        if context in contexts:
            return title
    return "Orden de Servicio"
