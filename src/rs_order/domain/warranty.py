"""WarrantyCalculator — derives warranty dates from the selected type.

Template warranties (30d/60d/90d) start on an anchor date: the delivery date
once the device has been handed over, otherwise today. Custom warranties keep
the dates the operator typed in and are never moved by a recompute.
"""

from dataclasses import dataclass
from datetime import date, timedelta

from src.rs_common.enums import WarrantyType
from src.rs_common.errors import InvalidWarrantyError
from src.rs_order.domain.models import Order

TEMPLATE_DAYS: dict[WarrantyType, int] = {
    WarrantyType.DAYS_30: 30,
    WarrantyType.DAYS_60: 60,
    WarrantyType.DAYS_90: 90,
}


@dataclass(frozen=True)
class WarrantyTerms:
    has_warranty: bool
    warranty_type: WarrantyType
    start_date: date | None
    end_date: date | None


def calculate_warranty(
    warranty_type: WarrantyType,
    anchor: date,
    start: date | None = None,
    end: date | None = None,
) -> WarrantyTerms:
    if warranty_type == WarrantyType.NONE:
        return WarrantyTerms(False, warranty_type, None, None)

    if warranty_type == WarrantyType.CUSTOM:
        if start is None:
            raise InvalidWarrantyError(
                "warranty_start_date", "A custom warranty needs a start date"
            )
        if end is None:
            raise InvalidWarrantyError(
                "warranty_end_date", "A custom warranty needs an end date"
            )
        if end <= start:
            raise InvalidWarrantyError(
                "warranty_end_date",
                f"Warranty end date {end.isoformat()} must be after start date {start.isoformat()}",
            )
        return WarrantyTerms(True, warranty_type, start, end)

    days = TEMPLATE_DAYS[warranty_type]
    return WarrantyTerms(True, warranty_type, anchor, anchor + timedelta(days=days))


def warranty_anchor(order: Order, today: date) -> date:
    return order.delivery_date.date() if order.delivery_date else today


def apply_terms(order: Order, terms: WarrantyTerms) -> None:
    order.has_warranty = terms.has_warranty
    order.warranty_type = terms.warranty_type
    order.warranty_start_date = terms.start_date
    order.warranty_end_date = terms.end_date


def reanchor_warranty(order: Order, anchor: date, force: bool = False) -> bool:
    """Move a template warranty onto a new anchor date.

    Only allowed while the warranty has not started (no delivery yet) or when
    forced. Custom and empty warranties are left alone. Returns True if the
    dates changed.
    """
    if order.warranty_type not in TEMPLATE_DAYS:
        return False
    if order.delivery_date is not None and not force:
        return False

    terms = calculate_warranty(order.warranty_type, anchor)
    changed = (
        order.warranty_start_date != terms.start_date
        or order.warranty_end_date != terms.end_date
    )
    apply_terms(order, terms)
    return changed


def is_under_warranty(order: Order, today: date) -> bool:
    if not order.has_warranty or order.warranty_start_date is None:
        return False
    if order.warranty_end_date is None:
        return False
    return order.warranty_start_date <= today <= order.warranty_end_date
