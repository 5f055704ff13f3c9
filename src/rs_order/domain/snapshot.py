"""LegalTextSnapshotter — freezes store policy into the order at intake.

Branch settings are mutable; the order must keep the exact terms the customer
accepted. The snapshot is built once, inside the creation transaction, and is
never part of any update write set.
"""

import logging

from src.rs_branch.domain.defaults import DEFAULT_BRANCH_SETTINGS
from src.rs_branch.domain.models import BranchSettings
from src.rs_common.errors import AcceptanceRequiredError
from src.rs_order.domain.models import LegalSnapshot

logger = logging.getLogger(__name__)

_TEXT_FIELDS: tuple[str, ...] = (
    "company_name",
    "company_logo_url",
    "company_cuit",
    "company_address",
    "company_contact_details",
    "warranty_conditions",
    "pickup_conditions",
    "unlock_disclaimer_text",
    "abandonment_policy_text",
    "data_loss_policy_text",
    "untested_device_policy_text",
    "budget_variation_text",
    "high_risk_device_text",
    "partial_damage_display_text",
    "warranty_void_conditions_text",
    "privacy_policy_text",
)


def _is_absent(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def take_snapshot(
    branch_id: str,
    settings: BranchSettings | None,
    defaults: BranchSettings = DEFAULT_BRANCH_SETTINGS,
) -> LegalSnapshot:
    """Copy every legal field verbatim, falling back to defaults per field."""
    if settings is None:
        logger.warning(
            "No settings document for branch %s, snapshotting system defaults", branch_id
        )
        settings = BranchSettings()

    values: dict[str, object] = {}
    fallbacks: list[str] = []
    for name in _TEXT_FIELDS:
        value = getattr(settings, name)
        if _is_absent(value):
            value = getattr(defaults, name) or ""
            fallbacks.append(name)
        values[name] = value

    final_days = settings.abandonment_final_days
    if final_days is None or final_days <= 0:
        final_days = defaults.abandonment_final_days or 0
        fallbacks.append("abandonment_final_days")
    risk_days = settings.abandonment_risk_days
    if risk_days is None or risk_days <= 0:
        risk_days = final_days // 2
        fallbacks.append("abandonment_risk_days")

    if fallbacks:
        logger.info("Branch %s snapshot used defaults for: %s", branch_id, ", ".join(fallbacks))

    return LegalSnapshot(
        abandonment_risk_days=risk_days,
        abandonment_final_days=final_days,
        **values,  # type: ignore[arg-type]
    )


def check_acceptance(
    snapshot: LegalSnapshot,
    customer_accepted: bool,
    customer_signature_name: str | None,
    data_loss_disclaimer_accepted: bool,
    privacy_policy_accepted: bool,
) -> None:
    """Reject intake when the customer has not accepted the snapshotted terms."""
    if customer_accepted and _is_absent(customer_signature_name):
        raise AcceptanceRequiredError(
            "customer_signature_name",
            "The customer's signature name is required when the terms are accepted",
        )

    data_loss_text = snapshot.data_loss_policy_text.strip()
    if data_loss_text and not data_loss_disclaimer_accepted:
        raise AcceptanceRequiredError(
            "data_loss_disclaimer_accepted",
            "The customer must accept the data loss policy",
        )

    privacy_text = snapshot.privacy_policy_text.strip()
    if privacy_text and privacy_text != data_loss_text and not privacy_policy_accepted:
        raise AcceptanceRequiredError(
            "privacy_policy_accepted",
            "The customer must accept the privacy policy",
        )
