"""Domain models for rs_branch — pure dataclasses, no business logic."""

from dataclasses import dataclass, fields


@dataclass
class BranchSettings:
    """Mutable per-branch settings document. Every field is optional."""

    # Company identity
    company_name: str | None = None
    company_logo_url: str | None = None
    company_cuit: str | None = None
    company_address: str | None = None
    company_contact_details: str | None = None
    # Legal texts
    warranty_conditions: str | None = None
    pickup_conditions: str | None = None
    unlock_disclaimer_text: str | None = None
    abandonment_policy_text: str | None = None
    data_loss_policy_text: str | None = None
    untested_device_policy_text: str | None = None
    budget_variation_text: str | None = None
    high_risk_device_text: str | None = None
    partial_damage_display_text: str | None = None
    warranty_void_conditions_text: str | None = None
    privacy_policy_text: str | None = None
    # Abandonment thresholds (days since "ready for pickup")
    abandonment_risk_days: int | None = None
    abandonment_final_days: int | None = None

    def to_dict(self) -> dict[str, str | int | None]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict | None) -> "BranchSettings":
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class Branch:
    id: str
    name: str
    settings: BranchSettings | None  # None until an admin saves one
