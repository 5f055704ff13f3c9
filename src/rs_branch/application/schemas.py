"""Pydantic schemas for rs_branch API."""

from pydantic import BaseModel, ConfigDict, Field

from src.rs_branch.domain.models import BranchSettings


class BranchSettingsBody(BaseModel):
    """Full settings document. Omitted / null fields fall back to system defaults."""

    model_config = ConfigDict(extra="forbid")

    company_name: str | None = Field(None, max_length=200)
    company_logo_url: str | None = Field(None, max_length=500)
    company_cuit: str | None = Field(None, max_length=32)
    company_address: str | None = Field(None, max_length=300)
    company_contact_details: str | None = None
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
    abandonment_risk_days: int | None = Field(None, gt=0, le=3650)
    abandonment_final_days: int | None = Field(None, gt=0, le=3650)

    def to_domain(self) -> BranchSettings:
        return BranchSettings(**self.model_dump())

    @classmethod
    def from_domain(cls, settings: BranchSettings) -> "BranchSettingsBody":
        return cls(**settings.to_dict())


class BranchSettingsResponse(BaseModel):
    branch_id: str
    settings: BranchSettingsBody
    # Effective value per field after default fallback, as a new order would snapshot it
    effective: BranchSettingsBody
