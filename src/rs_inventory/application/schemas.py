"""Pydantic schemas for rs_inventory API."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.rs_common.cents import cents_to_display
from src.rs_inventory.domain.models import Part


class StockAdjustmentRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    delta: int = Field(..., description="Units to add (positive) or remove (negative)")
    reason: str | None = Field(None, max_length=200)

    @field_validator("delta")
    @classmethod
    def delta_not_zero(cls, v: int) -> int:
        if v == 0:
            raise ValueError("delta must not be zero")
        return v


class PartResponse(BaseModel):
    id: str
    name: str
    sku: str | None
    sale_price_cents: int
    sale_price_display: str
    cost_price_cents: int
    stock: int
    min_stock: int
    is_low_stock: bool

    @classmethod
    def from_domain(cls, part: Part) -> "PartResponse":
        return cls(
            id=part.id,
            name=part.name,
            sku=part.sku,
            sale_price_cents=part.sale_price,
            sale_price_display=cents_to_display(part.sale_price),
            cost_price_cents=part.cost_price,
            stock=part.stock,
            min_stock=part.min_stock,
            is_low_stock=part.is_low_stock,
        )
