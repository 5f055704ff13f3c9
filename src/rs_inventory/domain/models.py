"""Part domain model — pure dataclass."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Part:
    id: str
    name: str
    sku: str | None
    sale_price: int  # cents
    cost_price: int  # cents
    stock: int
    min_stock: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.min_stock
