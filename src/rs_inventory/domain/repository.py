"""PartRepository Protocol — the stock counter is shared by orders and inventory."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.rs_inventory.domain.models import Part


class PartRepositoryProtocol(Protocol):
    async def get_by_id(self, db: AsyncSession, part_id: str) -> Part | None: ...

    async def adjust_stock(self, db: AsyncSession, part_id: str, delta: int) -> Part:
        """Atomically add delta (may be negative) to stock, never below zero.

        Raises PartNotFoundError or InsufficientStockError; no change on failure.
        """
        ...
