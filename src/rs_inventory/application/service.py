"""InventoryApplicationService — manual stock adjustments (restock, shrinkage)."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.rs_common.actor import Actor
from src.rs_inventory.application.schemas import PartResponse, StockAdjustmentRequest
from src.rs_inventory.domain.repository import PartRepositoryProtocol
from src.rs_inventory.infrastructure.persistence import PartRepository

logger = logging.getLogger(__name__)


class InventoryApplicationService:
    def __init__(self, repo: PartRepositoryProtocol | None = None) -> None:
        self._repo: PartRepositoryProtocol = repo or PartRepository()

    async def adjust_stock(
        self,
        db: AsyncSession,
        part_id: str,
        body: StockAdjustmentRequest,
        actor: Actor,
    ) -> PartResponse:
        try:
            part = await self._repo.adjust_stock(db, part_id, body.delta)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Manual stock adjustment on %s (%+d) by %s: %s",
            part_id,
            body.delta,
            actor.user_id,
            body.reason or "-",
        )
        return PartResponse.from_domain(part)
