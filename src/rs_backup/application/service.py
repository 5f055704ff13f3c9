"""BackupApplicationService — export and restore the whole dataset.

Restore is all-or-nothing: every collection is replaced inside one
transaction, and a single malformed order aborts it before anything is
written.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.rs_backup.application.schemas import BackupDocument, RestoreResponse
from src.rs_backup.domain.repository import RAW_COLLECTIONS, RawCollectionRepositoryProtocol
from src.rs_backup.infrastructure.persistence import RawCollectionRepository
from src.rs_common.actor import Actor
from src.rs_common.datetime_utils import utc_now
from src.rs_common.errors import ValidationError
from src.rs_order.domain.codec import order_from_document, order_to_document
from src.rs_order.domain.models import Order
from src.rs_order.domain.repository import OrderRepositoryProtocol
from src.rs_order.infrastructure.persistence import OrderRepository

logger = logging.getLogger(__name__)


def decode_orders(docs: list[dict]) -> list[Order]:
    orders = []
    for index, doc in enumerate(docs):
        try:
            orders.append(order_from_document(doc))
        except (KeyError, TypeError, ValueError) as exc:
            raise ValidationError(f"orders[{index}]", f"Malformed order document: {exc}") from exc
    return orders


class BackupApplicationService:
    def __init__(
        self,
        order_repo: OrderRepositoryProtocol | None = None,
        raw_repo: RawCollectionRepositoryProtocol | None = None,
    ) -> None:
        self._order_repo: OrderRepositoryProtocol = order_repo or OrderRepository()
        self._raw_repo: RawCollectionRepositoryProtocol = raw_repo or RawCollectionRepository()

    async def export(self, db: AsyncSession) -> BackupDocument:
        orders = await self._order_repo.list_all(db)
        collections = {name: await self._raw_repo.dump(db, name) for name in RAW_COLLECTIONS}
        return BackupDocument(
            backup_date=utc_now(),
            orders=[order_to_document(o) for o in orders],
            **collections,
        )

    async def restore(
        self, db: AsyncSession, document: BackupDocument, actor: Actor
    ) -> RestoreResponse:
        orders = decode_orders(document.orders)
        restored: dict[str, int] = {}
        try:
            for name in RAW_COLLECTIONS:
                restored[name] = await self._raw_repo.replace(db, name, getattr(document, name))
            await self._order_repo.replace_all(db, orders)
            restored["orders"] = len(orders)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.warning(
            "Dataset restored from backup dated %s by %s: %s",
            document.backup_date.isoformat(),
            actor.user_id,
            restored,
        )
        return RestoreResponse(backup_date=document.backup_date, restored=restored)
