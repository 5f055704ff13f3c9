"""PartRepository — atomic stock adjustments over the parts table.

The conditional UPDATE ... RETURNING is the whole concurrency story: a result
of 0 rows means the part is missing or the adjustment would go below zero.

Transaction ownership: the CALLER commits or rolls back, so a stock change and
the order write that caused it land together.
"""

import logging
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.rs_common.errors import InsufficientStockError, PartNotFoundError
from src.rs_inventory.domain.models import Part

logger = logging.getLogger(__name__)

_PART_COLUMNS = "id, name, sku, sale_price, cost_price, stock, min_stock, created_at, updated_at"

_GET_PART_SQL = text(f"""
    SELECT {_PART_COLUMNS}
    FROM parts WHERE id = :id
""")

_ADJUST_STOCK_SQL = text(f"""
    UPDATE parts
    SET stock = stock + :delta,
        updated_at = NOW()
    WHERE id = :id AND stock + :delta >= 0
    RETURNING {_PART_COLUMNS}
""")


def _row_to_part(row: Any) -> Part:
    return Part(
        id=row.id,
        name=row.name,
        sku=row.sku,
        sale_price=row.sale_price,
        cost_price=row.cost_price,
        stock=row.stock,
        min_stock=row.min_stock,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class PartRepository:
    async def get_by_id(self, db: AsyncSession, part_id: str) -> Part | None:
        result = await db.execute(_GET_PART_SQL, {"id": part_id})
        row = result.fetchone()
        return _row_to_part(row) if row else None

    async def adjust_stock(self, db: AsyncSession, part_id: str, delta: int) -> Part:
        result = await db.execute(_ADJUST_STOCK_SQL, {"id": part_id, "delta": delta})
        row = result.fetchone()
        if row is None:
            # Either the part doesn't exist or stock would go negative
            current = await self.get_by_id(db, part_id)
            if current is None:
                raise PartNotFoundError(part_id)
            raise InsufficientStockError(part_id, -delta, current.stock)
        part = _row_to_part(row)
        logger.info("Part %s stock %+d -> %d", part_id, delta, part.stock)
        if part.is_low_stock:
            logger.warning("Part %s is low on stock (%d <= %d)", part_id, part.stock, part.min_stock)
        return part
