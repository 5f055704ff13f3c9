"""RawCollectionRepository — whole-table JSON dump and replace.

PostgreSQL does the row <-> JSON conversion (to_jsonb / jsonb_populate_recordset)
so column types survive the round trip without per-table mappers.
"""

import json
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.rs_backup.domain.repository import RAW_COLLECTIONS


def _check(collection: str) -> None:
    # Table names are interpolated into SQL; only the fixed set is allowed.
    if collection not in RAW_COLLECTIONS:
        raise ValueError(f"Unknown collection: {collection}")


class RawCollectionRepository:
    async def dump(self, db: AsyncSession, collection: str) -> list[dict[str, Any]]:
        _check(collection)
        result = await db.execute(
            text(f"SELECT COALESCE(jsonb_agg(to_jsonb(t)), '[]'::jsonb) FROM {collection} t")
        )
        value = result.scalar_one()
        return json.loads(value) if isinstance(value, str) else value

    async def replace(
        self, db: AsyncSession, collection: str, rows: list[dict[str, Any]]
    ) -> int:
        _check(collection)
        await db.execute(text(f"DELETE FROM {collection}"))
        if not rows:
            return 0
        await db.execute(
            text(
                f"INSERT INTO {collection} "
                f"SELECT * FROM jsonb_populate_recordset(NULL::{collection}, CAST(:rows AS JSONB))"
            ),
            {"rows": json.dumps(rows)},
        )
        return len(rows)
