"""BranchRepository — branch settings stored as one JSONB document per branch."""

import json
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.rs_branch.domain.models import Branch, BranchSettings

_GET_BRANCH_SQL = text("""
    SELECT id, name, settings
    FROM branches WHERE id = :id
""")

_SAVE_SETTINGS_SQL = text("""
    UPDATE branches
    SET settings = CAST(:settings AS JSONB),
        updated_at = NOW()
    WHERE id = :id
    RETURNING id
""")


def _load_settings(value: Any) -> BranchSettings | None:
    if value is None:
        return None
    data = json.loads(value) if isinstance(value, str) else value
    return BranchSettings.from_dict(data)


class BranchRepository:
    async def get_by_id(self, db: AsyncSession, branch_id: str) -> Branch | None:
        result = await db.execute(_GET_BRANCH_SQL, {"id": branch_id})
        row = result.fetchone()
        if row is None:
            return None
        return Branch(
            id=row.id,
            name=row.name,
            settings=_load_settings(row.settings),
        )

    async def save_settings(
        self, db: AsyncSession, branch_id: str, settings: BranchSettings
    ) -> bool:
        result = await db.execute(
            _SAVE_SETTINGS_SQL,
            {"id": branch_id, "settings": json.dumps(settings.to_dict())},
        )
        return result.fetchone() is not None
