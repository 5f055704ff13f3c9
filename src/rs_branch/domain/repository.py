"""BranchRepository Protocol."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.rs_branch.domain.models import Branch, BranchSettings


class BranchRepositoryProtocol(Protocol):
    async def get_by_id(self, db: AsyncSession, branch_id: str) -> Branch | None: ...

    async def save_settings(
        self, db: AsyncSession, branch_id: str, settings: BranchSettings
    ) -> bool:
        """Returns False if the branch does not exist."""
        ...
