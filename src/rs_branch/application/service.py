"""BranchApplicationService — read and replace a branch's settings document.

Editing settings never touches existing orders: their legal text was
snapshotted at intake.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.rs_branch.application.schemas import BranchSettingsBody, BranchSettingsResponse
from src.rs_branch.domain.defaults import with_defaults
from src.rs_branch.domain.models import BranchSettings
from src.rs_branch.domain.repository import BranchRepositoryProtocol
from src.rs_branch.infrastructure.persistence import BranchRepository
from src.rs_common.actor import Actor
from src.rs_common.errors import BranchNotFoundError

logger = logging.getLogger(__name__)


def _to_response(branch_id: str, settings: BranchSettings) -> BranchSettingsResponse:
    return BranchSettingsResponse(
        branch_id=branch_id,
        settings=BranchSettingsBody.from_domain(settings),
        effective=BranchSettingsBody.from_domain(with_defaults(settings)),
    )


class BranchApplicationService:
    def __init__(self, repo: BranchRepositoryProtocol | None = None) -> None:
        self._repo: BranchRepositoryProtocol = repo or BranchRepository()

    async def get_settings(self, db: AsyncSession, branch_id: str) -> BranchSettingsResponse:
        branch = await self._repo.get_by_id(db, branch_id)
        if branch is None:
            raise BranchNotFoundError(branch_id)
        return _to_response(branch_id, branch.settings or BranchSettings())

    async def update_settings(
        self,
        db: AsyncSession,
        branch_id: str,
        body: BranchSettingsBody,
        actor: Actor,
    ) -> BranchSettingsResponse:
        settings = body.to_domain()
        try:
            found = await self._repo.save_settings(db, branch_id, settings)
            if not found:
                raise BranchNotFoundError(branch_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Branch %s settings replaced by %s", branch_id, actor.user_id)
        return _to_response(branch_id, settings)
