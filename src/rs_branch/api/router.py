"""rs_branch REST endpoints.

GET /branches/{branch_id}/settings — stored document plus effective values
PUT /branches/{branch_id}/settings — replace the document
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.rs_branch.application.schemas import BranchSettingsBody
from src.rs_branch.application.service import BranchApplicationService
from src.rs_common.actor import Actor
from src.rs_common.database import get_db_session
from src.rs_common.response import ApiResponse, success_response
from src.rs_gateway.actor import get_actor

router = APIRouter(prefix="/branches", tags=["branches"])

_service = BranchApplicationService()


@router.get("/{branch_id}/settings")
async def get_settings(
    branch_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_settings(db, branch_id)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.put("/{branch_id}/settings")
async def update_settings(
    branch_id: str,
    body: BranchSettingsBody,
    request: Request,
    actor: Annotated[Actor, Depends(get_actor)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.update_settings(db, branch_id, body, actor)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
