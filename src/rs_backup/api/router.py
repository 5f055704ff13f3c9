"""rs_backup REST endpoints.

GET  /system/backup  — full dataset as one JSON document
POST /system/restore — replace every collection from a backup document
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.rs_backup.application.schemas import BackupDocument
from src.rs_backup.application.service import BackupApplicationService
from src.rs_common.actor import Actor
from src.rs_common.database import get_db_session
from src.rs_common.response import ApiResponse, success_response
from src.rs_gateway.actor import get_actor

router = APIRouter(prefix="/system", tags=["system"])

_service = BackupApplicationService()


@router.get("/backup")
async def export_backup(
    request: Request,
    actor: Annotated[Actor, Depends(get_actor)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.export(db)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/restore")
async def restore_backup(
    body: BackupDocument,
    request: Request,
    actor: Annotated[Actor, Depends(get_actor)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.restore(db, body, actor)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
