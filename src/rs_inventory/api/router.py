"""rs_inventory REST endpoints.

POST /parts/{part_id}/stock-adjustments — atomic restock / shrinkage
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.rs_common.actor import Actor
from src.rs_common.database import get_db_session
from src.rs_common.response import ApiResponse, success_response
from src.rs_gateway.actor import get_actor
from src.rs_inventory.application.schemas import StockAdjustmentRequest
from src.rs_inventory.application.service import InventoryApplicationService

router = APIRouter(prefix="/parts", tags=["parts"])

_service = InventoryApplicationService()


@router.post("/{part_id}/stock-adjustments")
async def adjust_stock(
    part_id: str,
    body: StockAdjustmentRequest,
    request: Request,
    actor: Annotated[Actor, Depends(get_actor)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.adjust_stock(db, part_id, body, actor)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
