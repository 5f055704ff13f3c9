"""rs_order REST endpoints.

POST   /orders                                  — intake (snapshot legal text)
GET    /orders                                  — list, search by number or IMEI
GET    /orders/alerts                           — operational alerts on open orders
GET    /orders/{order_id}                       — full detail
PATCH  /orders/{order_id}                       — edit intake details
POST   /orders/{order_id}/status                — status transition
PUT    /orders/{order_id}/costs                 — labor / pending cost
POST   /orders/{order_id}/parts                 — add part line (consumes stock)
PATCH  /orders/{order_id}/parts/{line_index}    — change line quantity
DELETE /orders/{order_id}/parts/{line_index}    — remove line (returns stock)
POST   /orders/{order_id}/comments              — append technical comment
PUT    /orders/{order_id}/warranty              — set warranty type / dates
POST   /orders/{order_id}/warranty/recompute    — re-anchor template warranty
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.rs_common.actor import Actor
from src.rs_common.database import get_db_session
from src.rs_common.enums import OrderStatus
from src.rs_common.response import ApiResponse, success_response
from src.rs_gateway.actor import get_actor
from src.rs_order.application.schemas import (
    AddCommentRequest,
    AddPartRequest,
    CreateOrderRequest,
    SetCostsRequest,
    SetWarrantyRequest,
    StatusChangeRequest,
    UpdateOrderRequest,
    UpdatePartLineRequest,
)
from src.rs_order.application.service import OrderApplicationService

router = APIRouter(prefix="/orders", tags=["orders"])

_service = OrderApplicationService()


@router.post("", status_code=201)
async def create_order(
    body: CreateOrderRequest,
    request: Request,
    actor: Annotated[Actor, Depends(get_actor)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.create_order(db, body, actor)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("")
async def list_orders(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    branch_id: str | None = Query(None),
    client_id: str | None = Query(None),
    status: list[OrderStatus] | None = Query(None, description="Repeat to filter by several"),
    order_number: str | None = Query(None, max_length=32, description="Substring, case-insensitive"),
    imei: str | None = Query(None, max_length=64, description="IMEI substring"),
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(20, ge=1, le=100),
) -> ApiResponse:
    result = await _service.list_orders(
        db, branch_id, status, client_id, cursor, limit, order_number=order_number, imei=imei
    )
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/alerts")
async def list_alerts(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    branch_id: str | None = Query(None),
) -> ApiResponse:
    result = await _service.list_alerts(db, branch_id)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{order_id}")
async def get_order(
    order_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_order(db, order_id)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.patch("/{order_id}")
async def update_order(
    order_id: str,
    body: UpdateOrderRequest,
    request: Request,
    actor: Annotated[Actor, Depends(get_actor)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.update_order_details(db, order_id, body, actor)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/{order_id}/status")
async def change_status(
    order_id: str,
    body: StatusChangeRequest,
    request: Request,
    actor: Annotated[Actor, Depends(get_actor)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.change_status(db, order_id, body, actor)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.put("/{order_id}/costs")
async def set_costs(
    order_id: str,
    body: SetCostsRequest,
    request: Request,
    actor: Annotated[Actor, Depends(get_actor)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.set_costs(db, order_id, body, actor)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/{order_id}/parts")
async def add_part(
    order_id: str,
    body: AddPartRequest,
    request: Request,
    actor: Annotated[Actor, Depends(get_actor)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.add_part(db, order_id, body, actor)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.patch("/{order_id}/parts/{line_index}")
async def update_part_quantity(
    order_id: str,
    line_index: int,
    body: UpdatePartLineRequest,
    request: Request,
    actor: Annotated[Actor, Depends(get_actor)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.update_part_quantity(db, order_id, line_index, body, actor)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.delete("/{order_id}/parts/{line_index}")
async def remove_part(
    order_id: str,
    line_index: int,
    request: Request,
    actor: Annotated[Actor, Depends(get_actor)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.remove_part(db, order_id, line_index, actor)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/{order_id}/comments", status_code=201)
async def add_comment(
    order_id: str,
    body: AddCommentRequest,
    request: Request,
    actor: Annotated[Actor, Depends(get_actor)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.add_comment(db, order_id, body, actor)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.put("/{order_id}/warranty")
async def set_warranty(
    order_id: str,
    body: SetWarrantyRequest,
    request: Request,
    actor: Annotated[Actor, Depends(get_actor)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.set_warranty(db, order_id, body, actor)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/{order_id}/warranty/recompute")
async def recompute_warranty(
    order_id: str,
    request: Request,
    actor: Annotated[Actor, Depends(get_actor)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    force: bool = Query(False, description="Re-anchor even after delivery"),
) -> ApiResponse:
    result = await _service.recompute_warranty(db, order_id, force, actor)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
