"""rs_print endpoint.

GET /print/{variant}/{order_id} — shop-copy | customer-voucher | duplicate-talon (HTML)
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from src.rs_common.database import get_db_session
from src.rs_common.enums import DocumentVariant
from src.rs_print.application.service import PrintApplicationService

router = APIRouter(prefix="/print", tags=["print"])

_service = PrintApplicationService()


@router.get("/{variant}/{order_id}", response_class=HTMLResponse)
async def print_document(
    variant: DocumentVariant,
    order_id: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> HTMLResponse:
    html = await _service.render(db, variant, order_id)
    return HTMLResponse(content=html)
