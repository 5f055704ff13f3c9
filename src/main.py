"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.rs_backup.api.router import router as backup_router
from src.rs_branch.api.router import router as branch_router
from src.rs_common.database import engine
from src.rs_common.errors import AppError
from src.rs_common.redis_client import close_redis, get_redis
from src.rs_common.response import error_response
from src.rs_gateway.middleware.rate_limit import RateLimitMiddleware
from src.rs_gateway.middleware.request_log import RequestLogMiddleware
from src.rs_inventory.api.router import router as inventory_router
from src.rs_order.api.router import router as order_router
from src.rs_print.api.router import router as print_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB + Redis connections. Shutdown: dispose."""
    # Startup
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    await get_redis()
    yield
    # Shutdown
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


# Last added runs first: request ids exist before the rate limiter answers.
app.add_middleware(RateLimitMiddleware)
app.add_middleware(RequestLogMiddleware)


def _request_id(request: Request, default: str) -> str:
    return getattr(request.state, "request_id", default)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message, exc.field)
    resp.request_id = _request_id(request, resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    # Drop the "body"/"query"/"path" prefix so the field matches the input name
    loc = [str(part) for part in first.get("loc", ())[1:]]
    resp = error_response(1000, first.get("msg", "Invalid request"), ".".join(loc) or None)
    resp.request_id = _request_id(request, resp.request_id)
    return JSONResponse(status_code=422, content=resp.model_dump())


app.include_router(order_router, prefix="/api/v1")
app.include_router(branch_router, prefix="/api/v1")
app.include_router(inventory_router, prefix="/api/v1")
app.include_router(print_router, prefix="/api/v1")
app.include_router(backup_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
