"""Rate limiting middleware for mutating requests.

Fixed one-minute window per caller, counted in Redis:
    count = INCR ratelimit:{caller}:{minute}
    EXPIRE on the first hit
    count > RATE_LIMIT_PER_MINUTE -> 429 envelope with code 9001

The caller is X-User-Id when present, otherwise the client IP (first hop of
X-Forwarded-For behind a proxy). Reads are not limited. If Redis is down the
request goes through and a warning is logged.
"""

import logging
import time
from collections.abc import Awaitable, Callable

import redis.asyncio as aioredis
from redis.exceptions import RedisError
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from config.settings import settings
from src.rs_common.errors import RateLimitError
from src.rs_common.redis_client import get_redis
from src.rs_common.response import error_response

logger = logging.getLogger(__name__)

_MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})
_WINDOW_SECONDS = 60


def caller_key(request: Request) -> str:
    user_id = request.headers.get("x-user-id")
    if user_id:
        return f"user:{user_id}"
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return f"ip:{forwarded.split(',')[0].strip()}"
    return f"ip:{request.client.host if request.client else 'unknown'}"


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        redis_factory: Callable[[], Awaitable[aioredis.Redis]] = get_redis,
    ) -> None:
        super().__init__(app)
        self._redis_factory = redis_factory

    async def _hit(self, key: str) -> int:
        redis = await self._redis_factory()
        count = await redis.incr(key)
        if count == 1:
            await redis.expire(key, _WINDOW_SECONDS)
        return int(count)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not settings.RATE_LIMIT_ENABLED or request.method not in _MUTATING_METHODS:
            return await call_next(request)

        window = int(time.time()) // _WINDOW_SECONDS
        key = f"ratelimit:{caller_key(request)}:{window}"
        try:
            count = await self._hit(key)
        except RedisError as exc:
            logger.warning("Rate limit check skipped, Redis unavailable: %s", exc)
            return await call_next(request)

        if count > settings.RATE_LIMIT_PER_MINUTE:
            exc = RateLimitError()
            resp = error_response(exc.code, exc.message)
            resp.request_id = getattr(request.state, "request_id", resp.request_id)
            retry_after = _WINDOW_SECONDS - int(time.time()) % _WINDOW_SECONDS
            return JSONResponse(
                status_code=exc.http_status,
                content=resp.model_dump(),
                headers={"Retry-After": str(retry_after)},
            )
        return await call_next(request)
