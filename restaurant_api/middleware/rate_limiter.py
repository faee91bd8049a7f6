"""
Restaurant API — Sliding window rate limiter middleware (Redis-backed)

RATE_LIMIT_MAX_REQUESTS per RATE_LIMIT_WINDOW_SECONDS per client address on
/api/*. Sorted sets (ZADD/ZREMRANGEBYSCORE/ZCARD) give a true sliding window.
Redis is only needed while rate limiting is enabled, so the client lives here.
"""
import time
import uuid

import redis.asyncio as aioredis
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from restaurant_api.core.config import get_settings

settings = get_settings()

RATE_LIMIT_PREFIX = "ratelimit:"

_redis_client: aioredis.Redis | None = None


def get_redis() -> aioredis.Redis:
    global _redis_client
    if _redis_client is None:
        _redis_client = aioredis.from_url(
            settings.redis_url,
            decode_responses=True,
            socket_connect_timeout=settings.HEALTH_CHECK_TIMEOUT,
        )
    return _redis_client


async def close_redis():
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None


async def record_hit(redis: aioredis.Redis, client: str, now: float) -> int:
    """Log one request from `client` and return how many came before it in the window."""
    key = f"{RATE_LIMIT_PREFIX}{client}"
    pipe = redis.pipeline()
    pipe.zremrangebyscore(key, "-inf", now - settings.RATE_LIMIT_WINDOW_SECONDS)
    pipe.zcard(key)
    # unique member so simultaneous requests are all counted
    pipe.zadd(key, {f"{now}:{uuid.uuid4().hex}": now})
    pipe.expire(key, settings.RATE_LIMIT_WINDOW_SECONDS + 1)
    results = await pipe.execute()
    return results[1]


def too_many_requests() -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={
            "error": (
                f"Too many requests. Maximum {settings.RATE_LIMIT_MAX_REQUESTS} "
                f"requests per {settings.RATE_LIMIT_WINDOW_SECONDS} seconds."
            ),
            "retry_after_seconds": settings.RATE_LIMIT_WINDOW_SECONDS,
        },
        headers={"Retry-After": str(settings.RATE_LIMIT_WINDOW_SECONDS)},
    )


class SlidingWindowRateLimiter(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        if request.method == "OPTIONS" or not request.url.path.startswith("/api/"):
            return await call_next(request)

        client = request.client.host if request.client else "unknown"
        seen = await record_hit(get_redis(), client, time.time())
        if seen >= settings.RATE_LIMIT_MAX_REQUESTS:
            return too_many_requests()

        return await call_next(request)
