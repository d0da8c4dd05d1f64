"""Health check endpoints.

- /health: process liveness, never touches dependencies
- /healthz: readiness; the database must answer, Redis only when configured
"""

import logging
from typing import Any

import redis.asyncio as aioredis
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text

from backend.app.config import Settings, get_settings
from backend.app.db.engine import get_async_engine

router = APIRouter()
logger = logging.getLogger(__name__)


async def check_db(settings: Settings) -> tuple[bool, str]:
    """Run SELECT 1 on the app engine.

    Returns:
        (is_ok, status_message)
    """
    try:
        async with get_async_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning(f"[GET /healthz] database check failed: {type(e).__name__}")
        return (False, f"error: {type(e).__name__}")
    return (True, "ok")


async def check_redis(settings: Settings) -> tuple[bool, str]:
    """Ping Redis when REDIS_URL is set.

    Returns:
        (is_ok, status_message); "not_configured" counts as healthy
    """
    if not settings.redis_url:
        return (True, "not_configured")

    client = aioredis.from_url(settings.redis_url, decode_responses=True)
    try:
        await client.ping()
    except Exception as e:
        logger.warning(f"[GET /healthz] redis check failed: {type(e).__name__}")
        return (False, f"error: {type(e).__name__}")
    finally:
        await client.aclose()
    return (True, "ok")


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness check: 200 whenever the process serves requests."""
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
async def healthz() -> dict[str, Any] | JSONResponse:
    """Readiness check.

    Returns:
        200 with component status when every dependency answers,
        503 with the same body otherwise
    """
    settings = get_settings()

    db_ok, db_status = await check_db(settings)
    redis_ok, redis_status = await check_redis(settings)

    body: dict[str, Any] = {
        "status": "ok" if db_ok and redis_ok else "degraded",
        "components": {"db": db_status, "redis": redis_status},
    }

    if body["status"] != "ok":
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body)
    return body
