"""Health check endpoint for monitoring service status."""

from fastapi import APIRouter, Response, status
from pydantic import BaseModel
from redis.exceptions import RedisError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from postlist.logging import logger
from postlist.settings import app_settings
from postlist.storage.db import engine
from postlist.storage.redis import get_redis_connection

router = APIRouter()


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str
    database: str
    redis: str


async def _database_status() -> str:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError, TimeoutError) as e:
        logger.error(f"Database health check failed: {e}")
        return "unhealthy"
    return "healthy"


async def _redis_status() -> str:
    # Redis backs only the optional count cache
    if not app_settings.COUNT_CACHE_ENABLED:
        return "disabled"

    try:
        r = await get_redis_connection()
        if r is None:
            return "unhealthy"
        await r.ping()
    except (RedisError, ConnectionError, TimeoutError) as e:
        logger.error(f"Redis health check failed: {e}")
        return "unhealthy"
    return "healthy"


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check endpoint",
    tags=["health"],
)
async def health_check(response: Response) -> HealthResponse:
    """
    Check the database and, when the count cache is enabled, Redis.

    Returns 503 Service Unavailable if any checked dependency is unhealthy.
    """
    db_status = await _database_status()
    redis_status = await _redis_status()

    overall_status = (
        "unhealthy"
        if "unhealthy" in (db_status, redis_status)
        else "healthy"
    )
    if overall_status == "unhealthy":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status=overall_status, database=db_status, redis=redis_status
    )
