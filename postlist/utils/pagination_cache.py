"""
Pagination count caching.

Caches the exact totals computed for offset pagination in Redis, keyed by
the predicate's bound parameters. Disabled unless ``COUNT_CACHE_ENABLED`` is
set. A cached total can lag behind concurrent writes by up to the TTL, the
same way a fresh count can lag behind the page fetch.

Redis problems never fail a request: lookups degrade to a cache miss and
writes are skipped.
"""

import hashlib
import json
from typing import Any

from redis.exceptions import RedisError

from postlist.constants import COUNT_CACHE_KEY_PREFIX
from postlist.logging import logger
from postlist.settings import app_settings
from postlist.storage.redis import get_redis_connection


async def get_cached_count(
    table_name: str, parameters: dict[str, Any] | None = None
) -> int | None:
    """
    Get the cached total for a predicate.

    Args:
        table_name: Table the count was taken over.
        parameters: ``Predicate.parameters()`` of the counted predicate.

    Returns:
        Cached count if available, None otherwise.
    """
    cache_key = count_cache_key(table_name, parameters)

    try:
        redis = await get_redis_connection()
        if redis is None:
            logger.warning("Redis unavailable, skipping count cache lookup")
            return None

        cached = await redis.get(cache_key)
        if cached is None:
            logger.debug(f"Count cache miss for {cache_key}")
            return None

        count = int(cached)
        logger.debug(f"Count cache hit for {cache_key}: {count}")
        return count

    except (RedisError, ConnectionError) as ex:
        logger.error(f"Error reading count cache: {ex}")
        return None
    except (ValueError, TypeError) as ex:
        logger.error(f"Invalid count cache data format: {ex}")
        return None


async def set_cached_count(
    table_name: str,
    count: int,
    parameters: dict[str, Any] | None = None,
    ttl: int | None = None,
) -> None:
    """
    Cache the total for a predicate.

    Args:
        table_name: Table the count was taken over.
        count: The exact count.
        parameters: ``Predicate.parameters()`` of the counted predicate.
        ttl: Time-to-live in seconds, ``COUNT_CACHE_TTL`` when omitted.
    """
    cache_key = count_cache_key(table_name, parameters)
    ttl = ttl if ttl is not None else app_settings.COUNT_CACHE_TTL

    try:
        redis = await get_redis_connection()
        if redis is None:
            logger.warning("Redis unavailable, skipping count cache storage")
            return

        await redis.setex(cache_key, ttl, str(count))
        logger.debug(f"Cached count for {cache_key}: {count} (TTL: {ttl}s)")

    except (RedisError, ConnectionError) as ex:
        logger.error(f"Error writing count cache: {ex}")


def count_cache_key(
    table_name: str, parameters: dict[str, Any] | None
) -> str:
    """
    Build a deterministic cache key for a count.

    Example:
        >>> count_cache_key("post", None)
        'pagination:count:post:all'
    """
    if not parameters:
        return f"{COUNT_CACHE_KEY_PREFIX}:{table_name}:all"

    serialized = json.dumps(parameters, sort_keys=True, default=str)
    digest = hashlib.md5(
        serialized.encode(), usedforsecurity=False
    ).hexdigest()[:8]
    return f"{COUNT_CACHE_KEY_PREFIX}:{table_name}:{digest}"
