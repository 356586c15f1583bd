from redis.asyncio import ConnectionPool, Redis

from postlist.logging import logger
from postlist.settings import app_settings


class RedisPool:
    """
    Redis connection pool manager.

    One pool and client per database index, created lazily on first use.
    Only the optional pagination count cache talks to Redis.
    """

    __instances: dict[int, Redis] = {}
    __pools: dict[int, ConnectionPool] = {}

    @classmethod
    async def get_instance(cls, db: int = app_settings.MAIN_REDIS_DB) -> Redis:
        """
        Get or create a Redis client for the specified database.

        Args:
            db: Redis database index.

        Returns:
            Redis: Client bound to the pooled connections of ``db``.
        """
        if db not in cls.__instances:
            pool = ConnectionPool.from_url(
                f"redis://{app_settings.REDIS_IP}:{app_settings.REDIS_PORT}",
                db=db,
                encoding="utf-8",
                decode_responses=True,
                max_connections=app_settings.REDIS_MAX_CONNECTIONS,
                socket_timeout=app_settings.REDIS_SOCKET_TIMEOUT,
                socket_connect_timeout=app_settings.REDIS_CONNECT_TIMEOUT,
                health_check_interval=app_settings.REDIS_HEALTH_CHECK_INTERVAL,
                retry_on_timeout=app_settings.REDIS_RETRY_ON_TIMEOUT,
            )
            cls.__pools[db] = pool
            cls.__instances[db] = Redis.from_pool(pool)
        return cls.__instances[db]

    @classmethod
    async def close_all(cls) -> None:
        """Close every pool; called on application shutdown."""
        for db, pool in cls.__pools.items():
            try:
                await pool.disconnect()
                logger.info(f"Closed Redis pool for database {db}")
            except (ConnectionError, OSError) as ex:
                logger.error(f"Error closing Redis pool for database {db}: {ex}")

        cls.__pools.clear()
        cls.__instances.clear()


async def get_redis_connection(
    db: int = app_settings.MAIN_REDIS_DB,
) -> Redis | None:
    """Return a Redis client, or None if Redis cannot be reached."""
    try:
        return await RedisPool.get_instance(db)
    except (ConnectionError, TimeoutError, OSError) as ex:
        logger.error(f"Redis connection/network error: {ex}")
        return None
