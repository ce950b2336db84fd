import logging
from typing import AsyncGenerator
from redis.asyncio import Redis
from redis.asyncio.connection import ConnectionPool
from redis.exceptions import RedisError

from cinema_booking.core.config import settings

logger = logging.getLogger(__name__)

# shared by every request; the pool hands out connections lazily
redis_pool = ConnectionPool.from_url(settings.REDIS_URL, decode_responses=True)
redis_client = Redis(connection_pool=redis_pool)


async def get_redis() -> AsyncGenerator[Redis, None]:
    yield redis_client


async def redis_is_up(redis: Redis) -> bool:
    """Redis only backs idempotency keys, so an outage is reported, not raised."""
    try:
        return bool(await redis.ping())
    except RedisError as e:
        logger.warning(f"redis ping failed: {e}")
        return False


async def close_redis():
    await redis_client.aclose()
    await redis_pool.disconnect()
    logger.info("Closed redis connection pool")
