import json
import logging
from typing import Optional
from fastapi import Request
from redis.asyncio import Redis
from redis.exceptions import RedisError

from cinema_booking.core.config import get_settings

logger = logging.getLogger(__name__)

IDEMPOTENCY_HEADER = "X-Idempotency-Key"


def idempotency_redis_key(user_id: int, idem_key: str) -> str:
    return f"idempotency:booking:{user_id}:{idem_key}"


async def check_idempotency(request: Request, redis: Redis, user_id: int):
    """
    Look up a previous response for the request's idempotency key.

    Returns (idem_key, cached_response, is_repeat). The header is optional; without it
    every request is treated as new. Redis being unreachable degrades to the same.
    """
    idem_key = request.headers.get(IDEMPOTENCY_HEADER)
    if not idem_key:
        return None, None, False
    try:
        cached = await redis.get(idempotency_redis_key(user_id, idem_key))
    except RedisError as e:
        logger.warning(f"idempotency lookup failed for key {idem_key}, treating request as new: {e}")
        return idem_key, None, False
    if cached:
        logger.info(f"replaying booking response for idempotency key {idem_key}")
        return idem_key, json.loads(cached), True
    return idem_key, None, False


async def save_idempotency(redis: Redis, user_id: int, idem_key: Optional[str], response: dict) -> None:
    if not idem_key:
        return
    try:
        await redis.set(idempotency_redis_key(user_id, idem_key), json.dumps(response),
                        ex=get_settings().IDEMPOTENCY_TTL_SECONDS)
    except RedisError as e:
        logger.warning(f"failed to save idempotency key {idem_key}: {e}")
