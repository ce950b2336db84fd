from fastapi import APIRouter, Depends
from redis.asyncio import Redis

from cinema_booking.redis import get_redis, redis_is_up


router = APIRouter()


@router.get("/health", summary="Liveness plus the state of the idempotency store")
async def health_check(redis: Redis = Depends(get_redis)):
    # bookings still work without redis, so the service stays "ok"
    return {"status": "ok", "redis": "up" if await redis_is_up(redis) else "down"}
