from fastapi import APIRouter, Depends, Request
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from cinema_booking.api.deps import get_current_user_id
from cinema_booking.core.idempotency import check_idempotency, save_idempotency
from cinema_booking.crud.booking import crud_booking
from cinema_booking.db.session import getDB_session
from cinema_booking.redis import get_redis
from cinema_booking.schemas.booking import BookingConfirmation, BookingForm, BookingResponse

BOOKING_SUCCESS_MESSAGE = "Booking successful! Your seats are reserved, and payment has been completed. Enjoy the show!"

router = APIRouter(
    prefix="/booking"
)


@router.post("/", response_model=BookingConfirmation)
async def create_booking(
        data: BookingForm,
        request: Request,
        user_id: int = Depends(get_current_user_id),
        db: AsyncSession = Depends(getDB_session),
        redis: Redis = Depends(get_redis)):
    idem_key, cached, is_repeat = await check_idempotency(request, redis, user_id)
    if is_repeat:
        return cached
    # BookingError subclasses are rendered by the app-level handler
    await crud_booking.create_booking(db, data.show_id, user_id, data.show_seats_id)
    response = BookingConfirmation(message=BOOKING_SUCCESS_MESSAGE)
    await save_idempotency(redis, user_id, idem_key, response.model_dump())
    return response


@router.get("/", response_model=list[BookingResponse])
async def get_my_bookings(
        user_id: int = Depends(get_current_user_id),
        db: AsyncSession = Depends(getDB_session)):
    return await crud_booking.get_bookings_for_user(db, user_id)
