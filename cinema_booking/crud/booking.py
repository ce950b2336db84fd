import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import select

from cinema_booking.core.exceptions import SeatAlreadySelectedException, StorageFailureException
from cinema_booking.crud.show_seat import SQLSeatStatusStore, lost_race
from cinema_booking.models.booking import Booking
from cinema_booking.models.payment import Payment
from cinema_booking.models.Show import Show
from cinema_booking.services.booking_service import BookingService

logger = logging.getLogger(__name__)


class SQLBookingLedger:
    """Append-only booking and payment rows written through the session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_booking(self, number_of_seats: int, payment_status: str, user_id: int, show_id: int) -> int:
        try:
            booking = Booking(
                number_of_seats=number_of_seats,
                status=payment_status,
                user_id=user_id,
                show_id=show_id,
            )
            self.db.add(booking)
            await self.db.flush()
            return booking.id
        except SQLAlchemyError as e:
            logger.error(f"failed to insert booking for user {user_id} and show {show_id}: {e}", exc_info=True)
            raise StorageFailureException(
                f"failed to insert booking for user {user_id} and show {show_id}") from e

    async def create_payment(self, amount: int, remote_transaction_id: int, payment_method: str, booking_id: int) -> None:
        try:
            self.db.add(Payment(
                amount=amount,
                remote_transaction_id=remote_transaction_id,
                payment_method=payment_method,
                booking_id=booking_id,
            ))
            await self.db.flush()
        except SQLAlchemyError as e:
            logger.error(f"failed to insert payment for booking {booking_id}: {e}", exc_info=True)
            raise StorageFailureException(f"failed to insert payment for booking {booking_id}") from e


class CRUDBooking:
    # . 1 lock the requested rows in id order.
    # . 2 check every seat is Available, nothing is written yet.
    # . 3 reject if more seats than allowed were found.
    # . 4 per seat: Selected, booking row, Booked, payment row.
    # . 5 commit once, so a failure in step 4 leaves no half-booked seats behind.
    async def create_booking(self, db: AsyncSession, show_id: int, user_id: int, show_seat_ids: List[int]):
        seat_store = SQLSeatStatusStore(db)
        service = BookingService(seat_store, SQLBookingLedger(db))
        try:
            await seat_store.lock_seats(show_id, show_seat_ids)
            await service.create_booking(show_id, user_id, show_seat_ids)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            if lost_race(e):
                raise SeatAlreadySelectedException() from e
            logger.error(f"failed to commit booking for show {show_id}: {e}", exc_info=True)
            raise StorageFailureException(f"failed to commit booking for show {show_id}") from e
        except Exception:
            await db.rollback()
            raise

    async def get_bookings_for_user(self, db: AsyncSession, user_id: int):
        result = await db.execute(
            select(Booking)
            .where(Booking.user_id == user_id)
            .order_by(Booking.id)
        )
        return result.scalars().all()

    async def has_bookings(self, db: AsyncSession, *show_criteria) -> bool:
        """True when any show matching `show_criteria` has a booking row."""
        booking_id = await db.scalar(
            select(Booking.id)
            .join(Show, Booking.show_id == Show.id)
            .where(*show_criteria)
            .limit(1)
        )
        return booking_id is not None


crud_booking = CRUDBooking()
