import logging
from decimal import Decimal
from typing import Iterable, List, Optional

from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import select, update

from cinema_booking.core.exceptions import (
    ResourceNotFoundException,
    SeatAlreadySelectedException,
    ShowNotFoundException,
    StorageFailureException,
)
from cinema_booking.models.Seat import CinemaSeat, ShowSeat, ShowSeatStatus

logger = logging.getLogger(__name__)

# deadlock_detected, serialization_failure
LOST_RACE_SQLSTATES = {"40P01", "40001"}


def lost_race(error: SQLAlchemyError) -> bool:
    if not isinstance(error, DBAPIError):
        return False
    sqlstate = getattr(error.orig, "pgcode", None) or getattr(error.orig, "sqlstate", None)
    return sqlstate in LOST_RACE_SQLSTATES


class SQLSeatStatusStore:
    """Seat status store backed by the showseat table of the session's database."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def lock_seats(self, show_id: int, show_seat_ids: Iterable[int]) -> List[int]:
        """
        Take row locks on the requested seats in ascending id order.

        Two bookings that share seats then queue on the first shared row instead
        of each holding a row the other one needs. Databases without row locks
        (sqlite) ignore FOR UPDATE.
        """
        try:
            result = await self.db.execute(
                select(ShowSeat.id)
                .where(ShowSeat.show_id == show_id)
                .where(ShowSeat.id.in_(set(show_seat_ids)))
                .order_by(ShowSeat.id)
                .with_for_update()
            )
        except SQLAlchemyError as e:
            if lost_race(e):
                raise SeatAlreadySelectedException() from e
            logger.error(f"failed to lock seats {show_seat_ids} of show {show_id}: {e}", exc_info=True)
            raise StorageFailureException(f"failed to lock seats {show_seat_ids} of show {show_id}") from e
        return list(result.scalars().all())

    async def get_seat_status(self, show_id: int, show_seat_id: int) -> ShowSeatStatus:
        try:
            result = await self.db.execute(
                select(ShowSeat.status)
                .where(ShowSeat.id == show_seat_id)
                .where(ShowSeat.show_id == show_id)
            )
            status = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"failed to read status of seat {show_seat_id} for show {show_id}: {e}", exc_info=True)
            raise StorageFailureException(
                f"failed to read status of seat {show_seat_id} for show {show_id}") from e
        if status is None:
            raise ShowNotFoundException(show_id)
        return status

    async def set_seat_status(self, show_id: int, show_seat_id: int, new_status: ShowSeatStatus,
                              expected_status: Optional[ShowSeatStatus] = None) -> bool:
        stmt = (
            update(ShowSeat)
            .where(ShowSeat.id == show_seat_id)
            .where(ShowSeat.show_id == show_id)
        )
        if expected_status is not None:
            # the row lock taken by UPDATE serialises concurrent writers; a loser
            # re-evaluates this predicate after the winner commits and matches nothing
            stmt = stmt.where(ShowSeat.status == expected_status)
        stmt = stmt.values(status=new_status).execution_options(synchronize_session=False)
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            if lost_race(e):
                logger.warning(f"seat {show_seat_id} of show {show_id} lost a lock race: {e}")
                raise SeatAlreadySelectedException(show_seat_id) from e
            logger.error(f"failed to set seat {show_seat_id} of show {show_id} to {new_status.value}: {e}", exc_info=True)
            raise StorageFailureException(
                f"failed to set seat {show_seat_id} of show {show_id} to {new_status.value}") from e

        if result.rowcount == 0:
            if expected_status is None:
                raise ShowNotFoundException(show_id)
            return False
        return True


class CRUDShowSeat:
    async def get_show_seats(self, db: AsyncSession, show_id: int):
        stmt = (select(
            CinemaSeat.row_label,
            CinemaSeat.seat_number,
            CinemaSeat.seat_type,
            ShowSeat.id.label("show_seat_id"),
            ShowSeat.status,
            ShowSeat.price
        )
            .join(CinemaSeat, ShowSeat.seat_id == CinemaSeat.id)
            .where(ShowSeat.show_id == show_id)
            .order_by(CinemaSeat.row_label, CinemaSeat.seat_number))
        result = await db.execute(stmt)
        show_seats = [dict(row) for row in result.mappings().all()]
        if not show_seats:
            raise ShowNotFoundException(show_id)
        return show_seats

    async def update_show_seat_price(self, db: AsyncSession, show_seat_id: int, price: Decimal):
        show_seat = await db.get(ShowSeat, show_seat_id)
        if show_seat is None:
            raise ResourceNotFoundException("show seat", show_seat_id)
        show_seat.price = price
        await db.commit()
        await db.refresh(show_seat)
        return show_seat


crud_show_seat = CRUDShowSeat()
