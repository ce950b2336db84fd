import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import select

from cinema_booking.core.exceptions import ResourceConflictException, ResourceNotFoundException
from cinema_booking.crud.booking import crud_booking
from cinema_booking.models.CinemaHall import CinemaHall
from cinema_booking.models.Seat import CinemaSeat, ShowSeat, ShowSeatStatus
from cinema_booking.models.Show import Show
from cinema_booking.schemas.cinema_hall import CinemaHallCreate, CinemaSeatCreate

logger = logging.getLogger(__name__)


class CRUDCinemaHall:
    async def get_cinema_hall(self, db: AsyncSession, hall_id: int) -> CinemaHall | None:
        result = await db.execute(select(CinemaHall)
                                  .where(CinemaHall.id == hall_id)
                                  .options(selectinload(CinemaHall.seats))
                                  )
        return result.scalar_one_or_none()

    async def get_all_cinema_halls(self, db: AsyncSession):
        result = await db.execute(
            select(CinemaHall)
            .options(selectinload(CinemaHall.seats))
            .order_by(CinemaHall.id)
        )
        return result.scalars().all()

    async def create_cinema_hall(self, db: AsyncSession, data: CinemaHallCreate):
        hall = CinemaHall(**data.model_dump())
        db.add(hall)
        await db.commit()
        # Eagerly load seats after refresh
        await db.refresh(hall, ["seats"])
        return hall

    async def delete_cinema_hall(self, db: AsyncSession, hall_id: int) -> None:
        hall = await db.get(CinemaHall, hall_id)
        if hall is None:
            raise ResourceNotFoundException("cinema hall", hall_id)
        if await crud_booking.has_bookings(db, Show.hall_id == hall_id):
            raise ResourceConflictException(f"cinema hall {hall_id} has shows with bookings")
        # shows, seats and their show seats go with the hall
        await db.delete(hall)
        await db.commit()
        logger.info(f"deleted cinema hall {hall_id}")

    async def add_cinema_seat(self, db: AsyncSession, hall_id: int, data: CinemaSeatCreate):
        hall = await db.get(CinemaHall, hall_id)
        if hall is None:
            raise ResourceNotFoundException("cinema hall", hall_id)
        seat_count = await db.scalar(
            select(func.count()).select_from(CinemaSeat).where(CinemaSeat.hall_id == hall_id))
        if seat_count >= hall.capacity:
            raise ResourceConflictException(f"cinema hall {hall_id} already has all {hall.capacity} seats")

        seat = CinemaSeat(hall_id=hall_id, **data.model_dump())
        db.add(seat)
        try:
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            logger.warning(f"duplicate seat {data.row_label}{data.seat_number} in hall {hall_id}: {e}")
            raise ResourceConflictException(
                f"seat {data.row_label}{data.seat_number} already exists in cinema hall {hall_id}") from e
        await db.refresh(seat)
        return seat

    async def delete_cinema_seat(self, db: AsyncSession, seat_id: int) -> None:
        seat = await db.get(CinemaSeat, seat_id)
        if seat is None:
            raise ResourceNotFoundException("cinema seat", seat_id)
        taken = await db.scalar(
            select(func.count())
            .select_from(ShowSeat)
            .where(ShowSeat.seat_id == seat_id)
            .where(ShowSeat.status != ShowSeatStatus.AVAILABLE)
        )
        if taken:
            raise ResourceConflictException(f"cinema seat {seat_id} is selected or booked for a show")
        await db.delete(seat)
        await db.commit()
        logger.info(f"deleted cinema seat {seat_id}")


crud_cinema_hall = CRUDCinemaHall()
