import logging
from decimal import Decimal

from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import select

from cinema_booking.core.exceptions import ResourceConflictException, ResourceNotFoundException, ShowNotFoundException
from cinema_booking.crud.booking import crud_booking
from cinema_booking.models.CinemaHall import CinemaHall
from cinema_booking.models.Movie import Movie
from cinema_booking.models.Seat import CinemaSeat, ShowSeat, ShowSeatStatus
from cinema_booking.models.Show import Show
from cinema_booking.schemas.show import ShowCreate, ShowUpdate

logger = logging.getLogger(__name__)


class CRUDShow:
    async def get_show_info(self, db: AsyncSession, show_id: int):
        result = await db.execute(
            select(
                Movie.title.label("movie_title"),
                Show.id.label("show_id"),
                CinemaHall.name.label("hall_name"),
                Show.start_time
            )
            .join(Movie, Show.movie_id == Movie.id)
            .join(CinemaHall, Show.hall_id == CinemaHall.id)
            .where(Show.id == show_id))
        show_info = result.mappings().one_or_none()
        if show_info is None:
            raise ShowNotFoundException(show_id)
        return dict(show_info)

    async def get_shows_by_movie_id(self, db: AsyncSession, movie_id: int):
        result = await db.execute(
            select(
                Show.id.label("show_id"),
                Show.hall_id,
                CinemaHall.name.label("hall_name"),
                CinemaHall.hall_type,
                Show.start_time
            )
            .join(CinemaHall, Show.hall_id == CinemaHall.id)
            .where(Show.movie_id == movie_id)
            .order_by(Show.start_time))
        return [dict(row) for row in result.mappings().all()]

    async def create_show(self, db: AsyncSession, data: ShowCreate):
        movie = await db.get(Movie, data.movie_id)
        if movie is None:
            raise ResourceNotFoundException("movie", data.movie_id)
        hall = await db.get(CinemaHall, data.hall_id)
        if hall is None:
            raise ResourceNotFoundException("cinema hall", data.hall_id)

        show = Show(movie_id=data.movie_id, hall_id=data.hall_id, start_time=data.start_time)
        db.add(show)
        await db.flush()

        await self._add_show_seats(db, show.id, data.hall_id, data.base_price)
        await db.commit()
        await db.refresh(show)
        logger.info(f"created show {show.id} of movie {data.movie_id} in hall {data.hall_id}")
        return show

    async def _add_show_seats(self, db: AsyncSession, show_id: int, hall_id: int, price: Decimal) -> None:
        # every seat of the hall becomes bookable for the show
        seats = await db.scalars(select(CinemaSeat.id).where(CinemaSeat.hall_id == hall_id))
        db.add_all([
            ShowSeat(
                show_id=show_id,
                seat_id=seat_id,
                status=ShowSeatStatus.AVAILABLE,
                price=price,
            )
            for seat_id in seats.all()
        ])
        await db.flush()

    async def list_all_shows(self, db: AsyncSession):
        result = await db.execute(
            select(
                Show.id.label("show_id"),
                Show.movie_id,
                Movie.title.label("movie_title"),
                Show.hall_id,
                CinemaHall.name.label("hall_name"),
                Show.start_time
            )
            .join(Movie, Show.movie_id == Movie.id)
            .join(CinemaHall, Show.hall_id == CinemaHall.id)
            .order_by(Show.start_time, Show.id))
        return [dict(row) for row in result.mappings().all()]

    async def update_show(self, db: AsyncSession, show_id: int, data: ShowUpdate):
        show = await db.get(Show, show_id)
        if show is None:
            raise ShowNotFoundException(show_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True, exclude={"base_price"})

        if "movie_id" in changes and await db.get(Movie, changes["movie_id"]) is None:
            raise ResourceNotFoundException("movie", changes["movie_id"])

        new_hall_id = changes.get("hall_id")
        if new_hall_id is not None and new_hall_id != show.hall_id:
            if await db.get(CinemaHall, new_hall_id) is None:
                raise ResourceNotFoundException("cinema hall", new_hall_id)
            # show seats belong to the old hall's seats, so they can only be
            # rebuilt while nobody holds one of them
            taken = await db.scalar(
                select(func.count())
                .select_from(ShowSeat)
                .where(ShowSeat.show_id == show_id)
                .where(ShowSeat.status != ShowSeatStatus.AVAILABLE)
            )
            if taken:
                raise ResourceConflictException(f"show {show_id} has selected or booked seats, hall cannot change")
            await db.execute(delete(ShowSeat).where(ShowSeat.show_id == show_id))
            await self._add_show_seats(db, show_id, new_hall_id, data.base_price)

        for field, value in changes.items():
            setattr(show, field, value)
        await db.commit()
        await db.refresh(show)
        return show

    async def delete_show(self, db: AsyncSession, show_id: int) -> None:
        show = await db.get(Show, show_id)
        if show is None:
            raise ShowNotFoundException(show_id)
        if await crud_booking.has_bookings(db, Show.id == show_id):
            raise ResourceConflictException(f"show {show_id} has bookings")
        await db.delete(show)
        await db.commit()
        logger.info(f"deleted show {show_id}")


crud_show = CRUDShow()
