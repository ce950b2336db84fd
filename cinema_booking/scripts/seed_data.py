import asyncio
import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from cinema_booking.core.config import settings
from cinema_booking.core.logging_config import configure_logging
from cinema_booking.db.session import async_session as AsyncSessionLocal, init_db
from cinema_booking.models import (
    CinemaHall,
    CinemaSeat,
    SeatType,
    Movie,
    Show,
    ShowSeat,
    ShowSeatStatus,
)

logger = logging.getLogger(__name__)


async def seed():
    async with AsyncSessionLocal() as session:

        # ------------------------------------------------------------------------------------
        # 1. Cinema halls
        # ------------------------------------------------------------------------------------
        hall1 = CinemaHall(name="Hall 1", hall_type="IMAX", capacity=50)
        hall2 = CinemaHall(name="Hall 2", hall_type="Standard", capacity=40)
        session.add_all([hall1, hall2])
        await session.flush()

        # ------------------------------------------------------------------------------------
        # 2. Seats (hall 1: 5 rows x 10, hall 2: 4 rows x 10)
        # ------------------------------------------------------------------------------------
        def seats_for(hall, rows):
            seats = []
            for row in rows:
                for num in range(1, 11):
                    seat_type = (
                        SeatType.RECLINER if row == "A" else
                        SeatType.PREMIUM if row in ["B", "C"] else
                        SeatType.REGULAR
                    )
                    seats.append(CinemaSeat(hall_id=hall.id, row_label=row, seat_number=num, seat_type=seat_type))
            return seats

        seats_hall1 = seats_for(hall1, ["A", "B", "C", "D", "E"])
        seats_hall2 = seats_for(hall2, ["A", "B", "C", "D"])
        session.add_all(seats_hall1 + seats_hall2)
        await session.flush()

        # ------------------------------------------------------------------------------------
        # 3. Movies
        # ------------------------------------------------------------------------------------
        movie1 = Movie(
            title="Interstellar",
            description="A group of explorers travel through a wormhole in space.",
            genre="Sci-Fi",
            language="English",
            duration_mins=169,
            age_limit="12+",
        )
        movie2 = Movie(
            title="Spirited Away",
            description="A girl wanders into a world ruled by gods and spirits.",
            genre="Animation",
            language="Japanese",
            duration_mins=125,
            age_limit="6+",
        )
        session.add_all([movie1, movie2])
        await session.flush()

        # ------------------------------------------------------------------------------------
        # 4. Shows and their bookable seats
        # ------------------------------------------------------------------------------------
        now = datetime.now(timezone.utc)
        shows = [
            (Show(movie_id=movie1.id, hall_id=hall1.id, start_time=now + timedelta(hours=1)), seats_hall1, Decimal("12.50")),
            (Show(movie_id=movie1.id, hall_id=hall1.id, start_time=now + timedelta(hours=4)), seats_hall1, Decimal("14.00")),
            (Show(movie_id=movie2.id, hall_id=hall2.id, start_time=now + timedelta(hours=2)), seats_hall2, Decimal("9.00")),
        ]
        session.add_all([show for show, _, _ in shows])
        await session.flush()

        for show, seats, price in shows:
            session.add_all([
                ShowSeat(show_id=show.id, seat_id=seat.id, status=ShowSeatStatus.AVAILABLE, price=price)
                for seat in seats
            ])

        await session.commit()
        logger.info("Test data seeded successfully")


async def main():
    configure_logging(settings.LOG_LEVEL)
    await init_db()
    await seed()


if __name__ == "__main__":
    asyncio.run(main())
