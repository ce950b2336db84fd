import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from fakeredis import FakeAsyncRedis
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from cinema_booking.app import app
from cinema_booking.db.base import Base
from cinema_booking.db.session import getDB_session
from cinema_booking.models import CinemaHall, CinemaSeat, Movie, SeatType, Show, ShowSeat, ShowSeatStatus
from cinema_booking.redis import get_redis
from cinema_booking.services import BookingService, InMemoryBookingLedger, InMemorySeatStatusStore
from cinema_booking.tests.helpers import SHOW_ID


@pytest.fixture
def seat_store():
    """Show 7 with seats 1..10 and 101, 102 all Available."""
    store = InMemorySeatStatusStore()
    for show_seat_id in [*range(1, 11), 101, 102]:
        store.add_seat(SHOW_ID, show_seat_id, price=Decimal("100"))
    return store


@pytest.fixture
def ledger():
    return InMemoryBookingLedger()


@pytest.fixture
def booking_service(seat_store, ledger):
    return BookingService(seat_store, ledger, max_seats=5, payment_amount=100)


@pytest.fixture
async def db_engine():
    """In-memory sqlite shared by every session of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine):
    return async_sessionmaker(
        bind=db_engine,
        expire_on_commit=False,
        autoflush=False
    )


@pytest.fixture
async def db_session(db_session_factory):
    async with db_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def seeded_test_data(db_session_factory):
    """Seed a hall with 10 seats, one movie and one show with all seats Available."""
    async with db_session_factory() as session:
        hall = CinemaHall(name="Hall 1", hall_type="Standard", capacity=10)
        session.add(hall)
        await session.flush()

        seats = []
        for row in ["A", "B"]:
            for num in range(1, 6):
                seat = CinemaSeat(hall_id=hall.id, row_label=row, seat_number=num, seat_type=SeatType.REGULAR)
                seats.append(seat)
                session.add(seat)
        await session.flush()

        movie = Movie(
            title="Test Movie",
            description="A test movie for testing",
            genre="Drama",
            language="English",
            duration_mins=120,
            age_limit="12+",
        )
        session.add(movie)
        await session.flush()

        show = Show(movie_id=movie.id, hall_id=hall.id, start_time=datetime.now(timezone.utc) + timedelta(hours=1))
        session.add(show)
        await session.flush()

        show_seats = []
        for seat in seats:
            show_seat = ShowSeat(show_id=show.id, seat_id=seat.id, status=ShowSeatStatus.AVAILABLE, price=Decimal("100.00"))
            session.add(show_seat)
            show_seats.append(show_seat)
        await session.flush()
        await session.commit()

        yield {
            "hall_id": hall.id,
            "movie_id": movie.id,
            "show_id": show.id,
            "show_seat_ids": [ss.id for ss in show_seats[:3]],
            "all_show_seat_ids": [ss.id for ss in show_seats],
        }


@pytest.fixture
async def redis_client():
    redis = FakeAsyncRedis()
    yield redis
    await redis.flushall()
    await redis.aclose()


@pytest.fixture
async def client(db_session_factory, redis_client):
    async def override_db_session():
        async with db_session_factory() as session:
            yield session

    async def override_redis():
        yield redis_client

    app.dependency_overrides[getDB_session] = override_db_session
    app.dependency_overrides[get_redis] = override_redis
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as async_client:
        yield async_client
    app.dependency_overrides.clear()
