import pytest
from sqlalchemy import func, select, update
from sqlalchemy.exc import OperationalError

from cinema_booking.core.exceptions import (
    SeatAlreadySelectedException,
    ShowNotFoundException,
    StorageFailureException,
    TooManySeatsException,
)
from cinema_booking.crud.booking import SQLBookingLedger, crud_booking
from cinema_booking.crud.show_seat import SQLSeatStatusStore
from cinema_booking.models import Booking, Payment, ShowSeat, ShowSeatStatus
from cinema_booking.tests.helpers import USER_ID, seat_statuses


async def count_rows(session, model):
    return await session.scalar(select(func.count()).select_from(model))


async def test_get_seat_status(db_session, seeded_test_data):
    store = SQLSeatStatusStore(db_session)
    show_seat_id = seeded_test_data["show_seat_ids"][0]

    status = await store.get_seat_status(seeded_test_data["show_id"], show_seat_id)

    assert status == ShowSeatStatus.AVAILABLE


async def test_get_seat_status_of_wrong_show(db_session, seeded_test_data):
    store = SQLSeatStatusStore(db_session)

    with pytest.raises(ShowNotFoundException):
        await store.get_seat_status(seeded_test_data["show_id"] + 100, seeded_test_data["show_seat_ids"][0])


async def test_conditional_set_only_matches_expected_status(db_session, seeded_test_data):
    store = SQLSeatStatusStore(db_session)
    show_id = seeded_test_data["show_id"]
    show_seat_id = seeded_test_data["show_seat_ids"][0]

    assert await store.set_seat_status(
        show_id, show_seat_id, ShowSeatStatus.SELECTED, expected_status=ShowSeatStatus.AVAILABLE)
    assert not await store.set_seat_status(
        show_id, show_seat_id, ShowSeatStatus.SELECTED, expected_status=ShowSeatStatus.AVAILABLE)
    assert await store.get_seat_status(show_id, show_seat_id) == ShowSeatStatus.SELECTED


async def test_unconditional_set_on_missing_seat(db_session, seeded_test_data):
    store = SQLSeatStatusStore(db_session)

    with pytest.raises(ShowNotFoundException):
        await store.set_seat_status(seeded_test_data["show_id"], 99999, ShowSeatStatus.BOOKED)


async def test_booking_commits_seats_bookings_and_payments(db_session_factory, seeded_test_data):
    show_id = seeded_test_data["show_id"]
    show_seat_ids = seeded_test_data["show_seat_ids"]

    async with db_session_factory() as session:
        await crud_booking.create_booking(session, show_id, USER_ID, show_seat_ids)

    async with db_session_factory() as session:
        statuses = await seat_statuses(session, show_seat_ids)
        assert set(statuses.values()) == {ShowSeatStatus.BOOKED}

        bookings = (await session.scalars(select(Booking).order_by(Booking.id))).all()
        assert len(bookings) == len(show_seat_ids)
        for booking in bookings:
            assert booking.number_of_seats == len(show_seat_ids)
            assert booking.status == "Pending"
            assert booking.user_id == USER_ID
            assert booking.show_id == show_id

        payments = (await session.scalars(select(Payment))).all()
        assert sorted(p.booking_id for p in payments) == [b.id for b in bookings]
        assert all(p.amount == 100 and p.remote_transaction_id == 0 and p.payment_method == "" for p in payments)

        bookings_of_user = await crud_booking.get_bookings_for_user(session, USER_ID)
        assert [b.id for b in bookings_of_user] == [b.id for b in bookings]


async def test_booked_seat_rejects_whole_request(db_session_factory, seeded_test_data):
    show_id = seeded_test_data["show_id"]
    first, second, third = seeded_test_data["show_seat_ids"]

    async with db_session_factory() as session:
        await session.execute(update(ShowSeat).where(ShowSeat.id == third).values(status=ShowSeatStatus.BOOKED))
        await session.commit()

    async with db_session_factory() as session:
        with pytest.raises(SeatAlreadySelectedException):
            await crud_booking.create_booking(session, show_id, USER_ID, [first, second, third])

    async with db_session_factory() as session:
        assert await seat_statuses(session, [first, second, third]) == {
            first: ShowSeatStatus.AVAILABLE,
            second: ShowSeatStatus.AVAILABLE,
            third: ShowSeatStatus.BOOKED,
        }
        assert await count_rows(session, Booking) == 0


async def test_seat_limit_enforced(db_session_factory, seeded_test_data):
    show_seat_ids = seeded_test_data["all_show_seat_ids"][:6]

    async with db_session_factory() as session:
        with pytest.raises(TooManySeatsException):
            await crud_booking.create_booking(session, seeded_test_data["show_id"], USER_ID, show_seat_ids)

    async with db_session_factory() as session:
        assert set((await seat_statuses(session, show_seat_ids)).values()) == {ShowSeatStatus.AVAILABLE}
        assert await count_rows(session, Booking) == 0


async def test_second_booking_of_same_seats_fails(db_session_factory, seeded_test_data):
    show_id = seeded_test_data["show_id"]
    show_seat_ids = seeded_test_data["show_seat_ids"]

    async with db_session_factory() as session:
        await crud_booking.create_booking(session, show_id, USER_ID, show_seat_ids)

    async with db_session_factory() as session:
        with pytest.raises(SeatAlreadySelectedException):
            await crud_booking.create_booking(session, show_id, USER_ID + 1, show_seat_ids)

    async with db_session_factory() as session:
        assert await count_rows(session, Booking) == len(show_seat_ids)


async def test_failure_mid_booking_rolls_back(db_session_factory, seeded_test_data, monkeypatch):
    show_id = seeded_test_data["show_id"]
    show_seat_ids = seeded_test_data["show_seat_ids"]
    calls = []

    original = SQLBookingLedger.create_payment

    async def create_payment_then_fail(self, amount, remote_transaction_id, payment_method, booking_id):
        calls.append(booking_id)
        if len(calls) == 2:
            raise RuntimeError("payment table unavailable")
        await original(self, amount, remote_transaction_id, payment_method, booking_id)

    monkeypatch.setattr(SQLBookingLedger, "create_payment", create_payment_then_fail)

    async with db_session_factory() as session:
        with pytest.raises(StorageFailureException):
            await crud_booking.create_booking(session, show_id, USER_ID, show_seat_ids)

    async with db_session_factory() as session:
        assert set((await seat_statuses(session, show_seat_ids)).values()) == {ShowSeatStatus.AVAILABLE}
        assert await count_rows(session, Booking) == 0
        assert await count_rows(session, Payment) == 0


async def test_seats_are_locked_in_id_order(db_session_factory, seeded_test_data, monkeypatch):
    show_seat_ids = seeded_test_data["show_seat_ids"]
    locked = []

    original = SQLSeatStatusStore.lock_seats

    async def record_lock(self, show_id, ids):
        rows = await original(self, show_id, ids)
        locked.append(rows)
        return rows

    monkeypatch.setattr(SQLSeatStatusStore, "lock_seats", record_lock)

    async with db_session_factory() as session:
        await crud_booking.create_booking(session, seeded_test_data["show_id"], USER_ID, list(reversed(show_seat_ids)))

    assert locked == [sorted(show_seat_ids)]


async def test_stale_read_loses_compare_and_set(db_session_factory, seeded_test_data):
    show_id = seeded_test_data["show_id"]
    show_seat_id = seeded_test_data["show_seat_ids"][0]

    async with db_session_factory() as late_session:
        late_store = SQLSeatStatusStore(late_session)
        assert await late_store.get_seat_status(show_id, show_seat_id) == ShowSeatStatus.AVAILABLE

        async with db_session_factory() as early_session:
            await crud_booking.create_booking(early_session, show_id, USER_ID, [show_seat_id])

        assert not await late_store.set_seat_status(
            show_id, show_seat_id, ShowSeatStatus.SELECTED, expected_status=ShowSeatStatus.AVAILABLE)
        await late_session.rollback()

        with pytest.raises(SeatAlreadySelectedException):
            await crud_booking.create_booking(late_session, show_id, USER_ID + 1, [show_seat_id])

    async with db_session_factory() as session:
        assert await count_rows(session, Booking) == 1


class DeadlockDetected(Exception):
    pgcode = "40P01"


async def raise_deadlock(*args, **kwargs):
    raise OperationalError("UPDATE showseat", {}, DeadlockDetected("deadlock detected"))


async def test_deadlock_on_status_update_is_a_lost_seat(db_session, seeded_test_data, monkeypatch):
    store = SQLSeatStatusStore(db_session)
    monkeypatch.setattr(db_session, "execute", raise_deadlock)

    with pytest.raises(SeatAlreadySelectedException):
        await store.set_seat_status(
            seeded_test_data["show_id"], seeded_test_data["show_seat_ids"][0],
            ShowSeatStatus.SELECTED, expected_status=ShowSeatStatus.AVAILABLE)


async def test_deadlock_while_locking_rejects_booking(db_session_factory, seeded_test_data, monkeypatch):
    async with db_session_factory() as session:
        monkeypatch.setattr(session, "execute", raise_deadlock)
        with pytest.raises(SeatAlreadySelectedException):
            await crud_booking.create_booking(
                session, seeded_test_data["show_id"], USER_ID, seeded_test_data["show_seat_ids"])


async def test_other_database_errors_stay_storage_failures(db_session, seeded_test_data, monkeypatch):
    async def raise_disk_full(*args, **kwargs):
        raise OperationalError("UPDATE showseat", {}, Exception("disk full"))

    store = SQLSeatStatusStore(db_session)
    monkeypatch.setattr(db_session, "execute", raise_disk_full)

    with pytest.raises(StorageFailureException):
        await store.set_seat_status(seeded_test_data["show_id"], seeded_test_data["show_seat_ids"][0],
                                    ShowSeatStatus.BOOKED)
