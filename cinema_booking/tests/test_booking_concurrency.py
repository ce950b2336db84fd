import asyncio

from cinema_booking.core.exceptions import SeatAlreadySelectedException
from cinema_booking.models.Seat import ShowSeatStatus
from cinema_booking.tests.helpers import SHOW_ID


async def test_same_seats_booked_by_many_users_only_one_wins(booking_service, seat_store, ledger):
    seats = [1, 2]

    results = await asyncio.gather(
        *[booking_service.create_booking(SHOW_ID, user_id, seats) for user_id in range(1, 11)],
        return_exceptions=True,
    )

    successes = [r for r in results if r is None]
    failures = [r for r in results if isinstance(r, Exception)]
    assert len(successes) == 1
    assert len(failures) == 9
    assert all(isinstance(f, SeatAlreadySelectedException) for f in failures)

    for show_seat_id in seats:
        assert seat_store.status_of(SHOW_ID, show_seat_id) == ShowSeatStatus.BOOKED

    winner = results.index(None) + 1
    assert len(ledger.bookings) == 2
    assert {booking.user_id for booking in ledger.bookings} == {winner}


async def test_overlapping_requests_never_share_a_seat(booking_service, seat_store, ledger):
    requests = {
        1: [1, 2, 3],
        2: [3, 4],
        3: [4, 5, 6],
        4: [6, 7],
        5: [7, 8, 1],
    }

    results = await asyncio.gather(
        *[booking_service.create_booking(SHOW_ID, user_id, seats) for user_id, seats in requests.items()],
        return_exceptions=True,
    )

    for result in results:
        assert result is None or isinstance(result, SeatAlreadySelectedException)

    # the requests form a cycle, so every one of them may lose; only exclusivity is guaranteed
    winners = [user_id for user_id, result in zip(requests, results) if result is None]

    won_seats = [seat for user_id in winners for seat in requests[user_id]]
    assert len(won_seats) == len(set(won_seats))
    for show_seat_id in won_seats:
        assert seat_store.status_of(SHOW_ID, show_seat_id) == ShowSeatStatus.BOOKED

    for user_id in winners:
        rows = [booking for booking in ledger.bookings if booking.user_id == user_id]
        assert len(rows) == len(requests[user_id])

    assert len(ledger.payments) == len(ledger.bookings)


async def test_disjoint_requests_all_succeed(booking_service, seat_store, ledger):
    requests = {user_id: [user_id * 2 - 1, user_id * 2] for user_id in range(1, 6)}

    results = await asyncio.gather(
        *[booking_service.create_booking(SHOW_ID, user_id, seats) for user_id, seats in requests.items()]
    )

    assert results == [None] * 5
    for show_seat_id in range(1, 11):
        assert seat_store.status_of(SHOW_ID, show_seat_id) == ShowSeatStatus.BOOKED
    assert len(ledger.bookings) == 10
    assert len(ledger.payments) == 10
