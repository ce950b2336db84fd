import asyncio
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from cinema_booking.core.exceptions import ShowNotFoundException
from cinema_booking.models.Seat import ShowSeatStatus


@dataclass
class SeatRecord:
    status: ShowSeatStatus = ShowSeatStatus.AVAILABLE
    price: Decimal = Decimal("0")


@dataclass
class BookingRecord:
    id: int
    number_of_seats: int
    status: str
    user_id: int
    show_id: int


@dataclass
class PaymentRecord:
    id: int
    amount: int
    remote_transaction_id: int
    payment_method: str
    booking_id: int


class InMemorySeatStatusStore:
    """
    Seat statuses kept in a dict, keyed by (show_id, show_seat_id).

    Every call yields to the event loop first so concurrent bookings interleave
    the way they would against a real store. The compare and the write in
    set_seat_status happen without an await between them, which makes the
    conditional update atomic on a single event loop.
    """

    def __init__(self):
        self._seats: Dict[Tuple[int, int], SeatRecord] = {}

    def add_seat(self, show_id: int, show_seat_id: int,
                 status: ShowSeatStatus = ShowSeatStatus.AVAILABLE, price: Decimal = Decimal("0")):
        self._seats[(show_id, show_seat_id)] = SeatRecord(status=status, price=price)

    def status_of(self, show_id: int, show_seat_id: int) -> ShowSeatStatus:
        return self._seats[(show_id, show_seat_id)].status

    async def get_seat_status(self, show_id: int, show_seat_id: int) -> ShowSeatStatus:
        await asyncio.sleep(0)
        seat = self._seats.get((show_id, show_seat_id))
        if seat is None:
            raise ShowNotFoundException(show_id)
        return seat.status

    async def set_seat_status(self, show_id: int, show_seat_id: int, new_status: ShowSeatStatus,
                              expected_status: Optional[ShowSeatStatus] = None) -> bool:
        await asyncio.sleep(0)
        seat = self._seats.get((show_id, show_seat_id))
        if seat is None:
            raise ShowNotFoundException(show_id)
        if expected_status is not None and seat.status != expected_status:
            return False
        seat.status = new_status
        return True


@dataclass
class InMemoryBookingLedger:
    bookings: List[BookingRecord] = field(default_factory=list)
    payments: List[PaymentRecord] = field(default_factory=list)

    async def create_booking(self, number_of_seats: int, payment_status: str, user_id: int, show_id: int) -> int:
        await asyncio.sleep(0)
        booking = BookingRecord(
            id=len(self.bookings) + 1,
            number_of_seats=number_of_seats,
            status=payment_status,
            user_id=user_id,
            show_id=show_id,
        )
        self.bookings.append(booking)
        return booking.id

    async def create_payment(self, amount: int, remote_transaction_id: int, payment_method: str, booking_id: int) -> None:
        await asyncio.sleep(0)
        self.payments.append(PaymentRecord(
            id=len(self.payments) + 1,
            amount=amount,
            remote_transaction_id=remote_transaction_id,
            payment_method=payment_method,
            booking_id=booking_id,
        ))
