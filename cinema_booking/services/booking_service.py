import logging
from typing import List, Optional, Protocol

from cinema_booking.core.config import get_settings
from cinema_booking.core.exceptions import (
    BookingError,
    SeatAlreadySelectedException,
    StorageFailureException,
    TooManySeatsException,
)
from cinema_booking.models.booking import PAYMENT_STATUS_PENDING
from cinema_booking.models.Seat import ShowSeatStatus

logger = logging.getLogger(__name__)


class SeatStatusStore(Protocol):
    async def get_seat_status(self, show_id: int, show_seat_id: int) -> ShowSeatStatus:
        """Raise ShowNotFoundException when the seat does not belong to the show."""
        ...

    async def set_seat_status(self, show_id: int, show_seat_id: int, new_status: ShowSeatStatus,
                              expected_status: Optional[ShowSeatStatus] = None) -> bool:
        """Return False when `expected_status` is given and the stored status differs."""
        ...


class BookingLedger(Protocol):
    async def create_booking(self, number_of_seats: int, payment_status: str, user_id: int, show_id: int) -> int:
        ...

    async def create_payment(self, amount: int, remote_transaction_id: int, payment_method: str, booking_id: int) -> None:
        ...


class BookingService:
    """
    Reserves seats of one show for one user.

    The call runs in two phases. Phase 1 reads every requested seat in the
    order given and rejects the whole request on the first seat that is not
    Available, or when more seats than the limit were found available. Phase 1
    never writes. Phase 2 walks the same seats again and, per seat, moves it
    Available -> Selected, inserts a booking row, moves it Selected -> Booked
    and inserts a payment row.

    Status writes are conditional on the previous status, so two concurrent
    requests for the same seat cannot both move it out of Available; the loser
    gets SeatAlreadySelectedException. Nothing written in Phase 2 is undone
    here. Callers that need all-or-nothing run the service inside a store
    transaction (see crud.booking.CRUDBooking).
    """

    def __init__(self, seat_store: SeatStatusStore, ledger: BookingLedger,
                 max_seats: Optional[int] = None, payment_amount: Optional[int] = None):
        settings = get_settings()
        self.seat_store = seat_store
        self.ledger = ledger
        self.max_seats = max_seats if max_seats is not None else settings.MAX_SEATS_PER_BOOKING
        self.payment_amount = payment_amount if payment_amount is not None else settings.PLACEHOLDER_PAYMENT_AMOUNT

    async def create_booking(self, show_id: int, user_id: int, show_seat_ids: List[int]) -> None:
        # a repeated id names the same seat; book it once, keep first-seen order
        show_seat_ids = list(dict.fromkeys(show_seat_ids))
        try:
            number_of_seats = await self._check_availability(show_id, show_seat_ids)
            for show_seat_id in show_seat_ids:
                await self._commit_seat(show_id, user_id, show_seat_id, number_of_seats)
        except BookingError as e:
            if isinstance(e, StorageFailureException):
                logger.error(f"booking for show {show_id} by user {user_id} failed: {e}")
            else:
                logger.warning(f"booking for show {show_id} by user {user_id} rejected: {e.kind.value}")
            raise
        except Exception as e:
            logger.error(f"booking for show {show_id} by user {user_id} failed: {e}", exc_info=True)
            raise StorageFailureException(
                f"unexpected error while booking seats {show_seat_ids} of show {show_id}: {e}") from e

        logger.info(f"user {user_id} booked seats {show_seat_ids} of show {show_id}")

    async def _check_availability(self, show_id: int, show_seat_ids: List[int]) -> int:
        number_of_seats = 0
        for show_seat_id in show_seat_ids:
            status = await self.seat_store.get_seat_status(show_id, show_seat_id)
            if status != ShowSeatStatus.AVAILABLE:
                raise SeatAlreadySelectedException(show_seat_id)
            number_of_seats += 1

        # counted from seats seen Available, not from the length of the request
        if number_of_seats > self.max_seats:
            raise TooManySeatsException(self.max_seats)
        return number_of_seats

    async def _commit_seat(self, show_id: int, user_id: int, show_seat_id: int, number_of_seats: int) -> None:
        selected = await self.seat_store.set_seat_status(
            show_id, show_seat_id, ShowSeatStatus.SELECTED, expected_status=ShowSeatStatus.AVAILABLE)
        if not selected:
            # another booking took the seat between our read and this write
            raise SeatAlreadySelectedException(show_seat_id)

        booking_id = await self.ledger.create_booking(
            number_of_seats, PAYMENT_STATUS_PENDING, user_id, show_id)

        booked = await self.seat_store.set_seat_status(
            show_id, show_seat_id, ShowSeatStatus.BOOKED, expected_status=ShowSeatStatus.SELECTED)
        if not booked:
            raise SeatAlreadySelectedException(show_seat_id)

        await self.ledger.create_payment(self.payment_amount, 0, "", booking_id)
