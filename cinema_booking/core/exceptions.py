from enum import Enum


class BookingErrorKind(str, Enum):
    SHOW_NOT_FOUND = "SHOW_NOT_FOUND"
    SEAT_ALREADY_SELECTED = "SEAT_ALREADY_SELECTED"
    TOO_MANY_SEATS = "TOO_MANY_SEATS"
    STORAGE_FAILURE = "STORAGE_FAILURE"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"


class BookingError(Exception):
    kind: BookingErrorKind = BookingErrorKind.STORAGE_FAILURE

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ShowNotFoundException(BookingError):
    kind = BookingErrorKind.SHOW_NOT_FOUND

    def __init__(self, show_id: int):
        self.show_id = show_id
        super().__init__(f"show ID {show_id} not found", status_code=404)


class SeatAlreadySelectedException(BookingError):
    kind = BookingErrorKind.SEAT_ALREADY_SELECTED

    def __init__(self, show_seat_id: int | None = None):
        self.show_seat_id = show_seat_id
        super().__init__(
            "Sorry! These seats are no longer available. Please try again with other seats.",
            status_code=409)


class TooManySeatsException(BookingError):
    kind = BookingErrorKind.TOO_MANY_SEATS

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"You can select a maximum of {limit} seats at a time.", status_code=400)


class StorageFailureException(BookingError):
    """Lower-layer I/O error. `context` is logged, never sent to the client."""
    kind = BookingErrorKind.STORAGE_FAILURE

    def __init__(self, context: str):
        self.context = context
        super().__init__("An unexpected server error occurred. Please try again later.", status_code=500)

    def __str__(self):
        return self.context


class ResourceNotFoundException(BookingError):
    kind = BookingErrorKind.NOT_FOUND

    def __init__(self, resource: str, resource_id: int):
        super().__init__(f"{resource} with ID {resource_id} not found", status_code=404)


class ResourceConflictException(BookingError):
    """Admin change that would clash with existing rows, e.g. a duplicate seat or a show that has bookings."""
    kind = BookingErrorKind.CONFLICT

    def __init__(self, message: str):
        super().__init__(message, status_code=409)
