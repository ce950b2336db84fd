from .booking_service import BookingLedger, BookingService, SeatStatusStore
from .in_memory import InMemoryBookingLedger, InMemorySeatStatusStore

__all__ = ["BookingLedger", "BookingService", "SeatStatusStore",
           "InMemoryBookingLedger", "InMemorySeatStatusStore"]
