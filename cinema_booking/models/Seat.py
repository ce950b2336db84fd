from decimal import Decimal
from enum import Enum
from sqlalchemy import BigInteger, ForeignKey, Integer, Numeric, String, Enum as SAEnum, UniqueConstraint
from sqlalchemy.orm import mapped_column, Mapped, relationship
from cinema_booking.db.base import Base, BigIntPK
from cinema_booking.models import TimestampMixin


class SeatType(str, Enum):
    REGULAR = "REGULAR"
    PREMIUM = "PREMIUM"
    RECLINER = "RECLINER"


class ShowSeatStatus(str, Enum):
    AVAILABLE = "Available"
    SELECTED = "Selected"  # transient, set before the booking row exists
    BOOKED = "Booked"


class CinemaSeat(Base, TimestampMixin):
    __table_args__ = (
        UniqueConstraint("hall_id", "row_label", "seat_number", name="uix_hall_seat_unique"),
    )
    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, index=True)
    seat_number: Mapped[int] = mapped_column(Integer, nullable=False)
    row_label: Mapped[str] = mapped_column(String(5), nullable=False)
    seat_type: Mapped[SeatType] = mapped_column(SAEnum(
        SeatType, name="seat_type_enum"), nullable=False, default=SeatType.REGULAR)
    hall_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("cinemahall.id", ondelete="CASCADE"), index=True, nullable=False)
    hall: Mapped["CinemaHall"] = relationship(
        back_populates="seats")
    show_seats: Mapped[list["ShowSeat"]] = relationship(back_populates="seat", cascade="all, delete-orphan")


class ShowSeat(Base, TimestampMixin):
    __table_args__ = (
        UniqueConstraint("show_id", "seat_id", name="uix_show_seat_unique"),
    )
    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, index=True)
    show_id: Mapped[int] = mapped_column(BigInteger, ForeignKey(
        "show.id", ondelete="CASCADE"), index=True, nullable=False)
    seat_id: Mapped[int] = mapped_column(BigInteger, ForeignKey(
        "cinemaseat.id", ondelete="CASCADE"), nullable=False)
    status: Mapped[ShowSeatStatus] = mapped_column(SAEnum(
        ShowSeatStatus, name="show_seat_status_enum",
        values_callable=lambda statuses: [status.value for status in statuses]),
        nullable=False, default=ShowSeatStatus.AVAILABLE)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=0)
    show: Mapped["Show"] = relationship(back_populates="show_seats")
    seat: Mapped["CinemaSeat"] = relationship(back_populates="show_seats")
