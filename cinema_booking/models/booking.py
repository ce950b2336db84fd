from sqlalchemy import BigInteger, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from cinema_booking.db.base import Base, BigIntPK
from cinema_booking.models import TimestampMixin

# payment status is free text; nothing but "Pending" is written until a gateway exists
PAYMENT_STATUS_PENDING = "Pending"


class Booking(Base, TimestampMixin):
    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, index=True)
    number_of_seats: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default=PAYMENT_STATUS_PENDING)
    user_id: Mapped[int] = mapped_column(BigInteger, index=True, nullable=False)
    show_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("show.id"), nullable=False)
    payments: Mapped[list["Payment"]] = relationship(back_populates="booking")
