from decimal import Decimal
from sqlalchemy import BigInteger, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from cinema_booking.db.base import Base, BigIntPK
from cinema_booking.models import TimestampMixin


class Payment(Base, TimestampMixin):
    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    remote_transaction_id: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    payment_method: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    booking_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("booking.id"), index=True, nullable=False)
    booking: Mapped["Booking"] = relationship(back_populates="payments")
