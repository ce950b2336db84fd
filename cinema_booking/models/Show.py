from datetime import datetime
from sqlalchemy import BigInteger, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from cinema_booking.db.base import Base, BigIntPK
from cinema_booking.models import TimestampMixin


class Show(Base, TimestampMixin):
    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, index=True)
    movie_id: Mapped[int] = mapped_column(BigInteger, ForeignKey(
        "movie.id", ondelete="CASCADE"), nullable=False)
    hall_id: Mapped[int] = mapped_column(BigInteger, ForeignKey(
        "cinemahall.id", ondelete="CASCADE"), nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    movie: Mapped["Movie"] = relationship(back_populates="shows")
    hall: Mapped["CinemaHall"] = relationship(back_populates="shows")
    show_seats: Mapped[list["ShowSeat"]] = relationship(back_populates="show", cascade="all, delete-orphan")
