from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from cinema_booking.db.base import Base, BigIntPK
from cinema_booking.models import TimestampMixin


class CinemaHall(Base, TimestampMixin):
    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    hall_type: Mapped[str] = mapped_column(String(50), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    seats: Mapped[list["CinemaSeat"]] = relationship(back_populates="hall", cascade="all, delete-orphan")
    shows: Mapped[list["Show"]] = relationship(back_populates="hall", cascade="all, delete-orphan")
