from datetime import date
from typing import Optional
from sqlalchemy import Date, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from cinema_booking.db.base import Base, BigIntPK
from cinema_booking.models import TimestampMixin


class Movie(Base, TimestampMixin):
    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    genre: Mapped[str] = mapped_column(String(100), nullable=False)
    language: Mapped[str] = mapped_column(String(50), nullable=False)
    duration_mins: Mapped[int] = mapped_column(Integer, nullable=False)
    age_limit: Mapped[str] = mapped_column(String(10), nullable=False)
    release_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    shows: Mapped[list["Show"]] = relationship(
        back_populates="movie", cascade="all, delete-orphan")
    actors_crew: Mapped[list["ActorCrew"]] = relationship(
        secondary="movie_actor_crew", back_populates="movies")
