from datetime import date
from typing import Optional
from sqlalchemy import BigInteger, Boolean, Column, Date, ForeignKey, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from cinema_booking.db.base import Base, BigIntPK
from cinema_booking.models import TimestampMixin

movie_actor_crew = Table(
    "movie_actor_crew",
    Base.metadata,
    Column("movie_id", BigInteger, ForeignKey("movie.id", ondelete="CASCADE"), primary_key=True),
    Column("actor_crew_id", BigInteger, ForeignKey("actorcrew.id", ondelete="CASCADE"), primary_key=True),
)


class ActorCrew(Base, TimestampMixin):
    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, index=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    image_url: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    occupation: Mapped[str] = mapped_column(String(100), nullable=False)
    role_description: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    born_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    birthplace: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    about: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # False for crew (director, writer, ...)
    is_actor: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    movies: Mapped[list["Movie"]] = relationship(secondary=movie_actor_crew, back_populates="actors_crew")
