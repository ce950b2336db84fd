from datetime import datetime, timezone
from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, mapped_column


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False
    )

from .Movie import Movie
from .CinemaHall import CinemaHall
from .Show import Show
from .Seat import CinemaSeat, ShowSeat, SeatType, ShowSeatStatus
from .booking import Booking, PAYMENT_STATUS_PENDING
from .payment import Payment
from .ActorCrew import ActorCrew, movie_actor_crew
