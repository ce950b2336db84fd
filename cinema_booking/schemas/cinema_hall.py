from pydantic import BaseModel, ConfigDict, Field

from cinema_booking.models.Seat import SeatType


class CinemaSeatCreate(BaseModel):
    row_label: str = Field(min_length=1, max_length=5)
    seat_number: int = Field(gt=0)
    seat_type: SeatType = SeatType.REGULAR


class CinemaSeatResponse(CinemaSeatCreate):
    id: int
    hall_id: int

    model_config = ConfigDict(from_attributes=True)


class CinemaHallBase(BaseModel):
    name: str
    hall_type: str
    capacity: int = Field(gt=0)


class CinemaHallCreate(CinemaHallBase):
    pass


class CinemaHallResponse(CinemaHallBase):
    id: int
    seats: list[CinemaSeatResponse] = []

    model_config = ConfigDict(from_attributes=True)
