from typing import List
from pydantic import BaseModel, ConfigDict, Field, field_validator


class BookingForm(BaseModel):
    show_id: int = Field(gt=0)
    show_seats_id: List[int] = Field(min_length=1)

    @field_validator("show_seats_id")
    @classmethod
    def validate_show_seats_id(cls, show_seats_id: List[int]) -> List[int]:
        if any(show_seat_id <= 0 for show_seat_id in show_seats_id):
            raise ValueError("show seat IDs must be positive")
        if len(set(show_seats_id)) != len(show_seats_id):
            raise ValueError("show seat IDs must not repeat")
        return show_seats_id


class BookingConfirmation(BaseModel):
    message: str


class BookingResponse(BaseModel):
    id: int
    number_of_seats: int
    status: str
    user_id: int
    show_id: int

    model_config = ConfigDict(from_attributes=True)
