from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field

from cinema_booking.models.Seat import SeatType, ShowSeatStatus


class ShowSeatResponse(BaseModel):
    show_seat_id: int
    row_label: str
    seat_number: int
    seat_type: SeatType
    status: ShowSeatStatus
    price: Decimal

    model_config = ConfigDict(from_attributes=True)


class ShowSeatPriceUpdate(BaseModel):
    price: Decimal = Field(ge=0)


class ShowSeatPriceResponse(BaseModel):
    id: int
    show_id: int
    status: ShowSeatStatus
    price: Decimal

    model_config = ConfigDict(from_attributes=True)
