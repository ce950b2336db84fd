from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ShowCreate(BaseModel):
    movie_id: int
    hall_id: int
    start_time: datetime
    base_price: Decimal = Field(default=Decimal("0"), ge=0)


class ShowUpdate(BaseModel):
    movie_id: Optional[int] = Field(default=None, gt=0)
    hall_id: Optional[int] = Field(default=None, gt=0)
    start_time: Optional[datetime] = None
    # price of the rebuilt show seats when the hall changes
    base_price: Decimal = Field(default=Decimal("0"), ge=0)


class ShowResponse(BaseModel):
    id: int
    movie_id: int
    hall_id: int
    start_time: datetime

    model_config = ConfigDict(from_attributes=True)


class AdminShowResponse(BaseModel):
    show_id: int
    movie_id: int
    movie_title: str
    hall_id: int
    hall_name: str
    start_time: datetime


class ShowInfoResponse(BaseModel):
    movie_title: str
    show_id: int
    hall_name: str
    start_time: datetime


class MovieShowResponse(BaseModel):
    show_id: int
    hall_id: int
    hall_name: str
    hall_type: str
    start_time: datetime
