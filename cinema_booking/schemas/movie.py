from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class MovieCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str
    genre: str
    language: str
    duration_mins: int = Field(gt=0)
    age_limit: str
    release_date: Optional[date] = None


class MovieUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    genre: Optional[str] = None
    language: Optional[str] = None
    duration_mins: Optional[int] = Field(default=None, gt=0)
    age_limit: Optional[str] = None
    release_date: Optional[date] = None


class MovieResponse(MovieCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)
