from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ActorCrewBase(BaseModel):
    full_name: str = Field(min_length=1, max_length=255)
    image_url: str = ""
    occupation: str = Field(min_length=1, max_length=100)
    role_description: str = ""
    born_date: Optional[date] = None
    birthplace: str = ""
    about: str = ""
    is_actor: bool = True


class ActorCrewCreate(ActorCrewBase):
    movie_id: int = Field(gt=0)


class ActorCrewUpdate(BaseModel):
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    image_url: Optional[str] = None
    occupation: Optional[str] = Field(default=None, min_length=1, max_length=100)
    role_description: Optional[str] = None
    born_date: Optional[date] = None
    birthplace: Optional[str] = None
    about: Optional[str] = None
    is_actor: Optional[bool] = None


class ActorCrewResponse(ActorCrewBase):
    id: int

    model_config = ConfigDict(from_attributes=True)


class MovieActorCrewResponse(BaseModel):
    """Short form used when listing the cast and crew of a movie."""
    id: int
    full_name: str
    image_url: str
    role_description: str
    is_actor: bool

    model_config = ConfigDict(from_attributes=True)


class ActorCrewMovieResponse(BaseModel):
    id: int
    title: str
    release_date: Optional[date] = None

    model_config = ConfigDict(from_attributes=True)


class ActorCrewLink(BaseModel):
    movie_id: int = Field(gt=0)
