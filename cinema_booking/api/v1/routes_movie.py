from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from cinema_booking.core.exceptions import ResourceNotFoundException
from cinema_booking.crud.actor_crew import crud_actor_crew
from cinema_booking.crud.movie import crud_movie
from cinema_booking.crud.show import crud_show
from cinema_booking.db.session import getDB_session
from cinema_booking.schemas.actor_crew import MovieActorCrewResponse
from cinema_booking.schemas.movie import MovieCreate, MovieResponse, MovieUpdate
from cinema_booking.schemas.show import MovieShowResponse

router = APIRouter(prefix="/movie", tags=["movies"])


@router.get("/", response_model=list[MovieResponse])
async def list_movies(
        genre: Optional[str] = Query(default=None),
        language: Optional[str] = Query(default=None),
        db: AsyncSession = Depends(getDB_session)):
    return await crud_movie.list_movies(db, genre=genre, language=language)


@router.get("/{movie_id}", response_model=MovieResponse)
async def get_movie(movie_id: int, db: AsyncSession = Depends(getDB_session)):
    movie = await crud_movie.get_movie(db, movie_id)
    if movie is None:
        raise ResourceNotFoundException("movie", movie_id)
    return movie


@router.get("/{movie_id}/shows", response_model=list[MovieShowResponse])
async def list_movie_shows(movie_id: int, db: AsyncSession = Depends(getDB_session)):
    if await crud_movie.get_movie(db, movie_id) is None:
        raise ResourceNotFoundException("movie", movie_id)
    return await crud_show.get_shows_by_movie_id(db, movie_id)


@router.post("/", response_model=MovieResponse)
async def create_movie(movie: MovieCreate, db: AsyncSession = Depends(getDB_session)):
    return await crud_movie.create_movie(db, movie)


@router.put("/{movie_id}", response_model=MovieResponse)
async def update_movie(movie_id: int, changes: MovieUpdate, db: AsyncSession = Depends(getDB_session)):
    movie = await crud_movie.update_movie(db, movie_id, changes)
    if movie is None:
        raise ResourceNotFoundException("movie", movie_id)
    return movie


@router.delete("/{movie_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_movie(movie_id: int, db: AsyncSession = Depends(getDB_session)):
    await crud_movie.delete_movie(db, movie_id)


@router.get("/{movie_id}/actors-crew", response_model=list[MovieActorCrewResponse])
async def list_movie_actors_crew(movie_id: int, db: AsyncSession = Depends(getDB_session)):
    return await crud_actor_crew.list_by_movie(db, movie_id)
