import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import select

from cinema_booking.core.exceptions import ResourceConflictException, ResourceNotFoundException
from cinema_booking.crud.booking import crud_booking
from cinema_booking.models.Movie import Movie
from cinema_booking.models.Show import Show
from cinema_booking.schemas.movie import MovieCreate, MovieUpdate

logger = logging.getLogger(__name__)


class CRUDMovie:
    async def get_movie(self, db: AsyncSession, movie_id: int) -> Movie | None:
        return await db.get(Movie, movie_id)

    async def list_movies(self, db: AsyncSession, genre: Optional[str] = None, language: Optional[str] = None):
        stmt = select(Movie)
        if genre:
            stmt = stmt.where(Movie.genre == genre)
        if language:
            stmt = stmt.where(Movie.language == language)
        result = await db.scalars(stmt.order_by(Movie.title, Movie.id))
        return result.all()

    async def create_movie(self, db: AsyncSession, data: MovieCreate) -> Movie:
        movie = Movie(**data.model_dump())
        db.add(movie)
        await db.commit()
        await db.refresh(movie)
        return movie

    async def update_movie(self, db: AsyncSession, movie_id: int, data: MovieUpdate) -> Movie | None:
        movie = await db.get(Movie, movie_id)
        if movie is None:
            return None
        # partial update: fields left out of the request keep their value
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in changes.items():
            setattr(movie, field, value)
        if changes:
            await db.commit()
            await db.refresh(movie)
        return movie

    async def delete_movie(self, db: AsyncSession, movie_id: int) -> None:
        movie = await db.get(Movie, movie_id)
        if movie is None:
            raise ResourceNotFoundException("movie", movie_id)
        if await crud_booking.has_bookings(db, Show.movie_id == movie_id):
            raise ResourceConflictException(f"movie {movie_id} has shows with bookings")
        # shows, their show seats and the cast links go with the movie
        await db.delete(movie)
        await db.commit()
        logger.info(f"deleted movie {movie_id}")


crud_movie = CRUDMovie()
