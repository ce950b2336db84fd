import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import select

from cinema_booking.core.exceptions import ResourceNotFoundException
from cinema_booking.models.ActorCrew import ActorCrew, movie_actor_crew
from cinema_booking.models.Movie import Movie
from cinema_booking.schemas.actor_crew import ActorCrewCreate, ActorCrewUpdate

logger = logging.getLogger(__name__)


class CRUDActorCrew:
    async def get_actor_crew(self, db: AsyncSession, actor_crew_id: int) -> ActorCrew:
        actor_crew = await db.get(ActorCrew, actor_crew_id)
        if actor_crew is None:
            raise ResourceNotFoundException("actor/crew member", actor_crew_id)
        return actor_crew

    async def add_actor_crew(self, db: AsyncSession, data: ActorCrewCreate) -> ActorCrew:
        movie = await db.get(Movie, data.movie_id)
        if movie is None:
            raise ResourceNotFoundException("movie", data.movie_id)
        # new people always start out credited on one movie
        actor_crew = ActorCrew(**data.model_dump(exclude={"movie_id"}), movies=[movie])
        db.add(actor_crew)
        await db.commit()
        await db.refresh(actor_crew)
        logger.info(f"added actor/crew member {actor_crew.id} to movie {movie.id}")
        return actor_crew

    async def link_movie(self, db: AsyncSession, actor_crew_id: int, movie_id: int) -> ActorCrew:
        result = await db.execute(
            select(ActorCrew)
            .where(ActorCrew.id == actor_crew_id)
            .options(selectinload(ActorCrew.movies))
        )
        actor_crew = result.scalar_one_or_none()
        if actor_crew is None:
            raise ResourceNotFoundException("actor/crew member", actor_crew_id)
        movie = await db.get(Movie, movie_id)
        if movie is None:
            raise ResourceNotFoundException("movie", movie_id)
        if movie not in actor_crew.movies:
            actor_crew.movies.append(movie)
            await db.commit()
            await db.refresh(actor_crew)
        return actor_crew

    async def list_by_movie(self, db: AsyncSession, movie_id: int):
        if await db.get(Movie, movie_id) is None:
            raise ResourceNotFoundException("movie", movie_id)
        result = await db.scalars(
            select(ActorCrew)
            .join(movie_actor_crew, movie_actor_crew.c.actor_crew_id == ActorCrew.id)
            .where(movie_actor_crew.c.movie_id == movie_id)
            .order_by(ActorCrew.is_actor.desc(), ActorCrew.full_name)
        )
        return result.all()

    async def list_movies(self, db: AsyncSession, actor_crew_id: int):
        await self.get_actor_crew(db, actor_crew_id)
        result = await db.scalars(
            select(Movie)
            .join(movie_actor_crew, movie_actor_crew.c.movie_id == Movie.id)
            .where(movie_actor_crew.c.actor_crew_id == actor_crew_id)
            .order_by(Movie.title)
        )
        return result.all()

    async def update_actor_crew(self, db: AsyncSession, actor_crew_id: int, data: ActorCrewUpdate) -> ActorCrew:
        actor_crew = await self.get_actor_crew(db, actor_crew_id)
        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(actor_crew, field, value)
        await db.commit()
        await db.refresh(actor_crew)
        return actor_crew

    async def delete_actor_crew(self, db: AsyncSession, actor_crew_id: int) -> None:
        actor_crew = await self.get_actor_crew(db, actor_crew_id)
        # the movie links are removed with the row
        await db.delete(actor_crew)
        await db.commit()
        logger.info(f"deleted actor/crew member {actor_crew_id}")


crud_actor_crew = CRUDActorCrew()
