from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from cinema_booking.crud.actor_crew import crud_actor_crew
from cinema_booking.db.session import getDB_session
from cinema_booking.schemas.actor_crew import (
    ActorCrewCreate,
    ActorCrewLink,
    ActorCrewMovieResponse,
    ActorCrewResponse,
    ActorCrewUpdate,
)

router = APIRouter(prefix="/actor-crew", tags=["actors and crew"])


@router.post("/", response_model=ActorCrewResponse)
async def add_actor_crew(data: ActorCrewCreate, db: AsyncSession = Depends(getDB_session)):
    return await crud_actor_crew.add_actor_crew(db, data)


@router.get("/{actor_crew_id}", response_model=ActorCrewResponse)
async def get_actor_crew(actor_crew_id: int, db: AsyncSession = Depends(getDB_session)):
    return await crud_actor_crew.get_actor_crew(db, actor_crew_id)


@router.get("/{actor_crew_id}/movies", response_model=list[ActorCrewMovieResponse])
async def list_actor_crew_movies(actor_crew_id: int, db: AsyncSession = Depends(getDB_session)):
    return await crud_actor_crew.list_movies(db, actor_crew_id)


@router.post("/{actor_crew_id}/movies", response_model=ActorCrewResponse)
async def link_actor_crew_to_movie(
        actor_crew_id: int,
        link: ActorCrewLink,
        db: AsyncSession = Depends(getDB_session)):
    return await crud_actor_crew.link_movie(db, actor_crew_id, link.movie_id)


@router.put("/{actor_crew_id}", response_model=ActorCrewResponse)
async def update_actor_crew(
        actor_crew_id: int,
        changes: ActorCrewUpdate,
        db: AsyncSession = Depends(getDB_session)):
    return await crud_actor_crew.update_actor_crew(db, actor_crew_id, changes)


@router.delete("/{actor_crew_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_actor_crew(actor_crew_id: int, db: AsyncSession = Depends(getDB_session)):
    await crud_actor_crew.delete_actor_crew(db, actor_crew_id)
