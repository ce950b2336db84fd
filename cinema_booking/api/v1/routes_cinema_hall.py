from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from cinema_booking.core.exceptions import ResourceNotFoundException
from cinema_booking.crud.cinema_hall import crud_cinema_hall
from cinema_booking.db.session import getDB_session
from cinema_booking.schemas.cinema_hall import (
    CinemaHallCreate,
    CinemaHallResponse,
    CinemaSeatCreate,
    CinemaSeatResponse,
)


router = APIRouter(prefix="/cinema-hall")


@router.get("/", response_model=list[CinemaHallResponse])
async def get_all_cinema_halls(
        db: AsyncSession = Depends(getDB_session)):
    return await crud_cinema_hall.get_all_cinema_halls(db)


@router.get("/{hall_id}", response_model=CinemaHallResponse)
async def get_cinema_hall(
        hall_id: int,
        db: AsyncSession = Depends(getDB_session)):
    result = await crud_cinema_hall.get_cinema_hall(db, hall_id)
    if result is None:
        raise ResourceNotFoundException("cinema hall", hall_id)
    return result


@router.post("/", response_model=CinemaHallResponse)
async def create_cinema_hall(
        hall: CinemaHallCreate,
        db: AsyncSession = Depends(getDB_session)):
    return await crud_cinema_hall.create_cinema_hall(db, hall)


@router.post("/{hall_id}/seats", response_model=CinemaSeatResponse)
async def add_cinema_seat(
        hall_id: int,
        seat: CinemaSeatCreate,
        db: AsyncSession = Depends(getDB_session)):
    return await crud_cinema_hall.add_cinema_seat(db, hall_id, seat)


@router.delete("/{hall_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cinema_hall(
        hall_id: int,
        db: AsyncSession = Depends(getDB_session)):
    await crud_cinema_hall.delete_cinema_hall(db, hall_id)


@router.delete("/seats/{seat_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cinema_seat(
        seat_id: int,
        db: AsyncSession = Depends(getDB_session)):
    await crud_cinema_hall.delete_cinema_seat(db, seat_id)
