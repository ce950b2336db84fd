from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from cinema_booking.crud.show import crud_show
from cinema_booking.crud.show_seat import crud_show_seat
from cinema_booking.db.session import getDB_session
from cinema_booking.schemas.show import AdminShowResponse, ShowCreate, ShowInfoResponse, ShowResponse, ShowUpdate
from cinema_booking.schemas.showseat import ShowSeatPriceResponse, ShowSeatPriceUpdate, ShowSeatResponse


router = APIRouter(tags=["shows"])


@router.get("/show/", response_model=list[AdminShowResponse])
async def list_all_shows(db: AsyncSession = Depends(getDB_session)):
    return await crud_show.list_all_shows(db)


@router.get("/show/{show_id}", response_model=ShowInfoResponse)
async def get_show_info(show_id: int, db: AsyncSession = Depends(getDB_session)):
    return await crud_show.get_show_info(db, show_id)


@router.get("/show/{show_id}/seats", response_model=list[ShowSeatResponse])
async def get_show_seats(show_id: int, db: AsyncSession = Depends(getDB_session)):
    return await crud_show_seat.get_show_seats(db, show_id)


@router.post("/show/", response_model=ShowResponse)
async def create_show(show: ShowCreate, db: AsyncSession = Depends(getDB_session)):
    return await crud_show.create_show(db, show)


@router.put("/show/{show_id}", response_model=ShowResponse)
async def update_show(show_id: int, changes: ShowUpdate, db: AsyncSession = Depends(getDB_session)):
    return await crud_show.update_show(db, show_id, changes)


@router.delete("/show/{show_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_show(show_id: int, db: AsyncSession = Depends(getDB_session)):
    await crud_show.delete_show(db, show_id)


@router.put("/show-seat/{show_seat_id}/price", response_model=ShowSeatPriceResponse)
async def update_show_seat_price(
        show_seat_id: int,
        data: ShowSeatPriceUpdate,
        db: AsyncSession = Depends(getDB_session)):
    return await crud_show_seat.update_show_seat_price(db, show_seat_id, data.price)
