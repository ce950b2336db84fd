from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cinema_booking.models import ShowSeat

SHOW_ID = 7
USER_ID = 42


async def seat_statuses(session: AsyncSession, show_seat_ids):
    result = await session.execute(select(ShowSeat.id, ShowSeat.status).where(ShowSeat.id.in_(show_seat_ids)))
    return {row.id: row.status for row in result}
