import logging
from typing import AsyncGenerator
from cinema_booking.core.config import get_settings
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cinema_booking.db.base import Base

logger = logging.getLogger(__name__)

settings = get_settings()

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    pool_pre_ping=True
)

async_session = async_sessionmaker(
    bind=engine,
    autoflush=False,
    expire_on_commit=False
)


async def getDB_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides an async DB session
    and ensures it's closed after the request.
    """
    async with async_session() as session:
        yield session


async def init_db() -> None:
    """
    Create all tables based on models.
    Only used in development, deployed databases are migrated separately.
    """
    import cinema_booking.models  # noqa: F401  registers every table on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Created all tables")
