import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from cinema_booking.api.v1 import (
    routes_actor_crew,
    routes_booking,
    routes_cinema_hall,
    routes_health,
    routes_movie,
    routes_show,
)
from cinema_booking.core.config import settings
from cinema_booking.core.exceptions import BookingError, StorageFailureException
from cinema_booking.core.logging_config import configure_logging
from cinema_booking.db import session
from cinema_booking.redis import close_redis

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    logger.info(f"Starting {settings.PROJECT_NAME} ({settings.ENV})")
    if settings.ENV == "development":
        await session.init_db()
    yield
    await close_redis()
    await session.engine.dispose()
    logger.info("Shut down cleanly")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        description=settings.PROJECT_DESCRIPTION,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for router in (
            routes_health.router,
            routes_movie.router,
            routes_show.router,
            routes_cinema_hall.router,
            routes_actor_crew.router,
            routes_booking.router):
        app.include_router(router, prefix=settings.API_V1_PREFIX)

    @app.exception_handler(BookingError)
    async def booking_error_handler(request: Request, ex: BookingError):
        if isinstance(ex, StorageFailureException):
            logger.error(f"{request.method} {request.url.path} failed: {ex.context}")
        return JSONResponse(status_code=ex.status_code, content={"error": ex.message})

    @app.get("/")
    async def root():
        return {"message": "Cinema booking backend is running"}

    return app


app = create_app()
