from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from teamboard.application.scheduler import ReminderScheduler
from teamboard.config import get_settings
from teamboard.infrastructure import database
from teamboard.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the database, run the reminder scheduler and release resources on exit."""

    settings = get_settings()
    database.initialize_database()
    scheduler = None
    if settings.enable_scheduler:
        scheduler = ReminderScheduler.from_settings(settings, database.SessionLocal)
        scheduler.start()
    app.state.reminder_scheduler = scheduler
    try:
        yield
    finally:
        if scheduler is not None:
            await scheduler.stop()
        database.engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    app = FastAPI(title="teamboard", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
