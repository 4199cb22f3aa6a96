import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from campus_feed.application.use_cases.cleanup import run_scheduled_sweep
from campus_feed.config import get_settings
from campus_feed.infrastructure.database import engine, initialize_database
from campus_feed.infrastructure.scheduler import shutdown_sweeper, start_sweeper
from campus_feed.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the database and the sweeper on startup and release them on shutdown."""

    settings = get_settings()
    initialize_database()
    if settings.sweep_on_startup:
        result = run_scheduled_sweep()
        logger.info("Startup sweep removed %s expired rows", result.total_deleted)
    start_sweeper(run_scheduled_sweep, settings)
    yield
    shutdown_sweeper()
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    logging.getLogger().setLevel(settings.log_level)

    app = FastAPI(title="Campus Feed API", lifespan=lifespan)

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
