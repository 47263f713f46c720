"""FastAPI application for the terrain-progress HTTP API."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__
from ..db.engine import get_db_path, init_db
from ..errors import EnrollmentNotFoundError, ProgramNotFoundError, TerrainProgressError
from ..logging_config import setup_logging
from ..settings import Settings, get_settings
from ..utils.dates import CalendarClock
from .routers import activity, enrollment, programs

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - runs on startup and shutdown."""
    db_path = app.state.db_path
    if not db_path.exists():
        await init_db(db_path)
    yield


def register_exception_handlers(app: FastAPI) -> None:
    """Map progress-core errors onto HTTP responses."""

    @app.exception_handler(ProgramNotFoundError)
    @app.exception_handler(EnrollmentNotFoundError)
    async def not_found_handler(request: Request, exc: TerrainProgressError):
        return JSONResponse(
            status_code=404,
            content={"error": str(exc), "code": type(exc).__name__},
        )

    @app.exception_handler(TerrainProgressError)
    async def validation_handler(request: Request, exc: TerrainProgressError):
        logger.debug("Rejected request to %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=422,
            content={"error": str(exc), "code": type(exc).__name__},
        )


def create_app(
    db_path: Path | None = None,
    clock: CalendarClock | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        db_path: SQLite database path (default: from settings)
        clock: Calendar clock (default: settings time zone, real time)
        settings: Settings override
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="terrain-progress",
        description="Multi-day wellness program tracking",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.db_path = db_path or get_db_path(settings.data_dir)
    app.state.clock = clock or settings.clock()
    app.state.first_weekday = settings.first_weekday_index

    register_exception_handlers(app)

    app.include_router(programs.router)
    app.include_router(enrollment.router)
    app.include_router(activity.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
