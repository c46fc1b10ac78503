import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.errors import register_exception_handlers
from app.api.routes import router
from app.core.config import Settings, get_settings
from app.core.db import Database
from app.core.logging import setup_logging


"""FastAPI application entrypoint.
Provides the app factory, the ASGI app instance and the service routes.
"""

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schools table on startup and release the pool on shutdown. - lifespan"""
    settings: Settings = app.state.settings
    database: Database = app.state.database

    try:
        await database.init_models()
    except Exception:
        logger.exception("Error initializing database")
        if settings.strict_startup:
            raise
        logger.warning("Continuing without an initialized database (STRICT_STARTUP=false)")

    logger.info("Server is running on port %s", settings.port)
    try:
        yield
    finally:
        await database.dispose()


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Build the application. - create_app

    ``database`` defaults to one built from ``settings``; tests pass their own.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(router)

    @app.get("/", tags=["root"])
    async def root():
        """Service metadata and endpoint list. - root"""
        return {
            "success": True,
            "message": f"{settings.app_name} is running",
            "version": settings.app_version,
            "endpoints": {
                "root": "/",
                "health": "/health",
                "addSchool": "/addSchool",
                "listSchools": "/listSchools",
            },
        }

    @app.get("/health", tags=["root"])
    async def health():
        """Liveness probe. - health"""
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    return app


app = create_app()
