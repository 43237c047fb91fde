# 📄 File: app/main.py
#
# 🧭 Purpose (Layman Explanation):
# The main control center that starts up the VideoTube API, connects all the different parts together,
# and makes sure everything is ready to handle requests from the web and mobile apps.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point: builds the database manager, media host and
# security manager onto app.state, installs the middleware pipeline and exception handlers,
# registers routers and static files, and manages startup/shutdown through the lifespan.
#
# 🔗 Dependencies:
# - FastAPI framework, uvicorn
# - app.shared.config.settings
# - app.shared.infrastructure.database.connection
# - app.shared.infrastructure.storage.supabase_storage
# - app.api.pipeline, app.api.v1.router
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup
# - Docker container entry point
# - API tests

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Response
from fastapi.staticfiles import StaticFiles

from app.api.middleware import register_exception_handlers
from app.api.pipeline import apply_pipeline
from app.api.v1 import API_TAGS
from app.api.v1.health import health_router
from app.api.v1.router import api_v1_router
from app.shared.config.settings import Settings, get_settings
from app.shared.core.security import SecurityManager
from app.shared.infrastructure.database.connection import DatabaseConnectionManager
from app.shared.infrastructure.storage.supabase_storage import SupabaseMediaHost
from app.shared.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Opens the database engine on startup and disposes of it on shutdown.
    """
    settings: Settings = app.state.settings
    db: DatabaseConnectionManager = app.state.db

    logger.info(f"🎬 {settings.APP_NAME} starting up ({settings.ENVIRONMENT})...")

    await db.initialize()
    logger.info("✅ Database connection initialized")

    if settings.DB_CREATE_TABLES:
        await db.create_tables()
        logger.info("✅ Database tables ensured")

    logger.info(f"✅ {settings.APP_NAME} startup complete")

    try:
        yield  # Application is running
    finally:
        logger.info(f"🔄 {settings.APP_NAME} shutting down...")
        await db.close()
        logger.info("✅ Database connections closed")


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory function.

    Args:
        settings: Explicit settings, defaults to the cached environment settings

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    # Create FastAPI application
    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        openapi_tags=API_TAGS,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )

    # =========================================================================
    # SHARED RESOURCES
    # =========================================================================

    app.state.settings = settings
    app.state.db = DatabaseConnectionManager.from_settings(settings)
    app.state.media_host = SupabaseMediaHost.from_settings(settings)
    app.state.security = SecurityManager(settings)

    # =========================================================================
    # MIDDLEWARE AND ERROR HANDLING
    # =========================================================================

    apply_pipeline(app, settings)
    register_exception_handlers(app)

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    # Health check routes (no prefix)
    app.include_router(health_router)

    # API v1 routes
    app.include_router(api_v1_router, prefix="/api/v1")

    # Static files
    static_dir = Path(settings.STATIC_DIR)
    static_dir.mkdir(parents=True, exist_ok=True)
    Path(settings.UPLOAD_TEMP_DIR).mkdir(parents=True, exist_ok=True)
    app.mount("/static", StaticFiles(directory=static_dir), name="static")

    # =========================================================================
    # ROOT ENDPOINTS
    # =========================================================================

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "description": settings.APP_DESCRIPTION,
            "docs_url": "/docs" if settings.DEBUG else None,
            "health_check": "/health",
            "api_base": "/api/v1",
        }

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        """Favicon endpoint to prevent 404 errors."""
        return Response(status_code=204)

    return app


# Create the FastAPI application
app = create_application()


def main():
    """
    Main function for running the application in development.

    This function is used when running the application directly
    with python -m app.main or as a script entry point.
    """
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD and settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
        workers=1 if settings.RELOAD else settings.WORKERS,
    )


if __name__ == "__main__":
    main()
