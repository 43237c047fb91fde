# 📄 File: app/shared/infrastructure/database/connection.py
#
# 🧭 Purpose (Layman Explanation):
# Manages the connection to our database, making sure we can talk to our data storage
# and handling multiple connections efficiently without overwhelming the database.
#
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy connection manager with connection pooling, a retrying health check,
# and explicit initialize/close. One instance is built by the application factory and
# stored on app.state; nothing in this module holds a global engine.
#
# 🔗 Dependencies:
# - sqlalchemy (async engine and sessions)
# - app/shared/config/settings.py (database configuration)
# - asyncpg (PostgreSQL async driver), aiosqlite in tests
#
# 🔄 Connected Modules / Calls From:
# - app/main.py (construction and lifespan)
# - app/shared/infrastructure/database/session.py (request sessions)
# - app/api/v1/health.py (database health monitoring)

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.shared.config.settings import Settings
from app.shared.core.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base shared by every ORM model."""


class DatabaseConnectionManager:
    """
    Manages database connections with connection pooling,
    health monitoring, and retry logic on the health check.
    """

    def __init__(self, database_url: str, settings: Optional[Settings] = None):
        self.database_url = database_url
        self._settings = settings
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None
        self._health_check_query = text("SELECT 1")
        self._retry_attempts = 3
        self._retry_delay = 1.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "DatabaseConnectionManager":
        return cls(settings.database_url, settings)

    def _build_connection_params(self) -> Dict[str, Any]:
        """Build SQLAlchemy engine parameters for the configured driver."""
        params: Dict[str, Any] = {"url": self.database_url}

        if self.database_url.startswith("sqlite"):
            # SQLite uses a static/singleton pool; pool sizing does not apply
            return params

        settings = self._settings
        params.update({
            "echo": bool(settings and settings.DEBUG),
            "pool_pre_ping": True,
        })
        if settings is not None:
            params.update({
                "pool_size": settings.DB_POOL_SIZE,
                "max_overflow": settings.DB_MAX_OVERFLOW,
                "pool_timeout": settings.DB_POOL_TIMEOUT,
                "pool_recycle": settings.DB_POOL_RECYCLE,
            })
        if self.database_url.startswith("postgresql+asyncpg"):
            params["connect_args"] = {
                "server_settings": {"application_name": "videotube_api"},
                "command_timeout": 60,
            }
        return params

    async def initialize(self) -> None:
        """Create the engine and session factory."""
        if self._engine is not None:
            logger.warning("Database engine already initialized")
            return

        logger.info("Initializing database connection pool...")
        self._engine = create_async_engine(**self._build_connection_params())
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=True,
        )
        logger.info("Database connection pool initialized")

    async def create_tables(self) -> None:
        """Create any missing tables from the ORM metadata."""
        if self._engine is None:
            raise DatabaseError("Database engine not initialized")

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    async def health_check(self) -> Dict[str, Any]:
        """
        Perform database health check and return structured status.
        """
        if self._engine is None:
            return {
                "status": "unhealthy",
                "error": "Database engine not initialized",
                "timestamp": datetime.now(timezone.utc).isoformat()
            }

        for attempt in range(self._retry_attempts):
            try:
                async with self._engine.connect() as conn:
                    await conn.execute(self._health_check_query)

                return {
                    "status": "healthy",
                    "timestamp": datetime.now(timezone.utc).isoformat()
                }

            except Exception as e:
                logger.warning(
                    f"Database health check failed (attempt {attempt + 1}/{self._retry_attempts}): {e}"
                )
                if attempt < self._retry_attempts - 1:
                    await asyncio.sleep(self._retry_delay * (2 ** attempt))

        logger.error("Database health check failed after all retry attempts")
        return {
            "status": "unhealthy",
            "error": "Database health check failed after all retry attempts",
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Open a session; rolled back if the block raises, always closed.

        Repositories commit their own writes.
        """
        if self._session_factory is None:
            raise DatabaseError("Database engine not initialized")

        session: AsyncSession = self._session_factory()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def close(self) -> None:
        """Close database engine and all connections."""
        if self._engine is None:
            logger.warning("Database engine not initialized, nothing to close")
            return

        logger.info("Closing database connection pool...")
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database connection pool closed")

    @property
    def engine(self) -> Optional[AsyncEngine]:
        """Get the SQLAlchemy async engine."""
        return self._engine

    @property
    def is_initialized(self) -> bool:
        """Check if database engine is initialized."""
        return self._engine is not None
