# 📄 File: app/shared/infrastructure/database/session.py
#
# 🧭 Purpose (Layman Explanation):
# Gives each request its own conversation with the database and makes sure it is
# closed when the request is done.
#
# 🧪 Purpose (Technical Summary):
# FastAPI dependencies resolving the DatabaseConnectionManager stored on app.state
# and yielding a request-scoped AsyncSession.
#
# 🔗 Dependencies:
# - sqlalchemy.ext.asyncio (AsyncSession)
# - app/shared/infrastructure/database/connection.py (connection manager)
# - fastapi (for dependency injection)
#
# 🔄 Connected Modules / Calls From:
# - app/modules/user_management/presentation/dependencies.py (repository wiring)
# - app/api/v1/health.py

import logging
from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.core.exceptions import DatabaseError
from app.shared.infrastructure.database.connection import DatabaseConnectionManager

logger = logging.getLogger(__name__)


def get_database(request: Request) -> DatabaseConnectionManager:
    """Return the connection manager created by the application factory."""
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise DatabaseError("Database not configured")
    return db


async def get_db_session(
    db: DatabaseConnectionManager = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding a database session for one request.

    Usage:
        async def endpoint(session: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with db.session() as session:
        yield session
