"""
Database Dependency

FastAPI dependency for database sessions.

This module provides the get_db dependency that yields async database sessions
to route handlers. The session is automatically committed on success and
rolled back on error. Tests swap it out through app.dependency_overrides.

Usage:
======
    from fastapi import Depends
    from sqlalchemy.ext.asyncio import AsyncSession
    from inkpress.api.dependencies.database import get_db, DbSession

    # Using type alias (recommended)
    @router.get("/ready")
    async def ready(db: DbSession):
        await db.execute(text("SELECT 1"))

    # Using explicit Depends
    async def get_post_service(db: AsyncSession = Depends(get_db)):
        return PostService(db)
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from inkpress.shared.db import get_db as _get_db


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Yields an async database session for the duration of the request.
    The session is automatically:
    - Committed on success
    - Rolled back on exception
    - Closed after the request

    Yields:
        AsyncSession: Database session for the current request
    """
    async for session in _get_db():
        yield session


# Type alias for cleaner route signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
