"""Dependency injection for FastAPI routes."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.core.database import get_async_session, get_session_factory

# Type alias for database session dependency
AsyncSessionDep = Annotated[AsyncSession, Depends(get_async_session)]


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Alias for get_async_session."""
    async for session in get_async_session():
        yield session


# Database session dependency
DBSession = Annotated[AsyncSession, Depends(get_db)]

# Session factory dependency (search runs its page and count queries on separate sessions)
SessionFactory = Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)]


__all__ = [
    "AsyncSessionDep",
    "DBSession",
    "SessionFactory",
    "get_db",
    "get_session_factory",
]
