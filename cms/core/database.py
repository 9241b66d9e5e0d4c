"""
Database

Async SQLAlchemy engine and session management.

The engine is created lazily on first use so importing the application does
not require a reachable database (tests swap in their own engine).
"""

import logging
from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from cms.config import get_settings

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Get (creating if needed) the process-wide async engine."""
    global _engine
    if _engine is None:
        settings = get_settings()
        kwargs: dict = {"echo": settings.database_echo}
        if settings.database_url.startswith("postgresql"):
            kwargs["pool_size"] = settings.database_pool_size
            kwargs["max_overflow"] = settings.database_max_overflow
        _engine = create_async_engine(settings.database_url, **kwargs)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get (creating if needed) the async session factory."""
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _session_factory


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding a request-scoped session.

    Commits when the request handler returns normally, rolls back when it
    raises, so a failed operation never partially persists.
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


DbSession = Annotated[AsyncSession, Depends(get_db)]


async def init_db() -> None:
    """Create tables that do not exist yet (development convenience)."""
    from cms.models.orm import Base

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ensured")


async def close_db() -> None:
    """Dispose the engine and drop cached state."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        logger.info("Database engine disposed")
    reset_db_state()


def reset_db_state() -> None:
    """Forget the cached engine and session factory (used by tests)."""
    global _engine, _session_factory
    _engine = None
    _session_factory = None
