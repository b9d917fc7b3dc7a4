"""Database engine and session management.

One async engine per process, created during application startup and
disposed on shutdown. Request handlers receive an ``AsyncSession`` through
the :func:`get_session` dependency; the session commits when the handler
returns normally and rolls back when it raises.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from recipe_service.db.base import Base
from recipe_service.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from recipe_service.core.config import Settings


logger = get_logger(__name__)


class _DatabaseHolder:
    engine: AsyncEngine | None = None
    session_factory: async_sessionmaker[AsyncSession] | None = None


def _engine_kwargs(settings: Settings, url: str) -> dict[str, Any]:
    if url.startswith("sqlite"):
        # A single shared connection keeps an in-memory database alive
        # across sessions.
        return {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    return {
        "pool_pre_ping": True,
        "pool_recycle": 3600,
        "pool_size": settings.database.pool_size,
        "max_overflow": settings.database.max_overflow,
    }


def init_database(settings: Settings) -> async_sessionmaker[AsyncSession]:
    """Create the engine and session factory.

    Args:
        settings: Application settings.

    Returns:
        The session factory bound to the new engine.
    """
    url = settings.database_url
    engine = create_async_engine(
        url,
        echo=settings.database.echo,
        **_engine_kwargs(settings, url),
    )
    _DatabaseHolder.engine = engine
    _DatabaseHolder.session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )
    logger.info("Database engine created", dialect=engine.dialect.name)
    return _DatabaseHolder.session_factory


async def create_all() -> None:
    """Create missing tables; schema migrations are handled outside the service."""
    if _DatabaseHolder.engine is None:
        msg = "Database not initialized. Call init_database() first."
        raise RuntimeError(msg)

    import recipe_service.db.models  # noqa: F401  registers mappers

    async with _DatabaseHolder.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_database() -> None:
    if _DatabaseHolder.engine is not None:
        await _DatabaseHolder.engine.dispose()
        _DatabaseHolder.engine = None
        _DatabaseHolder.session_factory = None
        logger.info("Database engine disposed")


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    if _DatabaseHolder.session_factory is None:
        msg = "Database not initialized. Call init_database() first."
        raise RuntimeError(msg)
    return _DatabaseHolder.session_factory


async def get_session() -> AsyncGenerator[AsyncSession]:
    """Yield a transactional session for one request.

    Yields:
        AsyncSession committed on success, rolled back on error.
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
