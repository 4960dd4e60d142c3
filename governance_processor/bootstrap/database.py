"""Database session factory bootstrap (PostgreSQL via SQLAlchemy).

Usage:
    from governance_processor.bootstrap.database import get_session_factory

    session_factory = get_session_factory(config)
    async with session_factory() as session:
        ...
"""

from __future__ import annotations

import os

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from structlog import get_logger

from governance_processor.config.processor_config import (
    ProcessorConfig,
    mask_database_url,
)

logger = get_logger()

_session_factory: async_sessionmaker[AsyncSession] | None = None
_engine: AsyncEngine | None = None


def to_async_url(url: str) -> str:
    """Convert a PostgreSQL URL to the asyncpg driver form.

    Raises:
        ValueError: If url is empty.
    """
    if not url:
        raise ValueError(
            "DATABASE_URL environment variable not set. "
            "Required for the postgresql persister."
        )
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if not url.startswith("postgresql+asyncpg://"):
        return f"postgresql+asyncpg://{url}"
    return url


def get_session_factory(config: ProcessorConfig) -> async_sessionmaker[AsyncSession]:
    """Get the SQLAlchemy async session factory.

    Creates a singleton engine and factory on first call, sized by the
    pool settings of config.

    Raises:
        ValueError: If the database URL is not configured.
    """
    global _session_factory, _engine

    if _session_factory is None:
        log = logger.bind(component="database_bootstrap")
        url = to_async_url(config.database_url)
        log.info("creating_database_engine", url=mask_database_url(url))

        _engine = create_async_engine(
            url,
            echo=os.environ.get("SQLALCHEMY_ECHO", "").lower() in ("1", "true", "yes"),
            pool_pre_ping=True,
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_recycle=config.pool_recycle_seconds,
        )
        _session_factory = async_sessionmaker(
            bind=_engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        log.info("database_session_factory_created")

    return _session_factory


def reset_database_bootstrap() -> None:
    """Reset database singleton for testing."""
    global _session_factory, _engine
    _session_factory = None
    _engine = None


async def close_database_engine() -> None:
    """Close the database engine (for graceful shutdown)."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None
