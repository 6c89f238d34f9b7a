"""
Database Infrastructure
=======================

Engine and session factory for the optional knowledge, reference and usage
tables.

The service runs without a database when DATABASE_URL is unset. With one,
PostgreSQL is reached through asyncpg; tests use SQLite through aiosqlite.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from askrexi.config import settings


class Base(DeclarativeBase):
    """Declarative base shared by the knowledge, reference and usage tables."""


# Process-wide engine, set by init_database() during startup
_engine: Optional[AsyncEngine] = None
_session_maker: Optional[async_sessionmaker[AsyncSession]] = None


def _engine_options(url: str) -> tuple[str, dict]:
    options: dict = {"echo": settings.debug}
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        return url, options

    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
    )
    # asyncpg spells the libpq sslmode parameter as ssl
    return url.replace("sslmode=", "ssl="), options


def init_database(database_url: Optional[str] = None) -> AsyncEngine:
    """
    Create the engine and session factory.

    Args:
        database_url: Overrides settings.database_url

    Raises:
        RuntimeError: If no URL is given or configured
    """
    global _engine, _session_maker

    url = database_url or settings.database_url
    if not url:
        raise RuntimeError("No database URL configured")

    url, options = _engine_options(url)
    _engine = create_async_engine(url, **options)
    _session_maker = async_sessionmaker(_engine, expire_on_commit=False, autoflush=False)
    return _engine


def get_engine() -> AsyncEngine:
    if _engine is None:
        raise RuntimeError("Database engine not initialized. Call init_database() first.")
    return _engine


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Session factory handed to the SQLAlchemy store and usage sink."""
    if _session_maker is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")
    return _session_maker


async def create_tables() -> None:
    """Create missing tables. Deployments with managed schemas can skip this."""
    # Importing the model modules registers their tables on Base.metadata
    import askrexi.knowledge.infrastructure.models  # noqa: F401
    import askrexi.agents.infrastructure.models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_database() -> None:
    """Dispose of pooled connections on shutdown."""
    global _engine, _session_maker

    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_maker = None
