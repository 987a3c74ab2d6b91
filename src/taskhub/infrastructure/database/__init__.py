"""
Database Infrastructure
=======================

Manages the database engine, connection check and session lifecycle.

Uses SQLAlchemy 2.0 with asyncpg for async PostgreSQL operations.
"""

from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from taskhub.core.exceptions import DatabaseConnectionException
from taskhub.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """
    Base class for SQLAlchemy models.

    Resource models (users, tasks) inherit from this class.
    """
    pass


# Global engine and session maker
_engine: AsyncEngine | None = None
_session_maker: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """
    Get the connected database engine.

    Raises:
        RuntimeError: If connect_database() has not succeeded yet
    """
    if _engine is None:
        raise RuntimeError("Database engine not initialized. Call connect_database() first.")
    return _engine


def is_connected() -> bool:
    return _engine is not None


async def connect_database(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create the engine and verify the database answers.

    Runs a ``SELECT 1`` round trip before returning. There is no retry:
    a failure here is fatal for startup.

    Args:
        database_url: SQLAlchemy async URL (e.g. ``postgresql+asyncpg://...``)
        echo: Log emitted SQL

    Returns:
        AsyncEngine: The connected engine

    Raises:
        DatabaseConnectionException: If the engine cannot be created or the
            database does not answer
    """
    global _engine, _session_maker

    engine: AsyncEngine | None = None
    try:
        url = make_url(database_url)
        engine = create_async_engine(url, echo=echo, pool_pre_ping=True)
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        if engine is not None:
            await engine.dispose()
        logger.error(
            "Error connecting to the database",
            extra={"error_type": type(e).__name__, "error_message": str(e)},
        )
        raise DatabaseConnectionException(
            f"Could not connect to the database: {type(e).__name__}",
        ) from e

    _engine = engine
    _session_maker = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    logger.info(
        "Connected to the database successfully",
        extra={"dialect": engine.dialect.name},
    )
    return engine


async def close_database() -> None:
    """
    Dispose of the engine and its pooled connections.

    Safe to call when no engine exists.
    """
    global _engine, _session_maker

    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_maker = None
        logger.info("Database connections closed")


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Async generator for database sessions.

    For use with FastAPI's Depends() in resource routers:

        @router.get("/users")
        async def list_users(session: AsyncSession = Depends(get_session)):
            ...

    Commits on success, rolls back and re-raises on error.
    """
    if _session_maker is None:
        raise RuntimeError("Database not initialized. Call connect_database() first.")

    async with _session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
