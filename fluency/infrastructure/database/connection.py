# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database connection management using SQLAlchemy async.

Uses SQLAlchemy 2.0 async API with the asyncpg driver in production.
Any async driver URL works (tests run against aiosqlite).

Example:
    engine = create_engine(settings.db.url, pool_size=settings.db.pool_size)
    sessionmaker = create_sessionmaker(engine)

    async with session_scope(sessionmaker) as session:
        question = await session.get(ListeningQuestion, question_id)
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)


class DatabaseError(Exception):
    """Base exception for database operations.

    Attributes:
        message: Human-readable error description.
        original_error: The underlying SQLAlchemy or database error.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


def create_engine(
    url: str,
    pool_size: int | None = None,
    max_overflow: int | None = None,
    echo: bool = False,
) -> AsyncEngine:
    """Create an async engine for the given URL.

    Pool sizing is only applied to server databases; SQLite uses its own
    pool implementation and rejects those arguments.

    Args:
        url: Async SQLAlchemy URL.
        pool_size: Connection pool size.
        max_overflow: Maximum overflow connections.
        echo: Log every statement.

    Returns:
        The async engine.

    Raises:
        DatabaseError: If the engine cannot be created.
    """
    kwargs: dict = {"echo": echo}
    if not url.startswith("sqlite"):
        kwargs.update(pool_pre_ping=True, pool_recycle=1800)
        if pool_size is not None:
            kwargs["pool_size"] = pool_size
        if max_overflow is not None:
            kwargs["max_overflow"] = max_overflow

    try:
        return create_async_engine(url, **kwargs)
    except SQLAlchemyError as e:
        raise DatabaseError("Failed to create database engine", e) from e


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the sessionmaker used by repositories and services."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def session_scope(
    sessionmaker: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Open a session that commits on success and rolls back on exception.

    Args:
        sessionmaker: Sessionmaker to open the session from.

    Yields:
        AsyncSession for database operations.

    Raises:
        DatabaseError: If a database operation or the commit fails.
    """
    async with sessionmaker() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            raise DatabaseError("Database operation failed", e) from e
        except Exception:
            await session.rollback()
            raise


async def check_database_connection(
    sessionmaker: async_sessionmaker[AsyncSession] | None,
) -> bool:
    """Check if the database is reachable.

    Returns:
        True if the database is reachable, False otherwise.
    """
    if sessionmaker is None:
        return False

    try:
        async with sessionmaker() as session:
            await session.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False
