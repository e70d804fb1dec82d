# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for database migrations.

Migrations run against a throwaway SQLite file, so no server is needed.
"""

import pytest
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import create_async_engine

from fluency.infrastructure.database.migrations.runner import (
    MIGRATIONS,
    get_migration_status,
    run_migrations,
)
from fluency.infrastructure.database.models import Base

pytestmark = pytest.mark.integration


async def _inspect(db_url: str, fn):
    engine = create_async_engine(db_url)
    try:
        async with engine.connect() as conn:
            return await conn.run_sync(lambda sync_conn: fn(inspect(sync_conn)))
    finally:
        await engine.dispose()


class TestContentMigrations:
    """Test the content schema migration."""

    async def test_fresh_database_is_pending(self, sqlite_url: str) -> None:
        status = await get_migration_status(sqlite_url)

        assert status["current_version"] is None
        assert status["latest_version"] == MIGRATIONS[-1]
        assert status["pending_migrations"] == MIGRATIONS

    async def test_applies_all_migrations(self, sqlite_url: str) -> None:
        applied = await run_migrations(sqlite_url)

        assert applied == MIGRATIONS
        status = await get_migration_status(sqlite_url)
        assert status["current_version"] == MIGRATIONS[-1]
        assert status["pending_count"] == 0

    async def test_second_run_is_a_no_op(self, sqlite_url: str) -> None:
        await run_migrations(sqlite_url)

        assert await run_migrations(sqlite_url) == []

    async def test_creates_every_mapped_table(self, sqlite_url: str) -> None:
        """Verify the migrated schema matches the ORM models."""
        await run_migrations(sqlite_url)

        tables = set(await _inspect(sqlite_url, lambda insp: insp.get_table_names()))

        assert set(Base.metadata.tables) <= tables

    async def test_mapped_columns_exist(self, sqlite_url: str) -> None:
        await run_migrations(sqlite_url)

        def columns_by_table(insp):
            return {
                name: {column["name"] for column in insp.get_columns(name)}
                for name in Base.metadata.tables
            }

        migrated = await _inspect(sqlite_url, columns_by_table)

        for name, table in Base.metadata.tables.items():
            assert {column.name for column in table.columns} == migrated[name], name

    async def test_child_tables_cascade(self, sqlite_url: str) -> None:
        await run_migrations(sqlite_url)

        foreign_keys = await _inspect(sqlite_url, lambda insp: insp.get_foreign_keys("lesson_questions"))

        assert foreign_keys[0]["referred_table"] == "lessons"
        assert foreign_keys[0]["options"].get("ondelete") == "CASCADE"
