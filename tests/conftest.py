# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- In-memory cache and search backends
- A temporary SQLite database with the content schema
- A fully wired content container
"""

import fnmatch
import json
from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from fluency.container import ContentContainer
from fluency.core.config import Settings, clear_settings_cache
from fluency.infrastructure.cache import RedisError
from fluency.infrastructure.database import create_engine, create_sessionmaker
from fluency.infrastructure.database.models import Base
from fluency.infrastructure.search import QdrantError


# =============================================================================
# In-memory Backends
# =============================================================================


class FakeCacheStore:
    """Dict-backed stand-in for RedisClient.

    Values are stored as strings and JSON-decoded on get, like RedisClient.
    Operation names added to ``failing`` raise RedisError.
    """

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int | None] = {}
        self.failing: set[str] = set()

    def _check(self, operation: str) -> None:
        if operation in self.failing:
            raise RedisError(f"Simulated {operation} failure")

    async def get(self, key: str) -> Any:
        self._check("get")
        raw = self.data.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            return raw

    async def set(self, key: str, value: Any, expire_seconds: int | None = None) -> None:
        self._check("set")
        self.data[key] = value if isinstance(value, str) else json.dumps(value)
        self.ttls[key] = expire_seconds

    async def delete(self, key: str) -> bool:
        self._check("delete")
        self.ttls.pop(key, None)
        return self.data.pop(key, None) is not None

    async def keys(self, pattern: str) -> list[str]:
        self._check("keys")
        return [key for key in self.data if fnmatch.fnmatchcase(key, pattern)]

    async def delete_pattern(self, pattern: str) -> int:
        self._check("delete_pattern")
        matched = [key for key in self.data if fnmatch.fnmatchcase(key, pattern)]
        for key in matched:
            del self.data[key]
            self.ttls.pop(key, None)
        return len(matched)


class FakeSearchIndex:
    """Dict-backed stand-in for QdrantSearchClient.

    Operation names added to ``failing`` raise QdrantError.
    """

    def __init__(self) -> None:
        self.collections: dict[str, dict[str, dict[str, Any]]] = {}
        self.keyword_fields: dict[str, list[str]] = {}
        self.failing: set[str] = set()

    def _check(self, operation: str) -> None:
        if operation in self.failing:
            raise QdrantError(f"Simulated {operation} failure")

    def documents(self, collection: str) -> dict[str, dict[str, Any]]:
        return self.collections.get(collection, {})

    @staticmethod
    def _matches(document: dict[str, Any], must: dict[str, Any] | None) -> bool:
        for name, value in (must or {}).items():
            if isinstance(value, (list, tuple, set)):
                if document.get(name) not in value:
                    return False
            elif document.get(name) != value:
                return False
        return True

    async def ensure_collection(self, collection: str, keyword_fields: list[str]) -> None:
        self._check("ensure_collection")
        self.collections.setdefault(collection, {})
        self.keyword_fields[collection] = list(keyword_fields)

    async def upsert_document(
        self, collection: str, document_id: str, document: dict[str, Any]
    ) -> None:
        self._check("upsert_document")
        self.collections.setdefault(collection, {})[document_id] = document

    async def delete_document(self, collection: str, document_id: str) -> None:
        self._check("delete_document")
        self.collections.get(collection, {}).pop(document_id, None)

    async def scroll(
        self,
        collection: str,
        must: dict[str, Any] | None = None,
        limit: int = 20,
        offset: str | None = None,
    ) -> tuple[list[dict[str, Any]], str | None]:
        self._check("scroll")
        ids = sorted(
            doc_id
            for doc_id, doc in self.documents(collection).items()
            if self._matches(doc, must)
        )
        if offset is not None:
            ids = [doc_id for doc_id in ids if doc_id >= offset]
        page, rest = ids[:limit], ids[limit:]
        documents = [self.documents(collection)[doc_id] for doc_id in page]
        return documents, rest[0] if rest else None

    async def count(self, collection: str, must: dict[str, Any] | None = None) -> int:
        self._check("count")
        return sum(1 for doc in self.documents(collection).values() if self._matches(doc, must))


@pytest.fixture
def cache_store() -> FakeCacheStore:
    """Provide an empty in-memory cache."""
    return FakeCacheStore()


@pytest.fixture
def search_index() -> FakeSearchIndex:
    """Provide an empty in-memory search index."""
    return FakeSearchIndex()


# =============================================================================
# Settings and Database Fixtures
# =============================================================================


@pytest.fixture
def settings() -> Settings:
    """Provide fresh settings for each test."""
    clear_settings_cache()
    return Settings()


@pytest.fixture
def sqlite_url(tmp_path) -> str:
    """Provide a URL for a throwaway SQLite database."""
    return f"sqlite+aiosqlite:///{tmp_path / 'content.db'}"


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest_asyncio.fixture
async def db_engine(sqlite_url: str) -> AsyncGenerator[AsyncEngine, None]:
    """Create a SQLite engine with the content schema and cascading deletes."""
    engine = create_engine(sqlite_url)
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def sessionmaker(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Provide a sessionmaker bound to the test database."""
    return create_sessionmaker(db_engine)


@pytest_asyncio.fixture
async def container(
    settings: Settings,
    sessionmaker: async_sessionmaker[AsyncSession],
    cache_store: FakeCacheStore,
    search_index: FakeSearchIndex,
) -> AsyncGenerator[ContentContainer, None]:
    """Provide a started container over the test database and in-memory backends."""
    container = ContentContainer(
        settings,
        sessionmaker=sessionmaker,
        cache_store=cache_store,
        search_index=search_index,
    )
    await container.start()
    yield container
    await container.close()


# =============================================================================
# Helper Fixtures
# =============================================================================


@pytest.fixture
def sample_course_data() -> dict[str, Any]:
    """Provide sample course fields."""
    return {
        "type": "BOOK",
        "title": "IELTS Foundations",
        "overview": "Twelve lessons covering every skill",
        "skills": ["listening", "reading"],
        "band": "5.5",
    }
