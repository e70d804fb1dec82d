# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Narrow interfaces the sync engine depends on.

RedisClient and QdrantSearchClient satisfy these structurally; tests pass
in-memory implementations.
"""

from typing import Any, Optional, Protocol


class CacheStore(Protocol):
    """Key-value store with TTLs and glob pattern matching on ``:``-delimited keys."""

    async def get(self, key: str) -> Any: ...

    async def set(self, key: str, value: Any, expire_seconds: Optional[int] = None) -> None: ...

    async def delete(self, key: str) -> bool: ...

    async def keys(self, pattern: str) -> list[str]: ...

    async def delete_pattern(self, pattern: str) -> int: ...


class SearchIndex(Protocol):
    """Document index with one collection per content family."""

    async def ensure_collection(self, collection: str, keyword_fields: list[str]) -> None: ...

    async def upsert_document(
        self, collection: str, document_id: str, document: dict[str, Any]
    ) -> None: ...

    async def delete_document(self, collection: str, document_id: str) -> None: ...

    async def scroll(
        self,
        collection: str,
        must: dict[str, Any] | None = None,
        limit: int = 20,
        offset: str | None = None,
    ) -> tuple[list[dict[str, Any]], str | None]: ...

    async def count(self, collection: str, must: dict[str, Any] | None = None) -> int: ...
