# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Cache and search updator.

Single entry point services call after every committed write. The whole
detail of the root is rebuilt and republished:

    build detail -> classify -> write cache -> upsert search document

Build failures propagate. Cache and search failures are logged and returned
as warnings on the SyncResult; callers decide whether a warning is fatal.

Example:
    result = await updator.update_cache_and_search(question)
    if result.warnings:
        ...
    result.raise_for_warnings()   # root-level writes
"""

import asyncio
import logging
import weakref
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator
from uuid import UUID

from fluency.core.sync.builder import DetailBuilder
from fluency.core.sync.cache_writer import DetailCache
from fluency.core.sync.completion import CompletionClassifier
from fluency.core.sync.detail import CompletionStatus, ContentDetail
from fluency.core.sync.errors import PublishError
from fluency.core.sync.search_upserter import SearchUpserter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncWarning:
    """A publish step that failed after the database write committed.

    Attributes:
        operation: "cache_set", "search_upsert", "cache_remove" or "search_delete".
        root_id: Root the step was publishing.
        error: The exception raised by the step.
    """

    operation: str
    root_id: str
    error: Exception

    def __str__(self) -> str:
        return f"{self.operation} failed for {self.root_id}: {self.error}"


@dataclass
class SyncResult:
    """Outcome of a rebuild-and-publish run.

    Attributes:
        root_id: Root that was published.
        detail: The rebuilt detail, None for removals.
        is_complete: Completion classification of the detail.
        warnings: Publish steps that failed.
    """

    root_id: str
    detail: ContentDetail | None = None
    is_complete: bool = False
    warnings: list[SyncWarning] = field(default_factory=list)

    @property
    def status(self) -> CompletionStatus:
        return CompletionStatus.of(self.is_complete)

    @property
    def ok(self) -> bool:
        return not self.warnings

    def raise_for_warnings(self) -> "SyncResult":
        """Raise PublishError when any publish step failed.

        Raises:
            PublishError: If warnings were collected.
        """
        if self.warnings:
            raise PublishError(self.root_id, list(self.warnings))
        return self


class ContentUpdator:
    """Rebuilds and republishes the detail of one content family's roots.

    Args:
        builder: Detail builder of the family.
        classifier: Completion classifier of the family.
        cache: Detail cache of the family.
        search: Search upserter of the family.
        serialize_per_root: Run at most one rebuild-and-publish per root at a
            time within this process.
    """

    def __init__(
        self,
        builder: DetailBuilder,
        classifier: CompletionClassifier,
        cache: DetailCache,
        search: SearchUpserter,
        serialize_per_root: bool = True,
    ) -> None:
        self.builder = builder
        self.classifier = classifier
        self.cache = cache
        self.search = search
        self.serialize_per_root = serialize_per_root
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    @property
    def family(self) -> str:
        return self.builder.family.name

    @asynccontextmanager
    async def _root_guard(self, root_id: str) -> AsyncIterator[None]:
        if not self.serialize_per_root:
            yield
            return

        lock = self._locks.get(root_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[root_id] = lock
        async with lock:
            yield

    async def update_cache_and_search(self, root: Any) -> SyncResult:
        """Rebuild the detail of a root and publish it to cache and search.

        Args:
            root: The root entity whose hierarchy changed.

        Returns:
            SyncResult with the detail, its completion and any publish warnings.

        Raises:
            UnknownContentTypeError: If the root's type is not registered.
            DetailBuildError: If reading the root's children fails.
        """
        root_id = str(root.id)
        async with self._root_guard(root_id):
            detail = await self.builder.build(root)
            is_complete = self.classifier.is_complete(detail)
            result = SyncResult(root_id=root_id, detail=detail, is_complete=is_complete)

            await self._attempt(result, "cache_set", self.cache.set_cached(detail, result.status))
            await self._attempt(result, "search_upsert", self.search.upsert(detail, result.status))

        logger.info(
            "Published %s %s v%d as %s",
            self.family,
            root_id,
            detail.version,
            result.status.value,
            extra={
                "family": self.family,
                "root_id": root_id,
                "version": detail.version,
                "status": result.status.value,
                "warnings": len(result.warnings),
            },
        )
        return result

    async def refresh_cache(self, root: Any) -> SyncResult:
        """Rebuild a root's detail and write it to the cache only.

        Used by the read path after a cache miss; the search document is
        left as is.
        """
        root_id = str(root.id)
        async with self._root_guard(root_id):
            detail = await self.builder.build(root)
            result = SyncResult(
                root_id=root_id,
                detail=detail,
                is_complete=self.classifier.is_complete(detail),
            )
            await self._attempt(result, "cache_set", self.cache.set_cached(detail, result.status))
        return result

    async def remove(self, root_id: UUID | str) -> SyncResult:
        """Remove a deleted root from cache and search."""
        root_id = str(root_id)
        result = SyncResult(root_id=root_id)
        async with self._root_guard(root_id):
            await self._attempt(result, "cache_remove", self.cache.remove_entries(root_id))
            await self._attempt(result, "search_delete", self.search.delete(root_id))

        logger.info(
            "Removed %s %s from cache and search",
            self.family,
            root_id,
            extra={"family": self.family, "root_id": root_id, "warnings": len(result.warnings)},
        )
        return result

    async def _attempt(self, result: SyncResult, operation: str, step: Any) -> None:
        try:
            await step
        except Exception as e:
            logger.warning(
                "%s %s failed for %s: %s",
                self.family,
                operation,
                result.root_id,
                e,
                exc_info=True,
                extra={"family": self.family, "operation": operation, "root_id": result.root_id},
            )
            result.warnings.append(SyncWarning(operation, result.root_id, e))
