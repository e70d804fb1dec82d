# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Generic content services.

RootContentService and ChildContentService implement the write and read
paths of every family from its FamilyDefinition:

- Every write commits its own transaction first, then hands the owning
  root to the updator, outside the transaction.
- Child writes tolerate cache/search failures (logged and dropped).
- Root creates, updates and deletes raise PublishError when publishing
  fails after the commit.
- Reads are served from the cache when a live entry exists and rebuilt
  from the database otherwise.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from fluency.core.errors import ConcurrentUpdateError, ContentValidationError
from fluency.core.sync.detail import CompletionStatus, ContentDetail
from fluency.core.sync.updator import ContentUpdator, SyncResult
from fluency.domains.content.definition import (
    ChildKind,
    FamilyDefinition,
    validate_fields,
    validate_input,
)
from fluency.infrastructure.database.connection import session_scope

logger = logging.getLogger(__name__)


@dataclass
class SearchPage:
    """One page of search documents.

    Attributes:
        documents: Matching documents.
        total: Number of documents matching the filters.
        next_offset: Token for the next page, None on the last page.
    """

    documents: list[dict[str, Any]]
    total: int
    next_offset: str | None = None


@dataclass
class ResyncReport:
    """Outcome of republishing every root of a family."""

    published: int = 0
    complete: int = 0
    failed: list[str] = field(default_factory=list)
    degraded: list[str] = field(default_factory=list)


class RootContentService:
    """Root entity operations for one content family.

    Attributes:
        definition: The family definition.
        updator: Publishes rebuilt details to cache and search.
    """

    def __init__(
        self,
        definition: FamilyDefinition,
        sessionmaker: async_sessionmaker[AsyncSession],
        updator: ContentUpdator,
        search_page_size: int = 20,
    ) -> None:
        self.definition = definition
        self.updator = updator
        self.search_page_size = search_page_size
        self._sessionmaker = sessionmaker

    @property
    def family(self) -> str:
        return self.definition.name

    @property
    def repo(self):
        return self.definition.root_repo

    # ========== Writes ==========

    async def create(self, values: dict[str, Any]) -> ContentDetail:
        """Create a root at version 1 and publish it.

        Args:
            values: Root fields; ``type`` is required.

        Returns:
            The published detail.

        Raises:
            ContentValidationError: If values are invalid.
            PublishError: If the root was stored but publishing failed.
        """
        data = validate_input(self.definition.root_schema, values)
        self._check_type(data["type"])

        async with session_scope(self._sessionmaker) as session:
            root = await self.repo.create(session, data)

        logger.info(
            "Created %s %s (%s)",
            self.family,
            root.id,
            root.type,
            extra={"family": self.family, "root_id": str(root.id)},
        )
        result = await self.updator.update_cache_and_search(root)
        result.raise_for_warnings()
        return result.detail

    async def update_field(self, root_id: UUID, field_name: str, value: Any) -> ContentDetail:
        """Update one root field. See update()."""
        return await self.update(root_id, {field_name: value})

    async def update(self, root_id: UUID, values: dict[str, Any]) -> ContentDetail:
        """Update root fields, bumping the version by exactly one.

        Raises:
            ContentValidationError: If a field is unknown or a value invalid.
            NotFoundError: If the root does not exist.
            ConcurrentUpdateError: If the root changed during the update.
            PublishError: If the update committed but publishing failed.
        """
        data = validate_fields(self.definition.root_schema, values)
        if "type" in data:
            self._check_type(data["type"])

        async with session_scope(self._sessionmaker) as session:
            root = await self.repo.get(session, root_id)
            for name, value in data.items():
                setattr(root, name, value)
            # Bumped even when no value changed
            root.version = root.version + 1
            try:
                await session.flush()
            except StaleDataError as e:
                raise ConcurrentUpdateError(self.repo.entity_name, root_id) from e

        logger.info(
            "Updated %s %s to version %d",
            self.family,
            root_id,
            root.version,
            extra={"family": self.family, "root_id": str(root_id), "fields": sorted(data)},
        )
        result = await self.updator.update_cache_and_search(root)
        result.raise_for_warnings()
        return result.detail

    async def delete(self, root_id: UUID) -> None:
        """Delete a root with its whole hierarchy and unpublish it.

        Raises:
            NotFoundError: If the root does not exist.
            PublishError: If the delete committed but unpublishing failed.
        """
        async with session_scope(self._sessionmaker) as session:
            root = await self.repo.get(session, root_id)
            await self.repo.delete(session, root)

        logger.info(
            "Deleted %s %s",
            self.family,
            root_id,
            extra={"family": self.family, "root_id": str(root_id)},
        )
        result = await self.updator.remove(root_id)
        result.raise_for_warnings()

    # ========== Reads ==========

    async def get(self, root_id: UUID):
        """Get the root row.

        Raises:
            NotFoundError: If the root does not exist.
        """
        async with self._sessionmaker() as session:
            return await self.repo.get(session, root_id)

    async def get_detail(self, root_id: UUID) -> ContentDetail:
        """Get the current detail, from the cache when possible.

        On a miss the detail is rebuilt from the database and cached.

        Raises:
            NotFoundError: If the root does not exist.
        """
        try:
            cached = await self.updator.cache.get_cached(root_id)
        except Exception as e:
            logger.warning(
                "Cache read failed for %s %s: %s",
                self.family,
                root_id,
                e,
                extra={"family": self.family, "operation": "cache_get", "root_id": str(root_id)},
            )
            cached = None

        if cached is not None:
            return cached.detail

        root = await self.get(root_id)
        result = await self.updator.refresh_cache(root)
        return result.detail

    async def get_status(self, root_id: UUID) -> CompletionStatus:
        """Completion status of a root, rebuilt from the database."""
        root = await self.get(root_id)
        detail = await self.updator.builder.build(root)
        return CompletionStatus.of(self.updator.classifier.is_complete(detail))

    async def list(
        self,
        page: int = 1,
        page_size: int = 20,
        content_type: str | None = None,
    ) -> tuple[list[Any], int]:
        """List roots newest first.

        Returns:
            Tuple of (roots, total count).
        """
        if page < 1 or page_size < 1:
            raise ContentValidationError("page and page_size must be positive")
        async with self._sessionmaker() as session:
            return await self.repo.list_page(
                session,
                offset=(page - 1) * page_size,
                limit=page_size,
                content_type=content_type,
            )

    async def get_new_updates(self, versions: dict[UUID, int]) -> list[ContentDetail]:
        """Details of roots that changed since the versions a client holds.

        A root is returned when no cache entry exists for the client's
        version and the stored version is greater. Unknown ids are skipped.

        Args:
            versions: Root id to the version the client has.
        """
        updates: list[ContentDetail] = []
        for root_id, version in versions.items():
            try:
                if await self.updator.cache.has_version(root_id, version):
                    continue
            except Exception as e:
                logger.warning(
                    "Cache lookup failed for %s %s: %s",
                    self.family,
                    root_id,
                    e,
                    extra={"family": self.family, "operation": "cache_keys", "root_id": str(root_id)},
                )

            async with self._sessionmaker() as session:
                root = await self.repo.get_newer(session, root_id, version)
            if root is not None:
                result = await self.updator.refresh_cache(root)
                updates.append(result.detail)

        logger.debug(
            "Version check for %d %s roots returned %d updates",
            len(versions),
            self.family,
            len(updates),
        )
        return updates

    async def search(
        self,
        filters: dict[str, Any] | None = None,
        limit: int | None = None,
        offset: str | None = None,
    ) -> SearchPage:
        """Search the family's documents by exact-match filters.

        Raises:
            ContentValidationError: If a filter field is not searchable.
        """
        filters = dict(filters or {})
        unknown = set(filters) - self.definition.search_filters
        if unknown:
            raise ContentValidationError(
                f"Cannot filter {self.family} by: {', '.join(sorted(unknown))}",
                field=sorted(unknown)[0],
            )
        if "status" in filters:
            try:
                filters["status"] = CompletionStatus(filters["status"]).value
            except ValueError:
                raise ContentValidationError(
                    f"Invalid status: {filters['status']}", field="status"
                ) from None
        if "id" in filters:
            filters["id"] = str(filters["id"])

        documents, next_offset, total = await self.updator.search.search(
            filters, limit=limit or self.search_page_size, offset=offset
        )
        return SearchPage(documents=documents, total=total, next_offset=next_offset)

    async def resync_all(self) -> ResyncReport:
        """Rebuild and republish every root of the family."""
        report = ResyncReport()
        async with self._sessionmaker() as session:
            root_ids = await self.repo.list_ids(session)

        for root_id in root_ids:
            try:
                root = await self.get(root_id)
                result = await self.updator.update_cache_and_search(root)
            except Exception as e:
                logger.error(
                    "Resync of %s %s failed: %s",
                    self.family,
                    root_id,
                    e,
                    extra={"family": self.family, "root_id": str(root_id)},
                )
                report.failed.append(str(root_id))
                continue

            report.published += 1
            if result.is_complete:
                report.complete += 1
            if result.warnings:
                report.degraded.append(str(root_id))

        logger.info(
            "Resynced %d %s roots (%d complete, %d failed)",
            report.published,
            self.family,
            report.complete,
            len(report.failed),
        )
        return report

    def _check_type(self, content_type: str) -> None:
        if not self.definition.family.registry.has(content_type):
            raise ContentValidationError(
                f"Invalid {self.family} type: {content_type}", field="type"
            )


class ChildContentService:
    """Child entity operations for one content family.

    Every write republishes the owning root. Publish failures are logged
    by the updator and do not fail the write.
    """

    def __init__(self, roots: RootContentService) -> None:
        self.roots = roots
        self.definition = roots.definition
        self._sessionmaker = roots._sessionmaker

    @property
    def family(self) -> str:
        return self.definition.name

    async def create(self, kind_name: str, parent_id: UUID, values: dict[str, Any]) -> Any:
        """Create a child row under a parent.

        Args:
            kind_name: Child kind ("choice_one_option", "lesson", ...).
            parent_id: Id of the root or parent child row.
            values: Child fields.

        Raises:
            ContentValidationError: If the kind or values are invalid.
            NotFoundError: If the parent does not exist.
        """
        kind = self.definition.kind(kind_name)
        data = validate_input(kind.input_schema, values)
        data[kind.repo.parent_column] = parent_id

        async with session_scope(self._sessionmaker) as session:
            await self._get_parent(session, kind, parent_id)
            entity = await kind.repo.create(session, data)
            await self._enforce_single_correct(session, kind, entity)
            root = await self._resolve_root(session, kind, entity)

        await self._publish(root, kind, "create")
        return entity

    async def update(self, kind_name: str, entity_id: UUID, values: dict[str, Any]) -> Any:
        """Update fields of a child row.

        Raises:
            ContentValidationError: If the kind, a field or a value is invalid.
            NotFoundError: If the row does not exist.
        """
        kind = self.definition.kind(kind_name)
        data = validate_fields(kind.input_schema, values)

        async with session_scope(self._sessionmaker) as session:
            entity = await kind.repo.get(session, entity_id)
            # Cross-field rules see the row as it will be stored
            current = {
                name: getattr(entity, name)
                for name in kind.input_schema.model_fields
                if hasattr(entity, name)
            }
            validate_input(kind.input_schema, {**current, **data})
            entity = await kind.repo.update(session, entity, data)
            await self._enforce_single_correct(session, kind, entity)
            root = await self._resolve_root(session, kind, entity)

        await self._publish(root, kind, "update")
        return entity

    async def delete(self, kind_name: str, entity_id: UUID) -> None:
        """Delete a child row and everything below it.

        Raises:
            NotFoundError: If the row does not exist.
        """
        kind = self.definition.kind(kind_name)

        async with session_scope(self._sessionmaker) as session:
            entity = await kind.repo.get(session, entity_id)
            root = await self._resolve_root(session, kind, entity)
            await kind.repo.delete(session, entity)

        await self._publish(root, kind, "delete")

    async def get(self, kind_name: str, entity_id: UUID) -> Any:
        """Get a child row.

        Raises:
            NotFoundError: If the row does not exist.
        """
        kind = self.definition.kind(kind_name)
        async with self._sessionmaker() as session:
            return await kind.repo.get(session, entity_id)

    async def list(self, kind_name: str, parent_id: UUID) -> list[Any]:
        """List child rows of a parent; empty when there are none."""
        kind = self.definition.kind(kind_name)
        async with self._sessionmaker() as session:
            return await kind.repo.list_by_parent(session, parent_id)

    async def _get_parent(self, session: AsyncSession, kind: ChildKind, parent_id: UUID) -> Any:
        if kind.parent is None:
            return await self.definition.root_repo.get(session, parent_id)
        return await kind.parent.repo.get(session, parent_id)

    async def _resolve_root(self, session: AsyncSession, kind: ChildKind, entity: Any) -> Any:
        parent_id = kind.repo.parent_id_of(entity)
        while kind.parent is not None:
            parent = await kind.parent.repo.get(session, parent_id)
            kind = kind.parent
            parent_id = kind.repo.parent_id_of(parent)
        return await self.definition.root_repo.get(session, parent_id)

    async def _enforce_single_correct(
        self, session: AsyncSession, kind: ChildKind, entity: Any
    ) -> None:
        if kind.single_correct and entity.is_correct:
            await kind.repo.clear_flag(
                session,
                kind.repo.parent_id_of(entity),
                "is_correct",
                keep_id=entity.id,
            )

    async def _publish(self, root: Any, kind: ChildKind, action: str) -> SyncResult:
        result = await self.roots.updator.update_cache_and_search(root)
        logger.debug(
            "%s %s %s republished %s as %s",
            self.family,
            kind.name,
            action,
            root.id,
            result.status.value,
            extra={"family": self.family, "root_id": str(root.id), "warnings": len(result.warnings)},
        )
        return result
