# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Generic repositories over the content tables.

Every child table is reached through its parent foreign key, so a single
ChildRepository parameterised by model and parent column covers them all.
RootRepository adds the listing and version queries needed by root
services.

Repositories never open or commit transactions; the caller passes the
session it owns.
"""

import logging
import uuid
from typing import Any, Generic, TypeVar

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fluency.core.errors import NotFoundError
from fluency.infrastructure.database.models.base import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class ChildRepository(Generic[ModelT]):
    """CRUD access to one child table keyed by its parent id.

    Attributes:
        model: ORM model class.
        parent_column: Name of the foreign-key column to the parent.
        order_by: Column children are listed by (ascending).
    """

    def __init__(
        self,
        model: type[ModelT],
        parent_column: str,
        order_by: str = "created_at",
    ) -> None:
        self.model = model
        self.parent_column = parent_column
        self.order_by = order_by

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    def parent_id_of(self, entity: ModelT) -> uuid.UUID:
        return getattr(entity, self.parent_column)

    async def list_by_parent(
        self, session: AsyncSession, parent_id: uuid.UUID
    ) -> list[ModelT]:
        """List children of a parent; an empty list when there are none."""
        model = self.model
        stmt = (
            select(model)
            .where(getattr(model, self.parent_column) == parent_id)
            .order_by(getattr(model, self.order_by), model.id)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def get(self, session: AsyncSession, entity_id: uuid.UUID) -> ModelT:
        """Get an entity by id.

        Raises:
            NotFoundError: If no row has this id.
        """
        entity = await session.get(self.model, entity_id)
        if entity is None:
            raise NotFoundError(self.entity_name, entity_id)
        return entity

    async def create(self, session: AsyncSession, values: dict[str, Any]) -> ModelT:
        entity = self.model(**values)
        session.add(entity)
        await session.flush()
        return entity

    async def update(
        self, session: AsyncSession, entity: ModelT, values: dict[str, Any]
    ) -> ModelT:
        for name, value in values.items():
            setattr(entity, name, value)
        await session.flush()
        return entity

    async def delete(self, session: AsyncSession, entity: ModelT) -> None:
        await session.delete(entity)
        await session.flush()

    async def clear_flag(
        self,
        session: AsyncSession,
        parent_id: uuid.UUID,
        column: str,
        keep_id: uuid.UUID | None = None,
    ) -> int:
        """Set a boolean column to False on every sibling except keep_id.

        Returns:
            Number of rows changed.
        """
        model = self.model
        stmt = (
            update(model)
            .where(getattr(model, self.parent_column) == parent_id)
            .where(getattr(model, column).is_(True))
            .values({column: False})
            .execution_options(synchronize_session="fetch")
        )
        if keep_id is not None:
            stmt = stmt.where(model.id != keep_id)
        result = await session.execute(stmt)
        if result.rowcount:
            logger.debug(
                "Cleared %s on %d %s rows of parent %s",
                column,
                result.rowcount,
                self.entity_name,
                parent_id,
            )
        return result.rowcount or 0


class RootRepository(Generic[ModelT]):
    """Access to a root table (questions, courses)."""

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    async def get(self, session: AsyncSession, root_id: uuid.UUID) -> ModelT:
        """Get a root by id.

        Raises:
            NotFoundError: If no root has this id.
        """
        root = await session.get(self.model, root_id)
        if root is None:
            raise NotFoundError(self.entity_name, root_id)
        return root

    async def create(self, session: AsyncSession, values: dict[str, Any]) -> ModelT:
        root = self.model(**values)
        session.add(root)
        await session.flush()
        return root

    async def delete(self, session: AsyncSession, root: ModelT) -> None:
        await session.delete(root)
        await session.flush()

    async def list_page(
        self,
        session: AsyncSession,
        offset: int = 0,
        limit: int = 20,
        content_type: str | None = None,
    ) -> tuple[list[ModelT], int]:
        """List roots newest first.

        Returns:
            Tuple of (roots, total count).
        """
        model = self.model
        stmt = select(model)
        count_stmt = select(func.count()).select_from(model)
        if content_type is not None:
            stmt = stmt.where(model.type == content_type)
            count_stmt = count_stmt.where(model.type == content_type)

        total = (await session.execute(count_stmt)).scalar_one()
        result = await session.execute(
            stmt.order_by(model.created_at.desc(), model.id).offset(offset).limit(limit)
        )
        return list(result.scalars().all()), total

    async def list_ids(self, session: AsyncSession) -> list[uuid.UUID]:
        """Return every root id, oldest first."""
        model = self.model
        result = await session.execute(select(model.id).order_by(model.created_at, model.id))
        return list(result.scalars().all())

    async def get_newer(
        self, session: AsyncSession, root_id: uuid.UUID, version: int
    ) -> ModelT | None:
        """Return the root when its stored version is greater than version."""
        model = self.model
        result = await session.execute(
            select(model).where(model.id == root_id, model.version > version)
        )
        return result.scalar_one_or_none()
