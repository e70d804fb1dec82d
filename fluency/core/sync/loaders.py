# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Branch loaders used by the detail builder.

A loader fetches one slice of a root's children and returns it as detail
fields. Loaders are composed per content type in the type registry:

    SubQuestionLoader   sub-question (first row only) plus its answers/options
    RowsLoader          flat rows referencing the root, always a list
    FirstRowLoader      single row referencing the root, or None
    LessonsLoader       course lessons, each with its lesson questions

Example:
    loader = RowsLoader("map_labelling", map_labelling_repo, QuestionAnswerRow)
    fields = await loader.load(session, question_id)
    # {"map_labelling": [QuestionAnswerRow(...), ...]}
"""

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from fluency.core.sync.detail import DetailModel
from fluency.infrastructure.database.repositories import ChildRepository

logger = logging.getLogger(__name__)


class BaseBranchLoader(ABC):
    """Abstract base class for branch loaders.

    Attributes:
        fields: Detail attribute names this loader fills.
    """

    @property
    @abstractmethod
    def fields(self) -> tuple[str, ...]:
        """Detail attribute names produced by load()."""

    @abstractmethod
    async def load(self, session: AsyncSession, root_id: uuid.UUID) -> dict[str, Any]:
        """Load the branch for a root.

        Args:
            session: Session to read through.
            root_id: Id of the root entity.

        Returns:
            Mapping of every name in ``fields`` to its loaded value.
        """


class SubQuestionLoader(BaseBranchLoader):
    """Sub-question with its answers or options.

    Several sub-questions may exist for one root; only the oldest one is
    surfaced. With no sub-question both fields are None.
    """

    def __init__(
        self,
        question_field: str,
        items_field: str,
        question_repo: ChildRepository,
        item_repo: ChildRepository,
        question_schema: type[DetailModel],
        item_schema: type[DetailModel],
    ) -> None:
        self.question_field = question_field
        self.items_field = items_field
        self.question_repo = question_repo
        self.item_repo = item_repo
        self.question_schema = question_schema
        self.item_schema = item_schema

    @property
    def fields(self) -> tuple[str, ...]:
        return (self.question_field, self.items_field)

    async def load(self, session: AsyncSession, root_id: uuid.UUID) -> dict[str, Any]:
        questions = await self.question_repo.list_by_parent(session, root_id)
        if not questions:
            return {self.question_field: None, self.items_field: None}

        if len(questions) > 1:
            logger.debug(
                "Root %s has %d %s rows, using the first",
                root_id,
                len(questions),
                self.question_repo.entity_name,
            )

        question = questions[0]
        items = await self.item_repo.list_by_parent(session, question.id)
        return {
            self.question_field: self.question_schema.model_validate(question),
            self.items_field: [self.item_schema.model_validate(item) for item in items],
        }


class RowsLoader(BaseBranchLoader):
    """Flat rows keyed by root id. Zero rows load as an empty list."""

    def __init__(
        self,
        field: str,
        repo: ChildRepository,
        schema: type[DetailModel],
    ) -> None:
        self.field = field
        self.repo = repo
        self.schema = schema

    @property
    def fields(self) -> tuple[str, ...]:
        return (self.field,)

    async def load(self, session: AsyncSession, root_id: uuid.UUID) -> dict[str, Any]:
        rows = await self.repo.list_by_parent(session, root_id)
        return {self.field: [self.schema.model_validate(row) for row in rows]}


class FirstRowLoader(BaseBranchLoader):
    """Single row keyed by root id, None when absent."""

    def __init__(
        self,
        field: str,
        repo: ChildRepository,
        schema: type[DetailModel],
    ) -> None:
        self.field = field
        self.repo = repo
        self.schema = schema

    @property
    def fields(self) -> tuple[str, ...]:
        return (self.field,)

    async def load(self, session: AsyncSession, root_id: uuid.UUID) -> dict[str, Any]:
        rows = await self.repo.list_by_parent(session, root_id)
        return {self.field: self.schema.model_validate(rows[0]) if rows else None}


class LessonsLoader(BaseBranchLoader):
    """Course lessons in sequence order, each with its questions."""

    def __init__(
        self,
        lesson_repo: ChildRepository,
        question_repo: ChildRepository,
        lesson_schema: type[DetailModel],
        question_schema: type[DetailModel],
        field: str = "lessons",
    ) -> None:
        self.lesson_repo = lesson_repo
        self.question_repo = question_repo
        self.lesson_schema = lesson_schema
        self.question_schema = question_schema
        self.field = field

    @property
    def fields(self) -> tuple[str, ...]:
        return (self.field,)

    async def load(self, session: AsyncSession, root_id: uuid.UUID) -> dict[str, Any]:
        lessons = []
        for lesson in await self.lesson_repo.list_by_parent(session, root_id):
            questions = await self.question_repo.list_by_parent(session, lesson.id)
            detail = self.lesson_schema.model_validate(lesson)
            lessons.append(
                detail.model_copy(
                    update={
                        "questions": [
                            self.question_schema.model_validate(q) for q in questions
                        ]
                    }
                )
            )
        return {self.field: lessons}
