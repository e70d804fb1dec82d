# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Declarative base and shared column mixins.

Column types are portable (sa.Uuid, sa.JSON) so the same models run on
PostgreSQL and on the SQLite database used by the test-suite.
"""

import uuid
from datetime import datetime

import sqlalchemy as sa
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column

from fluency.utils.datetime import utc_now


class Base(DeclarativeBase):
    """Declarative base for every content table."""


class IdMixin:
    """UUID primary key generated client-side."""

    id: Mapped[uuid.UUID] = mapped_column(sa.Uuid, primary_key=True, default=uuid.uuid4)


class TimestampMixin:
    """created_at / updated_at columns.

    Children are listed in created_at order, so the timestamp is taken in
    Python with microsecond precision rather than from the server clock.
    """

    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=utc_now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )


class VersionedRootMixin(IdMixin, TimestampMixin):
    """Root entity with a type discriminator and an optimistic version counter.

    The ORM sets version to 1 on insert. Updates set the next version
    explicitly, and the ORM checks the previous one in the WHERE clause,
    failing with StaleDataError when the row was changed underneath.
    """

    type: Mapped[str] = mapped_column(sa.String(50), nullable=False, index=True)
    version: Mapped[int] = mapped_column(sa.Integer, nullable=False)
    image_urls: Mapped[list[str]] = mapped_column(sa.JSON, default=list, nullable=False)

    @declared_attr.directive
    def __mapper_args__(cls) -> dict:
        return {"version_id_col": cls.__table__.c.version}


class QuestionRootMixin(VersionedRootMixin):
    """Columns shared by every question root table."""

    topic: Mapped[list[str]] = mapped_column(sa.JSON, default=list, nullable=False)
    instruction: Mapped[str] = mapped_column(sa.Text, default="", nullable=False)
    max_time: Mapped[int] = mapped_column(sa.Integer, default=0, nullable=False)


class SubQuestionMixin(IdMixin, TimestampMixin):
    question: Mapped[str] = mapped_column(sa.Text, nullable=False)


class ExplainedSubQuestionMixin(SubQuestionMixin):
    explain: Mapped[str] = mapped_column(sa.Text, default="", nullable=False)


class AnswerMixin(IdMixin, TimestampMixin):
    answer: Mapped[str] = mapped_column(sa.Text, nullable=False)
    explain: Mapped[str] = mapped_column(sa.Text, default="", nullable=False)


class OptionMixin(IdMixin, TimestampMixin):
    options: Mapped[str] = mapped_column(sa.Text, nullable=False)
    is_correct: Mapped[bool] = mapped_column(sa.Boolean, default=False, nullable=False)


class QuestionAnswerRowMixin(IdMixin, TimestampMixin):
    """Flat question/answer/explain row (map labelling, matching, true/false)."""

    question: Mapped[str] = mapped_column(sa.Text, nullable=False)
    answer: Mapped[str] = mapped_column(sa.Text, nullable=False)
    explain: Mapped[str] = mapped_column(sa.Text, default="", nullable=False)


def parent_fk(table: str) -> Mapped[uuid.UUID]:
    """Indexed foreign key to ``{table}.id`` cascading on delete."""
    return mapped_column(
        sa.Uuid,
        sa.ForeignKey(f"{table}.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
