# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Writing question tables."""

import uuid

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from fluency.infrastructure.database.models.base import (
    Base,
    IdMixin,
    QuestionRootMixin,
    TimestampMixin,
    parent_fk,
)


class WritingQuestion(QuestionRootMixin, Base):
    __tablename__ = "writing_questions"


class WritingSentenceCompletion(IdMixin, TimestampMixin, Base):
    __tablename__ = "writing_sentence_completions"

    writing_question_id: Mapped[uuid.UUID] = parent_fk("writing_questions")
    example_sentence: Mapped[str] = mapped_column(sa.Text, nullable=False)
    given_part_sentence: Mapped[str] = mapped_column(sa.Text, nullable=False)
    position: Mapped[str] = mapped_column(sa.String(10), nullable=False)
    required_words: Mapped[list[str]] = mapped_column(sa.JSON, default=list, nullable=False)
    explain: Mapped[str] = mapped_column(sa.Text, default="", nullable=False)
    min_words: Mapped[int] = mapped_column(sa.Integer, nullable=False)
    max_words: Mapped[int] = mapped_column(sa.Integer, nullable=False)


class WritingEssay(IdMixin, TimestampMixin, Base):
    __tablename__ = "writing_essays"

    writing_question_id: Mapped[uuid.UUID] = parent_fk("writing_questions")
    essay_type: Mapped[str] = mapped_column(sa.String(50), nullable=False)
    required_points: Mapped[list[str]] = mapped_column(sa.JSON, default=list, nullable=False)
    min_words: Mapped[int] = mapped_column(sa.Integer, nullable=False)
    max_words: Mapped[int] = mapped_column(sa.Integer, nullable=False)
    sample_essay: Mapped[str] = mapped_column(sa.Text, default="", nullable=False)
    explain: Mapped[str] = mapped_column(sa.Text, default="", nullable=False)
