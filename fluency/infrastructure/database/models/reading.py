# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Reading question tables."""

import uuid

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from fluency.infrastructure.database.models.base import (
    AnswerMixin,
    Base,
    ExplainedSubQuestionMixin,
    OptionMixin,
    QuestionAnswerRowMixin,
    QuestionRootMixin,
    SubQuestionMixin,
    parent_fk,
)


class ReadingQuestion(QuestionRootMixin, Base):
    __tablename__ = "reading_questions"

    title: Mapped[str] = mapped_column(sa.String(255), default="", nullable=False)
    passages: Mapped[list[str]] = mapped_column(sa.JSON, default=list, nullable=False)


class ReadingFillInTheBlankQuestion(SubQuestionMixin, Base):
    __tablename__ = "reading_fill_in_the_blank_questions"

    reading_question_id: Mapped[uuid.UUID] = parent_fk("reading_questions")


class ReadingFillInTheBlankAnswer(AnswerMixin, Base):
    __tablename__ = "reading_fill_in_the_blank_answers"

    question_id: Mapped[uuid.UUID] = parent_fk("reading_fill_in_the_blank_questions")


class ReadingChoiceOneQuestion(ExplainedSubQuestionMixin, Base):
    __tablename__ = "reading_choice_one_questions"

    reading_question_id: Mapped[uuid.UUID] = parent_fk("reading_questions")


class ReadingChoiceOneOption(OptionMixin, Base):
    __tablename__ = "reading_choice_one_options"

    question_id: Mapped[uuid.UUID] = parent_fk("reading_choice_one_questions")


class ReadingChoiceMultiQuestion(ExplainedSubQuestionMixin, Base):
    __tablename__ = "reading_choice_multi_questions"

    reading_question_id: Mapped[uuid.UUID] = parent_fk("reading_questions")


class ReadingChoiceMultiOption(OptionMixin, Base):
    __tablename__ = "reading_choice_multi_options"

    question_id: Mapped[uuid.UUID] = parent_fk("reading_choice_multi_questions")


class ReadingTrueFalse(QuestionAnswerRowMixin, Base):
    """True/false statement; answer holds TRUE, FALSE or NOT GIVEN."""

    __tablename__ = "reading_true_falses"

    reading_question_id: Mapped[uuid.UUID] = parent_fk("reading_questions")


class ReadingMatching(QuestionAnswerRowMixin, Base):
    __tablename__ = "reading_matchings"

    reading_question_id: Mapped[uuid.UUID] = parent_fk("reading_questions")
