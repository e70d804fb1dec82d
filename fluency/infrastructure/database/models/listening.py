# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Listening question tables."""

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


class ListeningQuestion(QuestionRootMixin, Base):
    __tablename__ = "listening_questions"

    audio_urls: Mapped[list[str]] = mapped_column(sa.JSON, default=list, nullable=False)
    transcript: Mapped[str] = mapped_column(sa.Text, default="", nullable=False)


class ListeningFillInTheBlankQuestion(SubQuestionMixin, Base):
    __tablename__ = "listening_fill_in_the_blank_questions"

    listening_question_id: Mapped[uuid.UUID] = parent_fk("listening_questions")


class ListeningFillInTheBlankAnswer(AnswerMixin, Base):
    __tablename__ = "listening_fill_in_the_blank_answers"

    question_id: Mapped[uuid.UUID] = parent_fk("listening_fill_in_the_blank_questions")


class ListeningChoiceOneQuestion(ExplainedSubQuestionMixin, Base):
    __tablename__ = "listening_choice_one_questions"

    listening_question_id: Mapped[uuid.UUID] = parent_fk("listening_questions")


class ListeningChoiceOneOption(OptionMixin, Base):
    __tablename__ = "listening_choice_one_options"

    question_id: Mapped[uuid.UUID] = parent_fk("listening_choice_one_questions")


class ListeningChoiceMultiQuestion(ExplainedSubQuestionMixin, Base):
    __tablename__ = "listening_choice_multi_questions"

    listening_question_id: Mapped[uuid.UUID] = parent_fk("listening_questions")


class ListeningChoiceMultiOption(OptionMixin, Base):
    __tablename__ = "listening_choice_multi_options"

    question_id: Mapped[uuid.UUID] = parent_fk("listening_choice_multi_questions")


class ListeningMapLabelling(QuestionAnswerRowMixin, Base):
    __tablename__ = "listening_map_labellings"

    listening_question_id: Mapped[uuid.UUID] = parent_fk("listening_questions")


class ListeningMatching(QuestionAnswerRowMixin, Base):
    __tablename__ = "listening_matchings"

    listening_question_id: Mapped[uuid.UUID] = parent_fk("listening_questions")
