# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Grammar question tables."""

import uuid

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from fluency.infrastructure.database.models.base import (
    AnswerMixin,
    Base,
    ExplainedSubQuestionMixin,
    IdMixin,
    OptionMixin,
    QuestionRootMixin,
    SubQuestionMixin,
    TimestampMixin,
    parent_fk,
)


class GrammarQuestion(QuestionRootMixin, Base):
    __tablename__ = "grammar_questions"


class GrammarFillInTheBlankQuestion(SubQuestionMixin, Base):
    __tablename__ = "grammar_fill_in_the_blank_questions"

    grammar_question_id: Mapped[uuid.UUID] = parent_fk("grammar_questions")


class GrammarFillInTheBlankAnswer(AnswerMixin, Base):
    __tablename__ = "grammar_fill_in_the_blank_answers"

    question_id: Mapped[uuid.UUID] = parent_fk("grammar_fill_in_the_blank_questions")


class GrammarChoiceOneQuestion(ExplainedSubQuestionMixin, Base):
    __tablename__ = "grammar_choice_one_questions"

    grammar_question_id: Mapped[uuid.UUID] = parent_fk("grammar_questions")


class GrammarChoiceOneOption(OptionMixin, Base):
    __tablename__ = "grammar_choice_one_options"

    question_id: Mapped[uuid.UUID] = parent_fk("grammar_choice_one_questions")


class GrammarErrorIdentification(IdMixin, TimestampMixin, Base):
    __tablename__ = "grammar_error_identifications"

    grammar_question_id: Mapped[uuid.UUID] = parent_fk("grammar_questions")
    error_sentence: Mapped[str] = mapped_column(sa.Text, nullable=False)
    error_word: Mapped[str] = mapped_column(sa.String(255), nullable=False)
    correct_word: Mapped[str] = mapped_column(sa.String(255), nullable=False)
    explain: Mapped[str] = mapped_column(sa.Text, default="", nullable=False)


class GrammarSentenceTransformation(IdMixin, TimestampMixin, Base):
    __tablename__ = "grammar_sentence_transformations"

    grammar_question_id: Mapped[uuid.UUID] = parent_fk("grammar_questions")
    original_sentence: Mapped[str] = mapped_column(sa.Text, nullable=False)
    beginning_word: Mapped[str] = mapped_column(sa.String(255), default="", nullable=False)
    example_correct_sentence: Mapped[str] = mapped_column(sa.Text, nullable=False)
    explain: Mapped[str] = mapped_column(sa.Text, default="", nullable=False)
