# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Speaking question tables."""

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


class SpeakingQuestion(QuestionRootMixin, Base):
    __tablename__ = "speaking_questions"


class SpeakingWordRepetition(IdMixin, TimestampMixin, Base):
    __tablename__ = "speaking_word_repetitions"

    speaking_question_id: Mapped[uuid.UUID] = parent_fk("speaking_questions")
    word: Mapped[str] = mapped_column(sa.Text, nullable=False)
    mean: Mapped[str] = mapped_column(sa.Text, default="", nullable=False)


class SpeakingPhraseRepetition(IdMixin, TimestampMixin, Base):
    __tablename__ = "speaking_phrase_repetitions"

    speaking_question_id: Mapped[uuid.UUID] = parent_fk("speaking_questions")
    phrase: Mapped[str] = mapped_column(sa.Text, nullable=False)
    mean: Mapped[str] = mapped_column(sa.Text, default="", nullable=False)


class SpeakingParagraphRepetition(IdMixin, TimestampMixin, Base):
    __tablename__ = "speaking_paragraph_repetitions"

    speaking_question_id: Mapped[uuid.UUID] = parent_fk("speaking_questions")
    paragraph: Mapped[str] = mapped_column(sa.Text, nullable=False)
    mean: Mapped[str] = mapped_column(sa.Text, default="", nullable=False)


class SpeakingOpenParagraph(IdMixin, TimestampMixin, Base):
    __tablename__ = "speaking_open_paragraphs"

    speaking_question_id: Mapped[uuid.UUID] = parent_fk("speaking_questions")
    question: Mapped[str] = mapped_column(sa.Text, nullable=False)
    example_passage: Mapped[str] = mapped_column(sa.Text, default="", nullable=False)
    mean_of_example_passage: Mapped[str] = mapped_column(sa.Text, default="", nullable=False)


class SpeakingConversationalRepetition(IdMixin, TimestampMixin, Base):
    __tablename__ = "speaking_conversational_repetitions"

    speaking_question_id: Mapped[uuid.UUID] = parent_fk("speaking_questions")
    title: Mapped[str] = mapped_column(sa.Text, nullable=False)
    overview: Mapped[str] = mapped_column(sa.Text, default="", nullable=False)


class SpeakingConversationalRepetitionQA(IdMixin, TimestampMixin, Base):
    """One exchange of a conversational repetition."""

    __tablename__ = "speaking_conversational_repetition_qas"

    conversational_repetition_id: Mapped[uuid.UUID] = parent_fk(
        "speaking_conversational_repetitions"
    )
    question: Mapped[str] = mapped_column(sa.Text, nullable=False)
    answer: Mapped[str] = mapped_column(sa.Text, nullable=False)
    mean_of_question: Mapped[str] = mapped_column(sa.Text, default="", nullable=False)
    mean_of_answer: Mapped[str] = mapped_column(sa.Text, default="", nullable=False)
    explain: Mapped[str] = mapped_column(sa.Text, default="", nullable=False)


class SpeakingConversationalOpen(IdMixin, TimestampMixin, Base):
    __tablename__ = "speaking_conversational_opens"

    speaking_question_id: Mapped[uuid.UUID] = parent_fk("speaking_questions")
    title: Mapped[str] = mapped_column(sa.Text, nullable=False)
    overview: Mapped[str] = mapped_column(sa.Text, default="", nullable=False)
    example_conversation: Mapped[str] = mapped_column(sa.Text, default="", nullable=False)
