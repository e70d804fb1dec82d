# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Speaking and writing schema.

Revision ID: 002_speaking_writing_schema
Revises: 001_content_schema
Create Date: 2025-02-03
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "002_speaking_writing_schema"
down_revision: Union[str, None] = "001_content_schema"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("id", sa.Uuid, primary_key=True)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def _parent(column: str, table: str) -> sa.Column:
    return sa.Column(
        column,
        sa.Uuid,
        sa.ForeignKey(f"{table}.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


def _question_root(table: str) -> None:
    op.create_table(
        table,
        _id(),
        sa.Column("type", sa.String(50), nullable=False, index=True),
        sa.Column("version", sa.Integer, nullable=False),
        sa.Column("topic", sa.JSON, nullable=False),
        sa.Column("instruction", sa.Text, nullable=False),
        sa.Column("image_urls", sa.JSON, nullable=False),
        sa.Column("max_time", sa.Integer, nullable=False),
        *_timestamps(),
    )


def _speaking_rows(table: str, *columns: sa.Column) -> None:
    op.create_table(
        table,
        _id(),
        _parent("speaking_question_id", "speaking_questions"),
        *columns,
        *_timestamps(),
    )


def upgrade() -> None:
    """Create the speaking and writing tables."""

    # Speaking
    _question_root("speaking_questions")
    for table, text_column in (
        ("speaking_word_repetitions", "word"),
        ("speaking_phrase_repetitions", "phrase"),
        ("speaking_paragraph_repetitions", "paragraph"),
    ):
        _speaking_rows(
            table,
            sa.Column(text_column, sa.Text, nullable=False),
            sa.Column("mean", sa.Text, nullable=False),
        )
    _speaking_rows(
        "speaking_open_paragraphs",
        sa.Column("question", sa.Text, nullable=False),
        sa.Column("example_passage", sa.Text, nullable=False),
        sa.Column("mean_of_example_passage", sa.Text, nullable=False),
    )
    _speaking_rows(
        "speaking_conversational_repetitions",
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("overview", sa.Text, nullable=False),
    )
    op.create_table(
        "speaking_conversational_repetition_qas",
        _id(),
        _parent("conversational_repetition_id", "speaking_conversational_repetitions"),
        sa.Column("question", sa.Text, nullable=False),
        sa.Column("answer", sa.Text, nullable=False),
        sa.Column("mean_of_question", sa.Text, nullable=False),
        sa.Column("mean_of_answer", sa.Text, nullable=False),
        sa.Column("explain", sa.Text, nullable=False),
        *_timestamps(),
    )
    _speaking_rows(
        "speaking_conversational_opens",
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("overview", sa.Text, nullable=False),
        sa.Column("example_conversation", sa.Text, nullable=False),
    )

    # Writing
    _question_root("writing_questions")
    op.create_table(
        "writing_sentence_completions",
        _id(),
        _parent("writing_question_id", "writing_questions"),
        sa.Column("example_sentence", sa.Text, nullable=False),
        sa.Column("given_part_sentence", sa.Text, nullable=False),
        sa.Column("position", sa.String(10), nullable=False),
        sa.Column("required_words", sa.JSON, nullable=False),
        sa.Column("explain", sa.Text, nullable=False),
        sa.Column("min_words", sa.Integer, nullable=False),
        sa.Column("max_words", sa.Integer, nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "writing_essays",
        _id(),
        _parent("writing_question_id", "writing_questions"),
        sa.Column("essay_type", sa.String(50), nullable=False),
        sa.Column("required_points", sa.JSON, nullable=False),
        sa.Column("min_words", sa.Integer, nullable=False),
        sa.Column("max_words", sa.Integer, nullable=False),
        sa.Column("sample_essay", sa.Text, nullable=False),
        sa.Column("explain", sa.Text, nullable=False),
        *_timestamps(),
    )


def downgrade() -> None:
    """Drop the speaking and writing tables, children first."""
    for table in (
        "writing_essays",
        "writing_sentence_completions",
        "writing_questions",
        "speaking_conversational_opens",
        "speaking_conversational_repetition_qas",
        "speaking_conversational_repetitions",
        "speaking_open_paragraphs",
        "speaking_paragraph_repetitions",
        "speaking_phrase_repetitions",
        "speaking_word_repetitions",
        "speaking_questions",
    ):
        op.drop_table(table)
