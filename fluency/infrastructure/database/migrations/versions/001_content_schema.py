# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Content schema.

Creates the listening, reading and grammar question hierarchies and the
course tables. Child tables reference their parent with ON DELETE CASCADE
so deleting a root removes its whole hierarchy.

Revision ID: 001_content_schema
Revises:
Create Date: 2025-01-20
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_content_schema"
down_revision: Union[str, None] = None
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


def _question_root(table: str, *extra: sa.Column) -> None:
    op.create_table(
        table,
        _id(),
        sa.Column("type", sa.String(50), nullable=False, index=True),
        sa.Column("version", sa.Integer, nullable=False),
        sa.Column("topic", sa.JSON, nullable=False),
        sa.Column("instruction", sa.Text, nullable=False),
        sa.Column("image_urls", sa.JSON, nullable=False),
        sa.Column("max_time", sa.Integer, nullable=False),
        *extra,
        *_timestamps(),
    )


def _sub_question(table: str, root_column: str, root_table: str, explain: bool) -> None:
    columns = [sa.Column("question", sa.Text, nullable=False)]
    if explain:
        columns.append(sa.Column("explain", sa.Text, nullable=False))
    op.create_table(table, _id(), _parent(root_column, root_table), *columns, *_timestamps())


def _answers(table: str, question_table: str) -> None:
    op.create_table(
        table,
        _id(),
        _parent("question_id", question_table),
        sa.Column("answer", sa.Text, nullable=False),
        sa.Column("explain", sa.Text, nullable=False),
        *_timestamps(),
    )


def _options(table: str, question_table: str) -> None:
    op.create_table(
        table,
        _id(),
        _parent("question_id", question_table),
        sa.Column("options", sa.Text, nullable=False),
        sa.Column("is_correct", sa.Boolean, nullable=False),
        *_timestamps(),
    )


def _qa_rows(table: str, root_column: str, root_table: str) -> None:
    op.create_table(
        table,
        _id(),
        _parent(root_column, root_table),
        sa.Column("question", sa.Text, nullable=False),
        sa.Column("answer", sa.Text, nullable=False),
        sa.Column("explain", sa.Text, nullable=False),
        *_timestamps(),
    )


def _choice_and_blank_tables(family: str) -> None:
    root_table = f"{family}_questions"
    root_column = f"{family}_question_id"

    _sub_question(f"{family}_fill_in_the_blank_questions", root_column, root_table, explain=False)
    _answers(f"{family}_fill_in_the_blank_answers", f"{family}_fill_in_the_blank_questions")
    _sub_question(f"{family}_choice_one_questions", root_column, root_table, explain=True)
    _options(f"{family}_choice_one_options", f"{family}_choice_one_questions")


def upgrade() -> None:
    """Create all content tables."""

    # Listening
    _question_root(
        "listening_questions",
        sa.Column("audio_urls", sa.JSON, nullable=False),
        sa.Column("transcript", sa.Text, nullable=False),
    )
    _choice_and_blank_tables("listening")
    _sub_question(
        "listening_choice_multi_questions", "listening_question_id", "listening_questions", True
    )
    _options("listening_choice_multi_options", "listening_choice_multi_questions")
    _qa_rows("listening_map_labellings", "listening_question_id", "listening_questions")
    _qa_rows("listening_matchings", "listening_question_id", "listening_questions")

    # Reading
    _question_root(
        "reading_questions",
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("passages", sa.JSON, nullable=False),
    )
    _choice_and_blank_tables("reading")
    _sub_question(
        "reading_choice_multi_questions", "reading_question_id", "reading_questions", True
    )
    _options("reading_choice_multi_options", "reading_choice_multi_questions")
    _qa_rows("reading_true_falses", "reading_question_id", "reading_questions")
    _qa_rows("reading_matchings", "reading_question_id", "reading_questions")

    # Grammar
    _question_root("grammar_questions")
    _choice_and_blank_tables("grammar")
    op.create_table(
        "grammar_error_identifications",
        _id(),
        _parent("grammar_question_id", "grammar_questions"),
        sa.Column("error_sentence", sa.Text, nullable=False),
        sa.Column("error_word", sa.String(255), nullable=False),
        sa.Column("correct_word", sa.String(255), nullable=False),
        sa.Column("explain", sa.Text, nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "grammar_sentence_transformations",
        _id(),
        _parent("grammar_question_id", "grammar_questions"),
        sa.Column("original_sentence", sa.Text, nullable=False),
        sa.Column("beginning_word", sa.String(255), nullable=False),
        sa.Column("example_correct_sentence", sa.Text, nullable=False),
        sa.Column("explain", sa.Text, nullable=False),
        *_timestamps(),
    )

    # Courses
    op.create_table(
        "courses",
        _id(),
        sa.Column("type", sa.String(50), nullable=False, index=True),
        sa.Column("version", sa.Integer, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("overview", sa.Text, nullable=False),
        sa.Column("skills", sa.JSON, nullable=False),
        sa.Column("band", sa.String(50), nullable=False),
        sa.Column("image_urls", sa.JSON, nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "course_books",
        _id(),
        _parent("course_id", "courses"),
        sa.Column("publishers", sa.JSON, nullable=False),
        sa.Column("authors", sa.JSON, nullable=False),
        sa.Column("publication_year", sa.Integer, nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "course_others",
        _id(),
        _parent("course_id", "courses"),
        *_timestamps(),
    )
    op.create_table(
        "lessons",
        _id(),
        _parent("course_id", "courses"),
        sa.Column("sequence", sa.Integer, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("overview", sa.Text, nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "lesson_questions",
        _id(),
        _parent("lesson_id", "lessons"),
        sa.Column("sequence", sa.Integer, nullable=False),
        sa.Column("question_id", sa.Uuid, nullable=False),
        sa.Column("question_type", sa.String(20), nullable=False),
        *_timestamps(),
    )


def downgrade() -> None:
    """Drop all content tables, children first."""
    for table in (
        "lesson_questions",
        "lessons",
        "course_others",
        "course_books",
        "courses",
        "grammar_sentence_transformations",
        "grammar_error_identifications",
        "grammar_choice_one_options",
        "grammar_choice_one_questions",
        "grammar_fill_in_the_blank_answers",
        "grammar_fill_in_the_blank_questions",
        "grammar_questions",
        "reading_matchings",
        "reading_true_falses",
        "reading_choice_multi_options",
        "reading_choice_multi_questions",
        "reading_choice_one_options",
        "reading_choice_one_questions",
        "reading_fill_in_the_blank_answers",
        "reading_fill_in_the_blank_questions",
        "reading_questions",
        "listening_matchings",
        "listening_map_labellings",
        "listening_choice_multi_options",
        "listening_choice_multi_questions",
        "listening_choice_one_options",
        "listening_choice_one_questions",
        "listening_fill_in_the_blank_answers",
        "listening_fill_in_the_blank_questions",
        "listening_questions",
    ):
        op.drop_table(table)
