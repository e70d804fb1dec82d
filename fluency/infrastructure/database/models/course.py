# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course tables.

A course is either a BOOK (with publication metadata) or OTHER. Both kinds
own an ordered list of lessons, and each lesson references questions of the
question families by id.
"""

import uuid

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from fluency.infrastructure.database.models.base import (
    Base,
    IdMixin,
    TimestampMixin,
    VersionedRootMixin,
    parent_fk,
)


class Course(VersionedRootMixin, Base):
    __tablename__ = "courses"

    title: Mapped[str] = mapped_column(sa.String(255), nullable=False)
    overview: Mapped[str] = mapped_column(sa.Text, default="", nullable=False)
    skills: Mapped[list[str]] = mapped_column(sa.JSON, default=list, nullable=False)
    band: Mapped[str] = mapped_column(sa.String(50), default="", nullable=False)


class CourseBook(IdMixin, TimestampMixin, Base):
    __tablename__ = "course_books"

    course_id: Mapped[uuid.UUID] = parent_fk("courses")
    publishers: Mapped[list[str]] = mapped_column(sa.JSON, default=list, nullable=False)
    authors: Mapped[list[str]] = mapped_column(sa.JSON, default=list, nullable=False)
    publication_year: Mapped[int] = mapped_column(sa.Integer, nullable=False)


class CourseOther(IdMixin, TimestampMixin, Base):
    __tablename__ = "course_others"

    course_id: Mapped[uuid.UUID] = parent_fk("courses")


class Lesson(IdMixin, TimestampMixin, Base):
    __tablename__ = "lessons"

    course_id: Mapped[uuid.UUID] = parent_fk("courses")
    sequence: Mapped[int] = mapped_column(sa.Integer, nullable=False)
    title: Mapped[str] = mapped_column(sa.String(255), nullable=False)
    overview: Mapped[str] = mapped_column(sa.Text, default="", nullable=False)


class LessonQuestion(IdMixin, TimestampMixin, Base):
    __tablename__ = "lesson_questions"

    lesson_id: Mapped[uuid.UUID] = parent_fk("lessons")
    sequence: Mapped[int] = mapped_column(sa.Integer, nullable=False)
    question_id: Mapped[uuid.UUID] = mapped_column(sa.Uuid, nullable=False)
    question_type: Mapped[str] = mapped_column(sa.String(20), nullable=False)
