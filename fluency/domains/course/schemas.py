# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course schemas."""

from enum import Enum
from uuid import UUID

from pydantic import Field

from fluency.core.sync.detail import ContentDetail, DetailModel
from fluency.domains.content.schemas import InputModel


class CourseType(str, Enum):
    BOOK = "BOOK"
    OTHER = "OTHER"


class LessonQuestionType(str, Enum):
    """Question family a lesson question points to."""

    GRAMMAR = "GRAMMAR"
    LISTENING = "LISTENING"
    READING = "READING"
    SPEAKING = "SPEAKING"
    WRITING = "WRITING"


class CourseInput(InputModel):
    """Fields of a course."""

    type: CourseType
    title: str = Field(min_length=1, max_length=255)
    overview: str = ""
    skills: list[str] = Field(default_factory=list)
    band: str = Field(default="", max_length=50)
    image_urls: list[str] = Field(default_factory=list)


class CourseBookInput(InputModel):
    publishers: list[str] = Field(default_factory=list)
    authors: list[str] = Field(default_factory=list)
    publication_year: int = Field(ge=1000, le=9999)


class CourseOtherInput(InputModel):
    """A course of type OTHER carries no extra fields."""


class LessonInput(InputModel):
    sequence: int = Field(ge=1)
    title: str = Field(min_length=1, max_length=255)
    overview: str = ""


class LessonQuestionInput(InputModel):
    sequence: int = Field(ge=1)
    question_id: UUID
    question_type: LessonQuestionType


class CourseBookDetail(DetailModel):
    id: UUID
    publishers: list[str] = Field(default_factory=list)
    authors: list[str] = Field(default_factory=list)
    publication_year: int


class CourseOtherDetail(DetailModel):
    id: UUID


class LessonQuestionDetail(DetailModel):
    id: UUID
    sequence: int
    question_id: UUID
    question_type: str


class LessonDetail(DetailModel):
    id: UUID
    sequence: int
    title: str
    overview: str = ""
    questions: list[LessonQuestionDetail] = Field(default_factory=list)


class CourseDetail(ContentDetail):
    """Course with its book/other record and its lessons."""

    title: str
    overview: str = ""
    skills: list[str] = Field(default_factory=list)
    band: str = ""
    image_urls: list[str] = Field(default_factory=list)

    course_book: CourseBookDetail | None = None
    course_other: CourseOtherDetail | None = None
    lessons: list[LessonDetail] | None = None
