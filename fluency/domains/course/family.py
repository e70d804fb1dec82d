# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course family wiring.

Lessons are loaded for every course type.

Course completeness is a local convention of this backend, not an authoring
rule shared with the question families: a course counts as complete when its
BOOK or OTHER record exists and it has at least one lesson. Like every status
it is advisory and never blocks a write.
"""

from fluency.core.sync.completion import AllOf, MinRows, Present
from fluency.core.sync.family import ContentFamily
from fluency.core.sync.loaders import FirstRowLoader, LessonsLoader
from fluency.core.sync.registry import ContentTypeHandler, ContentTypeRegistry
from fluency.domains.content.definition import ChildKind, FamilyDefinition
from fluency.domains.course.schemas import (
    CourseBookDetail,
    CourseBookInput,
    CourseDetail,
    CourseInput,
    CourseOtherDetail,
    CourseOtherInput,
    CourseType,
    LessonDetail,
    LessonInput,
    LessonQuestionDetail,
    LessonQuestionInput,
)
from fluency.infrastructure.database.models import (
    Course,
    CourseBook,
    CourseOther,
    Lesson,
    LessonQuestion,
)
from fluency.infrastructure.database.repositories import ChildRepository, RootRepository

courses = RootRepository(Course)
course_books = ChildRepository(CourseBook, "course_id")
course_others = ChildRepository(CourseOther, "course_id")
lessons = ChildRepository(Lesson, "course_id", order_by="sequence")
lesson_questions = ChildRepository(LessonQuestion, "lesson_id", order_by="sequence")


def build_registry() -> ContentTypeRegistry:
    registry = ContentTypeRegistry(
        "course",
        shared_loaders=[
            LessonsLoader(lessons, lesson_questions, LessonDetail, LessonQuestionDetail)
        ],
    )

    registry.register(
        ContentTypeHandler(
            CourseType.BOOK.value,
            loaders=[FirstRowLoader("course_book", course_books, CourseBookDetail)],
            rule=AllOf(Present("course_book"), MinRows("lessons", 1)),
        )
    )
    registry.register(
        ContentTypeHandler(
            CourseType.OTHER.value,
            loaders=[FirstRowLoader("course_other", course_others, CourseOtherDetail)],
            rule=AllOf(Present("course_other"), MinRows("lessons", 1)),
        )
    )
    return registry


def build_definition() -> FamilyDefinition:
    """Assemble the course family definition."""
    lesson = ChildKind("lesson", lessons, LessonInput)
    kinds = [
        ChildKind("course_book", course_books, CourseBookInput),
        ChildKind("course_other", course_others, CourseOtherInput),
        lesson,
        ChildKind("lesson_question", lesson_questions, LessonQuestionInput, parent=lesson),
    ]

    return FamilyDefinition(
        family=ContentFamily(
            name="course",
            key_prefix="course",
            collection="courses",
            detail_model=CourseDetail,
            registry=build_registry(),
        ),
        root_repo=courses,
        root_schema=CourseInput,
        child_kinds={kind.name: kind for kind in kinds},
    )
