# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Writing family wiring.

Sentence completion and essay questions each hold a list of prompts and are
complete with one.
"""

from fluency.core.sync.completion import MinRows
from fluency.core.sync.family import ContentFamily
from fluency.core.sync.loaders import RowsLoader
from fluency.core.sync.registry import ContentTypeHandler, ContentTypeRegistry
from fluency.domains.content.definition import ChildKind, FamilyDefinition
from fluency.domains.writing.schemas import (
    EssayDetail,
    EssayInput,
    SentenceCompletionDetail,
    SentenceCompletionInput,
    WritingQuestionDetail,
    WritingQuestionInput,
    WritingQuestionType,
)
from fluency.infrastructure.database.models import (
    WritingEssay,
    WritingQuestion,
    WritingSentenceCompletion,
)
from fluency.infrastructure.database.repositories import ChildRepository, RootRepository

ROOT_FK = "writing_question_id"

questions = RootRepository(WritingQuestion)
sentence_completions = ChildRepository(WritingSentenceCompletion, ROOT_FK)
essays = ChildRepository(WritingEssay, ROOT_FK)


def build_registry() -> ContentTypeRegistry:
    registry = ContentTypeRegistry("writing")

    registry.register(
        ContentTypeHandler(
            WritingQuestionType.SENTENCE_COMPLETION.value,
            loaders=[
                RowsLoader("sentence_completion", sentence_completions, SentenceCompletionDetail)
            ],
            rule=MinRows("sentence_completion", 1),
        )
    )
    registry.register(
        ContentTypeHandler(
            WritingQuestionType.ESSAY.value,
            loaders=[RowsLoader("essay", essays, EssayDetail)],
            rule=MinRows("essay", 1),
        )
    )
    return registry


def build_definition() -> FamilyDefinition:
    """Assemble the writing family definition."""
    kinds = [
        ChildKind("sentence_completion", sentence_completions, SentenceCompletionInput),
        ChildKind("essay", essays, EssayInput),
    ]

    return FamilyDefinition(
        family=ContentFamily(
            name="writing",
            key_prefix="writing_question",
            collection="writing_questions",
            detail_model=WritingQuestionDetail,
            registry=build_registry(),
        ),
        root_repo=questions,
        root_schema=WritingQuestionInput,
        child_kinds={kind.name: kind for kind in kinds},
    )
