# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Grammar family wiring.

Fill-in-the-blank is complete with a single answer. Error identification
and sentence transformation hold one row each; extra rows are ignored.
"""

from fluency.core.sync.completion import Present, SubQuestionWithItems
from fluency.core.sync.family import ContentFamily
from fluency.core.sync.loaders import FirstRowLoader, SubQuestionLoader
from fluency.core.sync.registry import ContentTypeHandler, ContentTypeRegistry
from fluency.domains.content.definition import ChildKind, FamilyDefinition
from fluency.domains.content.schemas import (
    AnswerDetail,
    AnswerInput,
    ExplainedSubQuestionDetail,
    ExplainedSubQuestionInput,
    OptionDetail,
    OptionInput,
    SubQuestionDetail,
    SubQuestionInput,
)
from fluency.domains.grammar.schemas import (
    ErrorIdentificationDetail,
    ErrorIdentificationInput,
    GrammarQuestionDetail,
    GrammarQuestionInput,
    GrammarQuestionType,
    SentenceTransformationDetail,
    SentenceTransformationInput,
)
from fluency.infrastructure.database.models import (
    GrammarChoiceOneOption,
    GrammarChoiceOneQuestion,
    GrammarErrorIdentification,
    GrammarFillInTheBlankAnswer,
    GrammarFillInTheBlankQuestion,
    GrammarQuestion,
    GrammarSentenceTransformation,
)
from fluency.infrastructure.database.repositories import ChildRepository, RootRepository

ROOT_FK = "grammar_question_id"

questions = RootRepository(GrammarQuestion)
fill_in_the_blank_questions = ChildRepository(GrammarFillInTheBlankQuestion, ROOT_FK)
fill_in_the_blank_answers = ChildRepository(GrammarFillInTheBlankAnswer, "question_id")
choice_one_questions = ChildRepository(GrammarChoiceOneQuestion, ROOT_FK)
choice_one_options = ChildRepository(GrammarChoiceOneOption, "question_id")
error_identifications = ChildRepository(GrammarErrorIdentification, ROOT_FK)
sentence_transformations = ChildRepository(GrammarSentenceTransformation, ROOT_FK)


def build_registry() -> ContentTypeRegistry:
    registry = ContentTypeRegistry("grammar")

    registry.register(
        ContentTypeHandler(
            GrammarQuestionType.FILL_IN_THE_BLANK.value,
            loaders=[
                SubQuestionLoader(
                    "fill_in_the_blank_question",
                    "fill_in_the_blank_answers",
                    fill_in_the_blank_questions,
                    fill_in_the_blank_answers,
                    SubQuestionDetail,
                    AnswerDetail,
                )
            ],
            rule=SubQuestionWithItems(
                "fill_in_the_blank_question", "fill_in_the_blank_answers", min_items=1
            ),
        )
    )
    registry.register(
        ContentTypeHandler(
            GrammarQuestionType.CHOICE_ONE.value,
            loaders=[
                SubQuestionLoader(
                    "choice_one_question",
                    "choice_one_options",
                    choice_one_questions,
                    choice_one_options,
                    ExplainedSubQuestionDetail,
                    OptionDetail,
                )
            ],
            rule=SubQuestionWithItems(
                "choice_one_question",
                "choice_one_options",
                min_items=2,
                min_correct=1,
                min_incorrect=1,
            ),
        )
    )
    registry.register(
        ContentTypeHandler(
            GrammarQuestionType.ERROR_IDENTIFICATION.value,
            loaders=[
                FirstRowLoader(
                    "error_identification", error_identifications, ErrorIdentificationDetail
                )
            ],
            rule=Present("error_identification"),
        )
    )
    registry.register(
        ContentTypeHandler(
            GrammarQuestionType.SENTENCE_TRANSFORMATION.value,
            loaders=[
                FirstRowLoader(
                    "sentence_transformation",
                    sentence_transformations,
                    SentenceTransformationDetail,
                )
            ],
            rule=Present("sentence_transformation"),
        )
    )
    return registry


def build_definition() -> FamilyDefinition:
    """Assemble the grammar family definition."""
    fill_in_the_blank_question = ChildKind(
        "fill_in_the_blank_question", fill_in_the_blank_questions, SubQuestionInput
    )
    choice_one_question = ChildKind(
        "choice_one_question", choice_one_questions, ExplainedSubQuestionInput
    )
    kinds = [
        fill_in_the_blank_question,
        ChildKind(
            "fill_in_the_blank_answer",
            fill_in_the_blank_answers,
            AnswerInput,
            parent=fill_in_the_blank_question,
        ),
        choice_one_question,
        ChildKind(
            "choice_one_option",
            choice_one_options,
            OptionInput,
            parent=choice_one_question,
            single_correct=True,
        ),
        ChildKind("error_identification", error_identifications, ErrorIdentificationInput),
        ChildKind(
            "sentence_transformation", sentence_transformations, SentenceTransformationInput
        ),
    ]

    return FamilyDefinition(
        family=ContentFamily(
            name="grammar",
            key_prefix="grammar_question",
            collection="grammar_questions",
            detail_model=GrammarQuestionDetail,
            registry=build_registry(),
        ),
        root_repo=questions,
        root_schema=GrammarQuestionInput,
        child_kinds={kind.name: kind for kind in kinds},
    )
