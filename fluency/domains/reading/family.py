# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Reading family wiring.

Same choice and fill-in-the-blank rules as listening. TRUE_FALSE needs at
least two statements; MATCHING is complete with a single row.
"""

from fluency.core.sync.completion import MinRows, SubQuestionWithItems
from fluency.core.sync.family import ContentFamily
from fluency.core.sync.loaders import RowsLoader, SubQuestionLoader
from fluency.core.sync.registry import ContentTypeHandler, ContentTypeRegistry
from fluency.domains.content.definition import ChildKind, FamilyDefinition
from fluency.domains.content.schemas import (
    AnswerDetail,
    AnswerInput,
    ExplainedSubQuestionDetail,
    ExplainedSubQuestionInput,
    OptionDetail,
    OptionInput,
    QuestionAnswerRowDetail,
    QuestionAnswerRowInput,
    SubQuestionDetail,
    SubQuestionInput,
)
from fluency.domains.reading.schemas import (
    ReadingQuestionDetail,
    ReadingQuestionInput,
    ReadingQuestionType,
    TrueFalseInput,
)
from fluency.infrastructure.database.models import (
    ReadingChoiceMultiOption,
    ReadingChoiceMultiQuestion,
    ReadingChoiceOneOption,
    ReadingChoiceOneQuestion,
    ReadingFillInTheBlankAnswer,
    ReadingFillInTheBlankQuestion,
    ReadingMatching,
    ReadingQuestion,
    ReadingTrueFalse,
)
from fluency.infrastructure.database.repositories import ChildRepository, RootRepository

ROOT_FK = "reading_question_id"

questions = RootRepository(ReadingQuestion)
fill_in_the_blank_questions = ChildRepository(ReadingFillInTheBlankQuestion, ROOT_FK)
fill_in_the_blank_answers = ChildRepository(ReadingFillInTheBlankAnswer, "question_id")
choice_one_questions = ChildRepository(ReadingChoiceOneQuestion, ROOT_FK)
choice_one_options = ChildRepository(ReadingChoiceOneOption, "question_id")
choice_multi_questions = ChildRepository(ReadingChoiceMultiQuestion, ROOT_FK)
choice_multi_options = ChildRepository(ReadingChoiceMultiOption, "question_id")
true_falses = ChildRepository(ReadingTrueFalse, ROOT_FK)
matchings = ChildRepository(ReadingMatching, ROOT_FK)


def build_registry() -> ContentTypeRegistry:
    registry = ContentTypeRegistry("reading")

    registry.register(
        ContentTypeHandler(
            ReadingQuestionType.FILL_IN_THE_BLANK.value,
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
                "fill_in_the_blank_question", "fill_in_the_blank_answers", min_items=2
            ),
        )
    )
    registry.register(
        ContentTypeHandler(
            ReadingQuestionType.CHOICE_ONE.value,
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
            ReadingQuestionType.CHOICE_MULTI.value,
            loaders=[
                SubQuestionLoader(
                    "choice_multi_question",
                    "choice_multi_options",
                    choice_multi_questions,
                    choice_multi_options,
                    ExplainedSubQuestionDetail,
                    OptionDetail,
                )
            ],
            rule=SubQuestionWithItems(
                "choice_multi_question",
                "choice_multi_options",
                min_items=3,
                min_correct=2,
                min_incorrect=1,
            ),
        )
    )
    registry.register(
        ContentTypeHandler(
            ReadingQuestionType.TRUE_FALSE.value,
            loaders=[RowsLoader("true_false", true_falses, QuestionAnswerRowDetail)],
            rule=MinRows("true_false", 2),
        )
    )
    registry.register(
        ContentTypeHandler(
            ReadingQuestionType.MATCHING.value,
            loaders=[RowsLoader("matching", matchings, QuestionAnswerRowDetail)],
            rule=MinRows("matching", 1),
        )
    )
    return registry


def build_definition() -> FamilyDefinition:
    """Assemble the reading family definition."""
    fill_in_the_blank_question = ChildKind(
        "fill_in_the_blank_question", fill_in_the_blank_questions, SubQuestionInput
    )
    choice_one_question = ChildKind(
        "choice_one_question", choice_one_questions, ExplainedSubQuestionInput
    )
    choice_multi_question = ChildKind(
        "choice_multi_question", choice_multi_questions, ExplainedSubQuestionInput
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
        choice_multi_question,
        ChildKind(
            "choice_multi_option",
            choice_multi_options,
            OptionInput,
            parent=choice_multi_question,
        ),
        ChildKind("true_false", true_falses, TrueFalseInput),
        ChildKind("matching", matchings, QuestionAnswerRowInput),
    ]

    return FamilyDefinition(
        family=ContentFamily(
            name="reading",
            key_prefix="reading_question",
            collection="reading_questions",
            detail_model=ReadingQuestionDetail,
            registry=build_registry(),
        ),
        root_repo=questions,
        root_schema=ReadingQuestionInput,
        child_kinds={kind.name: kind for kind in kinds},
    )
