# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Listening family wiring: repositories, type handlers and child kinds.

| Type              | Branch                                         | Complete when                          |
|-------------------|------------------------------------------------|----------------------------------------|
| FILL_IN_THE_BLANK | fill_in_the_blank_question + answers           | question and >= 2 answers              |
| CHOICE_ONE        | choice_one_question + options                  | >= 2 options, >= 1 correct, >= 1 wrong |
| CHOICE_MULTI      | choice_multi_question + options                | >= 3 options, >= 2 correct, >= 1 wrong |
| MAP_LABELLING     | map_labelling rows                             | >= 2 rows                              |
| MATCHING          | matching rows                                  | >= 2 rows                              |
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
from fluency.domains.listening.schemas import (
    ListeningQuestionDetail,
    ListeningQuestionInput,
    ListeningQuestionType,
)
from fluency.infrastructure.database.models import (
    ListeningChoiceMultiOption,
    ListeningChoiceMultiQuestion,
    ListeningChoiceOneOption,
    ListeningChoiceOneQuestion,
    ListeningFillInTheBlankAnswer,
    ListeningFillInTheBlankQuestion,
    ListeningMapLabelling,
    ListeningMatching,
    ListeningQuestion,
)
from fluency.infrastructure.database.repositories import ChildRepository, RootRepository

ROOT_FK = "listening_question_id"

questions = RootRepository(ListeningQuestion)
fill_in_the_blank_questions = ChildRepository(ListeningFillInTheBlankQuestion, ROOT_FK)
fill_in_the_blank_answers = ChildRepository(ListeningFillInTheBlankAnswer, "question_id")
choice_one_questions = ChildRepository(ListeningChoiceOneQuestion, ROOT_FK)
choice_one_options = ChildRepository(ListeningChoiceOneOption, "question_id")
choice_multi_questions = ChildRepository(ListeningChoiceMultiQuestion, ROOT_FK)
choice_multi_options = ChildRepository(ListeningChoiceMultiOption, "question_id")
map_labellings = ChildRepository(ListeningMapLabelling, ROOT_FK)
matchings = ChildRepository(ListeningMatching, ROOT_FK)


def build_registry() -> ContentTypeRegistry:
    registry = ContentTypeRegistry("listening")

    registry.register(
        ContentTypeHandler(
            ListeningQuestionType.FILL_IN_THE_BLANK.value,
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
            ListeningQuestionType.CHOICE_ONE.value,
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
            ListeningQuestionType.CHOICE_MULTI.value,
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
            ListeningQuestionType.MAP_LABELLING.value,
            loaders=[RowsLoader("map_labelling", map_labellings, QuestionAnswerRowDetail)],
            rule=MinRows("map_labelling", 2),
        )
    )
    registry.register(
        ContentTypeHandler(
            ListeningQuestionType.MATCHING.value,
            loaders=[RowsLoader("matching", matchings, QuestionAnswerRowDetail)],
            rule=MinRows("matching", 2),
        )
    )
    return registry


def build_definition() -> FamilyDefinition:
    """Assemble the listening family definition."""
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
        ChildKind("map_labelling", map_labellings, QuestionAnswerRowInput),
        ChildKind("matching", matchings, QuestionAnswerRowInput),
    ]

    return FamilyDefinition(
        family=ContentFamily(
            name="listening",
            key_prefix="listening_question",
            collection="listening_questions",
            detail_model=ListeningQuestionDetail,
            registry=build_registry(),
        ),
        root_repo=questions,
        root_schema=ListeningQuestionInput,
        child_kinds={kind.name: kind for kind in kinds},
    )
