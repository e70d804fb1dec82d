# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Speaking family wiring.

| Type                      | Branch                                          | Complete when              |
|---------------------------|-------------------------------------------------|----------------------------|
| WORD_REPETITION           | word_repetition rows                            | >= 1 row                   |
| PHRASE_REPETITION         | phrase_repetition rows                          | >= 1 row                   |
| PARAGRAPH_REPETITION      | paragraph_repetition rows                       | >= 1 row                   |
| OPEN_PARAGRAPH            | open_paragraph rows                             | >= 1 row                   |
| CONVERSATIONAL_REPETITION | conversational_repetition + its QAs             | conversation and >= 2 QAs  |
| CONVERSATIONAL_OPEN       | conversational_open                             | conversation present       |

Only the first conversation of a question is surfaced, like the other
single-branch types.
"""

from fluency.core.sync.completion import MinRows, Present, SubQuestionWithItems
from fluency.core.sync.family import ContentFamily
from fluency.core.sync.loaders import FirstRowLoader, RowsLoader, SubQuestionLoader
from fluency.core.sync.registry import ContentTypeHandler, ContentTypeRegistry
from fluency.domains.content.definition import ChildKind, FamilyDefinition
from fluency.domains.speaking.schemas import (
    ConversationalOpenDetail,
    ConversationalOpenInput,
    ConversationalRepetitionDetail,
    ConversationalRepetitionInput,
    ConversationalRepetitionQADetail,
    ConversationalRepetitionQAInput,
    OpenParagraphDetail,
    OpenParagraphInput,
    ParagraphRepetitionDetail,
    ParagraphRepetitionInput,
    PhraseRepetitionDetail,
    PhraseRepetitionInput,
    SpeakingQuestionDetail,
    SpeakingQuestionInput,
    SpeakingQuestionType,
    WordRepetitionDetail,
    WordRepetitionInput,
)
from fluency.infrastructure.database.models import (
    SpeakingConversationalOpen,
    SpeakingConversationalRepetition,
    SpeakingConversationalRepetitionQA,
    SpeakingOpenParagraph,
    SpeakingParagraphRepetition,
    SpeakingPhraseRepetition,
    SpeakingQuestion,
    SpeakingWordRepetition,
)
from fluency.infrastructure.database.repositories import ChildRepository, RootRepository

ROOT_FK = "speaking_question_id"

questions = RootRepository(SpeakingQuestion)
word_repetitions = ChildRepository(SpeakingWordRepetition, ROOT_FK)
phrase_repetitions = ChildRepository(SpeakingPhraseRepetition, ROOT_FK)
paragraph_repetitions = ChildRepository(SpeakingParagraphRepetition, ROOT_FK)
open_paragraphs = ChildRepository(SpeakingOpenParagraph, ROOT_FK)
conversational_repetitions = ChildRepository(SpeakingConversationalRepetition, ROOT_FK)
conversational_repetition_qas = ChildRepository(
    SpeakingConversationalRepetitionQA, "conversational_repetition_id"
)
conversational_opens = ChildRepository(SpeakingConversationalOpen, ROOT_FK)

# (type, detail field, repository, detail schema)
_ROW_TYPES = [
    (SpeakingQuestionType.WORD_REPETITION, "word_repetition", word_repetitions, WordRepetitionDetail),
    (
        SpeakingQuestionType.PHRASE_REPETITION,
        "phrase_repetition",
        phrase_repetitions,
        PhraseRepetitionDetail,
    ),
    (
        SpeakingQuestionType.PARAGRAPH_REPETITION,
        "paragraph_repetition",
        paragraph_repetitions,
        ParagraphRepetitionDetail,
    ),
    (SpeakingQuestionType.OPEN_PARAGRAPH, "open_paragraph", open_paragraphs, OpenParagraphDetail),
]


def build_registry() -> ContentTypeRegistry:
    registry = ContentTypeRegistry("speaking")

    for question_type, field, repo, schema in _ROW_TYPES:
        registry.register(
            ContentTypeHandler(
                question_type.value,
                loaders=[RowsLoader(field, repo, schema)],
                rule=MinRows(field, 1),
            )
        )
    registry.register(
        ContentTypeHandler(
            SpeakingQuestionType.CONVERSATIONAL_REPETITION.value,
            loaders=[
                SubQuestionLoader(
                    "conversational_repetition",
                    "conversational_repetition_qas",
                    conversational_repetitions,
                    conversational_repetition_qas,
                    ConversationalRepetitionDetail,
                    ConversationalRepetitionQADetail,
                )
            ],
            rule=SubQuestionWithItems(
                "conversational_repetition", "conversational_repetition_qas", min_items=2
            ),
        )
    )
    registry.register(
        ContentTypeHandler(
            SpeakingQuestionType.CONVERSATIONAL_OPEN.value,
            loaders=[
                FirstRowLoader(
                    "conversational_open", conversational_opens, ConversationalOpenDetail
                )
            ],
            rule=Present("conversational_open"),
        )
    )
    return registry


def build_definition() -> FamilyDefinition:
    """Assemble the speaking family definition."""
    conversational_repetition = ChildKind(
        "conversational_repetition", conversational_repetitions, ConversationalRepetitionInput
    )
    kinds = [
        ChildKind("word_repetition", word_repetitions, WordRepetitionInput),
        ChildKind("phrase_repetition", phrase_repetitions, PhraseRepetitionInput),
        ChildKind("paragraph_repetition", paragraph_repetitions, ParagraphRepetitionInput),
        ChildKind("open_paragraph", open_paragraphs, OpenParagraphInput),
        conversational_repetition,
        ChildKind(
            "conversational_repetition_qa",
            conversational_repetition_qas,
            ConversationalRepetitionQAInput,
            parent=conversational_repetition,
        ),
        ChildKind("conversational_open", conversational_opens, ConversationalOpenInput),
    ]

    return FamilyDefinition(
        family=ContentFamily(
            name="speaking",
            key_prefix="speaking_question",
            collection="speaking_questions",
            detail_model=SpeakingQuestionDetail,
            registry=build_registry(),
        ),
        root_repo=questions,
        root_schema=SpeakingQuestionInput,
        child_kinds={kind.name: kind for kind in kinds},
    )
