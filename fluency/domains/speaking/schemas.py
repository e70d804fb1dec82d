# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Speaking question schemas."""

from enum import Enum
from uuid import UUID

from pydantic import Field

from fluency.core.sync.detail import ContentDetail, DetailModel
from fluency.domains.content.schemas import InputModel


class SpeakingQuestionType(str, Enum):
    WORD_REPETITION = "WORD_REPETITION"
    PHRASE_REPETITION = "PHRASE_REPETITION"
    PARAGRAPH_REPETITION = "PARAGRAPH_REPETITION"
    OPEN_PARAGRAPH = "OPEN_PARAGRAPH"
    CONVERSATIONAL_REPETITION = "CONVERSATIONAL_REPETITION"
    CONVERSATIONAL_OPEN = "CONVERSATIONAL_OPEN"


class SpeakingQuestionInput(InputModel):
    """Fields of a speaking question."""

    type: SpeakingQuestionType
    topic: list[str] = Field(default_factory=list)
    instruction: str = ""
    image_urls: list[str] = Field(default_factory=list)
    max_time: int = Field(default=0, ge=0, description="Time limit in seconds")


# =============================================================================
# Inputs
# =============================================================================


class WordRepetitionInput(InputModel):
    word: str = Field(min_length=1)
    mean: str = Field(default="", description="Meaning in the learner's language")


class PhraseRepetitionInput(InputModel):
    phrase: str = Field(min_length=1)
    mean: str = ""


class ParagraphRepetitionInput(InputModel):
    paragraph: str = Field(min_length=1)
    mean: str = ""


class OpenParagraphInput(InputModel):
    question: str = Field(min_length=1)
    example_passage: str = ""
    mean_of_example_passage: str = ""


class ConversationalRepetitionInput(InputModel):
    title: str = Field(min_length=1)
    overview: str = ""


class ConversationalRepetitionQAInput(InputModel):
    question: str = Field(min_length=1)
    answer: str = Field(min_length=1)
    mean_of_question: str = ""
    mean_of_answer: str = ""
    explain: str = ""


class ConversationalOpenInput(InputModel):
    title: str = Field(min_length=1)
    overview: str = ""
    example_conversation: str = ""


# =============================================================================
# Detail nodes
# =============================================================================


class WordRepetitionDetail(DetailModel):
    id: UUID
    word: str
    mean: str = ""


class PhraseRepetitionDetail(DetailModel):
    id: UUID
    phrase: str
    mean: str = ""


class ParagraphRepetitionDetail(DetailModel):
    id: UUID
    paragraph: str
    mean: str = ""


class OpenParagraphDetail(DetailModel):
    id: UUID
    question: str
    example_passage: str = ""
    mean_of_example_passage: str = ""


class ConversationalRepetitionDetail(DetailModel):
    id: UUID
    title: str
    overview: str = ""


class ConversationalRepetitionQADetail(DetailModel):
    id: UUID
    question: str
    answer: str
    mean_of_question: str = ""
    mean_of_answer: str = ""
    explain: str = ""


class ConversationalOpenDetail(DetailModel):
    id: UUID
    title: str
    overview: str = ""
    example_conversation: str = ""


class SpeakingQuestionDetail(ContentDetail):
    """Speaking question with the branch of its type."""

    topic: list[str] = Field(default_factory=list)
    instruction: str = ""
    image_urls: list[str] = Field(default_factory=list)
    max_time: int = 0

    word_repetition: list[WordRepetitionDetail] | None = None
    phrase_repetition: list[PhraseRepetitionDetail] | None = None
    paragraph_repetition: list[ParagraphRepetitionDetail] | None = None
    open_paragraph: list[OpenParagraphDetail] | None = None
    conversational_repetition: ConversationalRepetitionDetail | None = None
    conversational_repetition_qas: list[ConversationalRepetitionQADetail] | None = None
    conversational_open: ConversationalOpenDetail | None = None
