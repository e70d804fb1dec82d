# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Grammar question schemas."""

from enum import Enum
from uuid import UUID

from pydantic import Field

from fluency.core.sync.detail import ContentDetail, DetailModel
from fluency.domains.content.schemas import (
    AnswerDetail,
    ExplainedSubQuestionDetail,
    InputModel,
    OptionDetail,
    SubQuestionDetail,
)


class GrammarQuestionType(str, Enum):
    FILL_IN_THE_BLANK = "FILL_IN_THE_BLANK"
    CHOICE_ONE = "CHOICE_ONE"
    ERROR_IDENTIFICATION = "ERROR_IDENTIFICATION"
    SENTENCE_TRANSFORMATION = "SENTENCE_TRANSFORMATION"


class GrammarQuestionInput(InputModel):
    """Fields of a grammar question."""

    type: GrammarQuestionType
    topic: list[str] = Field(default_factory=list)
    instruction: str = ""
    image_urls: list[str] = Field(default_factory=list)
    max_time: int = Field(default=0, ge=0, description="Time limit in seconds")


class ErrorIdentificationInput(InputModel):
    error_sentence: str = Field(min_length=1)
    error_word: str = Field(min_length=1, max_length=255)
    correct_word: str = Field(min_length=1, max_length=255)
    explain: str = ""


class SentenceTransformationInput(InputModel):
    original_sentence: str = Field(min_length=1)
    beginning_word: str = Field(default="", max_length=255)
    example_correct_sentence: str = Field(min_length=1)
    explain: str = ""


class ErrorIdentificationDetail(DetailModel):
    id: UUID
    error_sentence: str
    error_word: str
    correct_word: str
    explain: str = ""


class SentenceTransformationDetail(DetailModel):
    id: UUID
    original_sentence: str
    beginning_word: str = ""
    example_correct_sentence: str
    explain: str = ""


class GrammarQuestionDetail(ContentDetail):
    """Grammar question with the branch of its type."""

    topic: list[str] = Field(default_factory=list)
    instruction: str = ""
    image_urls: list[str] = Field(default_factory=list)
    max_time: int = 0

    fill_in_the_blank_question: SubQuestionDetail | None = None
    fill_in_the_blank_answers: list[AnswerDetail] | None = None
    choice_one_question: ExplainedSubQuestionDetail | None = None
    choice_one_options: list[OptionDetail] | None = None
    error_identification: ErrorIdentificationDetail | None = None
    sentence_transformation: SentenceTransformationDetail | None = None
