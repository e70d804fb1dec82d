# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Writing question schemas."""

from enum import Enum
from uuid import UUID

from pydantic import Field, model_validator

from fluency.core.sync.detail import ContentDetail, DetailModel
from fluency.domains.content.schemas import InputModel


class WritingQuestionType(str, Enum):
    SENTENCE_COMPLETION = "SENTENCE_COMPLETION"
    ESSAY = "ESSAY"


class GivenPartPosition(str, Enum):
    """Where the given part sits in the sentence to complete."""

    START = "start"
    END = "end"


class WritingQuestionInput(InputModel):
    """Fields of a writing question."""

    type: WritingQuestionType
    topic: list[str] = Field(default_factory=list)
    instruction: str = ""
    image_urls: list[str] = Field(default_factory=list)
    max_time: int = Field(default=0, ge=0, description="Time limit in seconds")


class WordLimitsInput(InputModel):
    """Inputs carrying a word-count range."""

    min_words: int = Field(ge=1)
    max_words: int = Field(ge=1)

    @model_validator(mode="after")
    def check_word_range(self) -> "WordLimitsInput":
        if self.max_words < self.min_words:
            raise ValueError("max_words must not be less than min_words")
        return self


class SentenceCompletionInput(WordLimitsInput):
    example_sentence: str = Field(min_length=1)
    given_part_sentence: str = Field(min_length=1)
    position: GivenPartPosition
    required_words: list[str] = Field(default_factory=list)
    explain: str = ""


class EssayInput(WordLimitsInput):
    essay_type: str = Field(min_length=1, max_length=50)
    required_points: list[str] = Field(default_factory=list)
    sample_essay: str = ""
    explain: str = ""


class SentenceCompletionDetail(DetailModel):
    id: UUID
    example_sentence: str
    given_part_sentence: str
    position: str
    required_words: list[str] = Field(default_factory=list)
    explain: str = ""
    min_words: int
    max_words: int


class EssayDetail(DetailModel):
    id: UUID
    essay_type: str
    required_points: list[str] = Field(default_factory=list)
    min_words: int
    max_words: int
    sample_essay: str = ""
    explain: str = ""


class WritingQuestionDetail(ContentDetail):
    """Writing question with the branch of its type."""

    topic: list[str] = Field(default_factory=list)
    instruction: str = ""
    image_urls: list[str] = Field(default_factory=list)
    max_time: int = 0

    sentence_completion: list[SentenceCompletionDetail] | None = None
    essay: list[EssayDetail] | None = None
