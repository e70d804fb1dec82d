# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Listening question schemas."""

from enum import Enum

from pydantic import Field

from fluency.core.sync.detail import ContentDetail
from fluency.domains.content.schemas import (
    AnswerDetail,
    ExplainedSubQuestionDetail,
    InputModel,
    OptionDetail,
    QuestionAnswerRowDetail,
    SubQuestionDetail,
)


class ListeningQuestionType(str, Enum):
    FILL_IN_THE_BLANK = "FILL_IN_THE_BLANK"
    CHOICE_ONE = "CHOICE_ONE"
    CHOICE_MULTI = "CHOICE_MULTI"
    MAP_LABELLING = "MAP_LABELLING"
    MATCHING = "MATCHING"


class ListeningQuestionInput(InputModel):
    """Fields of a listening question."""

    type: ListeningQuestionType
    topic: list[str] = Field(default_factory=list)
    instruction: str = ""
    audio_urls: list[str] = Field(default_factory=list)
    image_urls: list[str] = Field(default_factory=list)
    transcript: str = ""
    max_time: int = Field(default=0, ge=0, description="Time limit in seconds")


class ListeningQuestionDetail(ContentDetail):
    """Listening question with the branch of its type."""

    topic: list[str] = Field(default_factory=list)
    instruction: str = ""
    audio_urls: list[str] = Field(default_factory=list)
    image_urls: list[str] = Field(default_factory=list)
    transcript: str = ""
    max_time: int = 0

    fill_in_the_blank_question: SubQuestionDetail | None = None
    fill_in_the_blank_answers: list[AnswerDetail] | None = None
    choice_one_question: ExplainedSubQuestionDetail | None = None
    choice_one_options: list[OptionDetail] | None = None
    choice_multi_question: ExplainedSubQuestionDetail | None = None
    choice_multi_options: list[OptionDetail] | None = None
    map_labelling: list[QuestionAnswerRowDetail] | None = None
    matching: list[QuestionAnswerRowDetail] | None = None
