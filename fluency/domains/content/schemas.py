# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Detail nodes and input models shared by the question families.

Detail models mirror stored rows and are built from ORM objects. Input
models validate caller data for creates and updates; the parent id is
passed separately and never part of an input model.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from fluency.core.sync.detail import DetailModel

# =============================================================================
# Detail nodes
# =============================================================================


class SubQuestionDetail(DetailModel):
    id: UUID
    question: str


class ExplainedSubQuestionDetail(DetailModel):
    id: UUID
    question: str
    explain: str = ""


class AnswerDetail(DetailModel):
    id: UUID
    answer: str
    explain: str = ""


class OptionDetail(DetailModel):
    id: UUID
    options: str
    is_correct: bool


class QuestionAnswerRowDetail(DetailModel):
    """Map labelling, matching and true/false rows."""

    id: UUID
    question: str
    answer: str
    explain: str = ""


# =============================================================================
# Inputs
# =============================================================================


class InputModel(BaseModel):
    """Base for caller-supplied values."""

    model_config = ConfigDict(extra="forbid", use_enum_values=True, str_strip_whitespace=True)


class SubQuestionInput(InputModel):
    question: str = Field(min_length=1, description="Question text with blanks")


class ExplainedSubQuestionInput(InputModel):
    question: str = Field(min_length=1, description="Question stem")
    explain: str = Field(default="", description="Explanation shown after answering")


class AnswerInput(InputModel):
    answer: str = Field(min_length=1, description="Accepted answer for the blank")
    explain: str = ""


class OptionInput(InputModel):
    options: str = Field(min_length=1, description="Option text")
    is_correct: bool = False


class QuestionAnswerRowInput(InputModel):
    question: str = Field(min_length=1)
    answer: str = Field(min_length=1)
    explain: str = ""
