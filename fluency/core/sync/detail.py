# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Detail aggregate base model and completion status."""

from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CompletionStatus(str, Enum):
    """Advisory publish-readiness tag stored with cache keys and search documents."""

    COMPLETE = "complete"
    UNCOMPLETE = "uncomplete"

    @classmethod
    def of(cls, is_complete: bool) -> "CompletionStatus":
        return cls.COMPLETE if is_complete else cls.UNCOMPLETE


class DetailModel(BaseModel):
    """Base for detail nodes read straight from ORM rows."""

    model_config = ConfigDict(from_attributes=True)


class ContentDetail(DetailModel):
    """Denormalized tree of a root entity and its type-specific children.

    Subclasses add the root's scalar fields and one optional attribute per
    branch. Only the branch matching ``type`` is ever populated.
    """

    id: UUID = Field(description="Root entity id")
    type: str = Field(description="Type discriminator of the root")
    version: int = Field(ge=1, description="Root version, bumped on every root field update")
