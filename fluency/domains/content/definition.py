# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Declarative description of a content family for the generic services.

A FamilyDefinition ties together the sync-side ContentFamily (detail model,
type registry, cache prefix, collection) with the write-side pieces: the
root repository and input model, and one ChildKind per child table.
"""

from dataclasses import dataclass, field
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from fluency.core.errors import ContentValidationError
from fluency.core.sync.family import ContentFamily
from fluency.infrastructure.database.repositories import ChildRepository, RootRepository


@dataclass(frozen=True)
class ChildKind:
    """One child table reachable from a root.

    Attributes:
        name: Kind name used by callers ("choice_one_option").
        repo: Repository of the table.
        input_schema: Validates values on create and update.
        parent: Parent kind, or None when rows reference the root directly.
        single_correct: At most one row per parent may have is_correct set.
    """

    name: str
    repo: ChildRepository
    input_schema: type[BaseModel]
    parent: "ChildKind | None" = None
    single_correct: bool = False


@dataclass(frozen=True)
class FamilyDefinition:
    """Everything the generic services need to serve one family.

    Attributes:
        family: Sync-side descriptor.
        root_repo: Repository of the root table.
        root_schema: Input model for root creates and field updates.
        child_kinds: Child kinds by name.
        search_filters: Document fields callers may filter searches on.
    """

    family: ContentFamily
    root_repo: RootRepository
    root_schema: type[BaseModel]
    child_kinds: dict[str, ChildKind] = field(default_factory=dict)
    search_filters: frozenset[str] = frozenset({"id", "type", "status"})

    @property
    def name(self) -> str:
        return self.family.name

    def kind(self, name: str) -> ChildKind:
        """Look up a child kind.

        Raises:
            ContentValidationError: If the family has no such kind.
        """
        try:
            return self.child_kinds[name]
        except KeyError:
            raise ContentValidationError(
                f"Unknown {self.name} child kind: {name}", field="kind"
            ) from None


def validate_input(schema: type[BaseModel], values: dict[str, Any]) -> dict[str, Any]:
    """Validate a full set of values against an input model.

    Returns:
        Validated values ready for the ORM.

    Raises:
        ContentValidationError: If any value is missing, unknown or invalid.
    """
    try:
        return schema.model_validate(values).model_dump()
    except PydanticValidationError as e:
        error = e.errors()[0]
        field_name = ".".join(str(p) for p in error["loc"]) or None
        raise ContentValidationError(
            f"Invalid {field_name or 'input'}: {error['msg']}", field=field_name
        ) from e


def validate_fields(schema: type[BaseModel], values: dict[str, Any]) -> dict[str, Any]:
    """Validate a partial update against the fields of an input model.

    Each value is checked against its field's type and constraints, under the
    model's own config, without requiring the other fields.

    Returns:
        Validated values ready for the ORM.

    Raises:
        ContentValidationError: If no field is given, a field is unknown or a
            value is invalid.
    """
    if not values:
        raise ContentValidationError("No fields to update")

    # extra applies to the model only
    config = ConfigDict(**{k: v for k, v in schema.model_config.items() if k != "extra"})
    validated: dict[str, Any] = {}
    for name, value in values.items():
        model_field = schema.model_fields.get(name)
        if model_field is None:
            raise ContentValidationError(f"Invalid field name: {name}", field=name)

        annotation = model_field.annotation
        if model_field.metadata:
            annotation = Annotated[annotation, *model_field.metadata]
        adapter = TypeAdapter(annotation, config=config)
        try:
            validated[name] = adapter.validate_python(value)
        except PydanticValidationError as e:
            raise ContentValidationError(
                f"Invalid {name}: {e.errors()[0]['msg']}", field=name
            ) from e

    return validated
