# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Content type registry.

Maps each type discriminator of a content family to the loaders that
build its branch and the rule that classifies it. Adding a question type
is a single register() call.

Usage:
    registry = ContentTypeRegistry("listening")
    registry.register(
        ContentTypeHandler(
            "MAP_LABELLING",
            loaders=[RowsLoader("map_labelling", repo, QuestionAnswerRow)],
            rule=MinRows("map_labelling", 2),
        )
    )

    handler = registry.get("MAP_LABELLING")
"""

import logging
from dataclasses import dataclass, field
from typing import Sequence

from fluency.core.sync.completion import CompletionRule
from fluency.core.sync.loaders import BaseBranchLoader

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContentTypeHandler:
    """Loaders and completion rule for one type discriminator.

    Attributes:
        content_type: Type discriminator value (e.g. "CHOICE_ONE").
        loaders: Loaders filling the type's branch fields.
        rule: Completion rule for details of this type.
    """

    content_type: str
    loaders: Sequence[BaseBranchLoader]
    rule: CompletionRule

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(name for loader in self.loaders for name in loader.fields)


@dataclass
class ContentTypeRegistry:
    """Registry of type handlers for one content family.

    Attributes:
        family: Family name used in logs and errors.
        shared_loaders: Loaders run for every type (course lessons).
    """

    family: str
    shared_loaders: Sequence[BaseBranchLoader] = ()
    _handlers: dict[str, ContentTypeHandler] = field(default_factory=dict)

    def register(self, handler: ContentTypeHandler) -> None:
        """Register a handler, replacing any previous one for the same type."""
        if handler.content_type in self._handlers:
            logger.warning(
                "Replacing existing %s handler for type: %s",
                self.family,
                handler.content_type,
            )
        self._handlers[handler.content_type] = handler
        logger.debug("Registered %s type: %s", self.family, handler.content_type)

    def get(self, content_type: str) -> ContentTypeHandler | None:
        return self._handlers.get(content_type)

    def has(self, content_type: str) -> bool:
        return content_type in self._handlers

    def list_content_types(self) -> list[str]:
        return list(self._handlers)

    @property
    def branch_fields(self) -> tuple[str, ...]:
        """Every detail field any loader of this family can fill, in registration order."""
        names: dict[str, None] = {}
        for loader in self.shared_loaders:
            names.update(dict.fromkeys(loader.fields))
        for handler in self._handlers.values():
            names.update(dict.fromkeys(handler.fields))
        return tuple(names)
