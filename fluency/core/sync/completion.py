# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Completion classification of detail aggregates.

Every content type registers one CompletionRule. The classifier is a pure
function of the detail: the result only tags cache keys and search
documents and is never enforced when writing.

Counts in the rules are minimums.
"""

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from fluency.core.sync.detail import ContentDetail

if TYPE_CHECKING:
    from fluency.core.sync.registry import ContentTypeRegistry

logger = logging.getLogger(__name__)


class CompletionRule(ABC):
    """Predicate deciding whether a detail is ready to publish."""

    @abstractmethod
    def is_satisfied(self, detail: ContentDetail) -> bool:
        """Check the rule against a detail."""


def _items(detail: ContentDetail, field: str) -> list[Any]:
    return getattr(detail, field, None) or []


class SubQuestionWithItems(CompletionRule):
    """Sub-question present with enough answers/options.

    Args:
        question_field: Detail attribute holding the sub-question.
        items_field: Detail attribute holding its answers or options.
        min_items: Minimum number of items.
        min_correct: Minimum number of items with is_correct set.
        min_incorrect: Minimum number of items with is_correct unset.
    """

    def __init__(
        self,
        question_field: str,
        items_field: str,
        min_items: int,
        min_correct: int = 0,
        min_incorrect: int = 0,
    ) -> None:
        self.question_field = question_field
        self.items_field = items_field
        self.min_items = min_items
        self.min_correct = min_correct
        self.min_incorrect = min_incorrect

    def is_satisfied(self, detail: ContentDetail) -> bool:
        if getattr(detail, self.question_field, None) is None:
            return False

        items = _items(detail, self.items_field)
        if len(items) < self.min_items:
            return False

        if self.min_correct or self.min_incorrect:
            correct = sum(1 for item in items if item.is_correct)
            if correct < self.min_correct or len(items) - correct < self.min_incorrect:
                return False
        return True


class MinRows(CompletionRule):
    """At least min_rows entries in a list attribute."""

    def __init__(self, field: str, min_rows: int) -> None:
        self.field = field
        self.min_rows = min_rows

    def is_satisfied(self, detail: ContentDetail) -> bool:
        return len(_items(detail, self.field)) >= self.min_rows


class Present(CompletionRule):
    """A single-row attribute is populated."""

    def __init__(self, field: str) -> None:
        self.field = field

    def is_satisfied(self, detail: ContentDetail) -> bool:
        return getattr(detail, self.field, None) is not None


class AllOf(CompletionRule):
    """Every nested rule holds."""

    def __init__(self, *rules: CompletionRule) -> None:
        self.rules = rules

    def is_satisfied(self, detail: ContentDetail) -> bool:
        return all(rule.is_satisfied(detail) for rule in self.rules)


class CompletionClassifier:
    """Decides complete/uncomplete using the rules in a type registry.

    A type without a registered handler is always incomplete.
    """

    def __init__(self, registry: "ContentTypeRegistry") -> None:
        self.registry = registry

    def is_complete(self, detail: ContentDetail) -> bool:
        handler = self.registry.get(detail.type)
        if handler is None:
            logger.debug(
                "No completion rule for %s type %s",
                self.registry.family,
                detail.type,
            )
            return False
        return handler.rule.is_satisfied(detail)
