# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exception hierarchy for content operations.

Exception Hierarchy:
    ContentError (base)
    ├── NotFoundError - root or child entity absent by id
    ├── ContentValidationError - rejected input, raised before any I/O
    ├── ConcurrentUpdateError - root row changed by another writer
    └── SyncError (fluency.core.sync.errors) - detail build and publishing

An empty list of children is never an error; only a lookup by id that
finds nothing raises NotFoundError.
"""

from typing import Any


class ContentError(Exception):
    """Base exception for content operations.

    Attributes:
        message: Human-readable error message.
        details: Additional error context.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(ContentError):
    """Raised when an entity looked up by id does not exist."""

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(
            f"{entity} not found: {entity_id}",
            {"entity": entity, "id": str(entity_id)},
        )
        self.entity = entity
        self.entity_id = entity_id


class ContentValidationError(ContentError):
    """Raised when input is rejected before touching the database.

    Attributes:
        field: Name of the offending field, when there is one.
    """

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message, {"field": field} if field else {})
        self.field = field


class ConcurrentUpdateError(ContentError):
    """Raised when a root update loses an optimistic version check."""

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(
            f"{entity} {entity_id} was modified concurrently",
            {"entity": entity, "id": str(entity_id)},
        )
