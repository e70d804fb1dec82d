# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Errors raised by the detail build and publish pipeline."""

from typing import Any

from fluency.core.errors import ContentError


class SyncError(ContentError):
    """Base exception for detail build and publishing."""


class UnknownContentTypeError(SyncError):
    """Raised when a root's type has no registered handler."""

    def __init__(self, family: str, content_type: str, root_id: Any = None):
        super().__init__(
            f"Unknown {family} question type: {content_type}",
            {"family": family, "type": content_type, "root_id": str(root_id)},
        )
        self.family = family
        self.content_type = content_type


class DetailBuildError(SyncError):
    """Raised when loading the children of a root fails."""

    def __init__(
        self,
        family: str,
        root_id: Any,
        content_type: str,
        original_error: Exception | None = None,
    ):
        super().__init__(
            f"Failed to build {family} detail for {root_id}",
            {"family": family, "root_id": str(root_id), "type": content_type},
        )
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


class PublishError(SyncError):
    """Raised when a root-level write was committed but cache or search publishing failed.

    Attributes:
        warnings: The publish failures collected by the updator.
    """

    def __init__(self, root_id: Any, warnings: list):
        operations = ", ".join(w.operation for w in warnings)
        super().__init__(
            f"Committed {root_id} but publishing failed ({operations})",
            {"root_id": str(root_id), "operations": [w.operation for w in warnings]},
        )
        self.warnings = warnings
