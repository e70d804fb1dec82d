# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Qdrant search index infrastructure."""

from fluency.infrastructure.search.qdrant_client import (
    QdrantError,
    QdrantSearchClient,
    build_filter,
)

__all__ = [
    "QdrantSearchClient",
    "QdrantError",
    "build_filter",
]
