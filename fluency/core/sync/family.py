# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Content family descriptor shared by the builder, cache writer and search upserter."""

from dataclasses import dataclass

from fluency.core.sync.detail import ContentDetail
from fluency.core.sync.registry import ContentTypeRegistry


@dataclass(frozen=True)
class ContentFamily:
    """One root table with its type handlers and publishing names.

    Attributes:
        name: Family name ("listening", "course", ...).
        key_prefix: First segment of cache keys.
        collection: Search collection holding the family's documents.
        detail_model: Pydantic model of the family's detail aggregate.
        registry: Type handlers of the family.
    """

    name: str
    key_prefix: str
    collection: str
    detail_model: type[ContentDetail]
    registry: ContentTypeRegistry

    @property
    def content_types(self) -> list[str]:
        return self.registry.list_content_types()
