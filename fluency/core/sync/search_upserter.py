# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Search document mapping and publishing.

A detail is flattened into one document per root: scalar root fields stay
native, every branch field of the family becomes a JSON string ("" when
the branch is not populated) and a ``status`` field is added. Keeping
branches as strings gives every type of a family the same index schema.

Example document for a CHOICE_ONE listening question:

    {
        "id": "7f3c...",
        "type": "CHOICE_ONE",
        "topic": ["travel"],
        ...
        "version": 2,
        "status": "complete",
        "choice_one_question": "{\"id\": ..., \"question\": ...}",
        "choice_one_options": "[{...}, {...}]",
        "fill_in_the_blank_question": "",
        ...
    }
"""

import json
import logging
from typing import Any
from uuid import UUID

from fluency.core.sync.detail import CompletionStatus, ContentDetail
from fluency.core.sync.family import ContentFamily
from fluency.core.sync.interfaces import SearchIndex

logger = logging.getLogger(__name__)

KEYWORD_FIELDS = ["id", "type", "status"]


def to_document(
    detail: ContentDetail,
    status: CompletionStatus,
    branch_fields: tuple[str, ...],
) -> dict[str, Any]:
    """Flatten a detail into a search document.

    Args:
        detail: Detail aggregate.
        status: Completion status of the detail.
        branch_fields: Fields encoded as JSON strings.

    Returns:
        Flat document.
    """
    data = detail.model_dump(mode="json")
    document = {name: value for name, value in data.items() if name not in branch_fields}
    for name in branch_fields:
        value = data.get(name)
        document[name] = "" if value is None else json.dumps(value, ensure_ascii=False)
    document["status"] = status.value
    return document


class SearchUpserter:
    """Publishes detail documents of one content family.

    Attributes:
        family: The content family.
    """

    def __init__(self, index: SearchIndex, family: ContentFamily) -> None:
        self._index = index
        self.family = family
        self._collection_ready = False

    @property
    def collection(self) -> str:
        return self.family.collection

    async def ensure_collection(self) -> None:
        """Create the family's collection on first use."""
        if self._collection_ready:
            return
        await self._index.ensure_collection(self.collection, KEYWORD_FIELDS)
        self._collection_ready = True

    def to_document(self, detail: ContentDetail, status: CompletionStatus) -> dict[str, Any]:
        return to_document(detail, status, self.family.registry.branch_fields)

    async def upsert(self, detail: ContentDetail, status: CompletionStatus) -> None:
        """Write the document of a detail, replacing any previous one for the root."""
        await self.ensure_collection()
        await self._index.upsert_document(
            self.collection,
            str(detail.id),
            self.to_document(detail, status),
        )
        logger.debug(
            "Indexed %s %s as %s (v%d)",
            self.family.name,
            detail.id,
            status.value,
            detail.version,
        )

    async def delete(self, root_id: UUID | str) -> None:
        await self.ensure_collection()
        await self._index.delete_document(self.collection, str(root_id))

    async def search(
        self,
        filters: dict[str, Any] | None = None,
        limit: int = 20,
        offset: str | None = None,
    ) -> tuple[list[dict[str, Any]], str | None, int]:
        """Query documents by exact-match filters.

        Args:
            filters: Field/value pairs that must all match (e.g. type, status).
            limit: Maximum number of documents.
            offset: Continuation token from a previous page.

        Returns:
            Tuple of (documents, next page token, total matching).
        """
        await self.ensure_collection()
        documents, next_offset = await self._index.scroll(
            self.collection, must=filters, limit=limit, offset=offset
        )
        total = await self._index.count(self.collection, must=filters)
        return documents, next_offset, total
