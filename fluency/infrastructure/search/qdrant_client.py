# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Qdrant client used as the content document index.

Content is matched by exact payload filters rather than by similarity, so
collections are created without vectors and every point carries the
search document as its payload. Point ids are the root entity ids, which
makes an upsert replace the previous document of the same root.

Implements the SearchIndex interface of the sync engine.

Example:
    qdrant = QdrantSearchClient(settings)
    await qdrant.connect()
    await qdrant.ensure_collection("listening_questions", ["type", "status"])
    await qdrant.upsert_document("listening_questions", question_id, document)
    documents, next_offset = await qdrant.scroll(
        "listening_questions", must={"status": "complete"}, limit=20
    )
"""

from typing import TYPE_CHECKING, Any, Optional

from qdrant_client import AsyncQdrantClient
from qdrant_client.http import models
from qdrant_client.http.exceptions import ResponseHandlingException, UnexpectedResponse

if TYPE_CHECKING:
    from fluency.core.config.settings import Settings

QDRANT_ERRORS = (UnexpectedResponse, ResponseHandlingException)


class QdrantError(Exception):
    """Exception raised for Qdrant operation failures.

    Attributes:
        message: Human-readable error description.
        original_error: The underlying Qdrant error.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


def build_filter(must: dict[str, Any] | None) -> models.Filter | None:
    """Build an all-must-match payload filter.

    List values match any of their elements.
    """
    if not must:
        return None

    conditions = []
    for key, value in must.items():
        if isinstance(value, (list, tuple, set)):
            match = models.MatchAny(any=list(value))
        else:
            match = models.MatchValue(value=value)
        conditions.append(models.FieldCondition(key=key, match=match))
    return models.Filter(must=conditions)


class QdrantSearchClient:
    """Async Qdrant client for payload-only document collections.

    Attributes:
        settings: Application settings containing Qdrant configuration.
    """

    def __init__(self, settings: "Settings") -> None:
        self._settings = settings
        self._client: Optional[AsyncQdrantClient] = None

    async def connect(self) -> None:
        """Create the Qdrant client connection.

        Raises:
            QdrantError: If connection fails.
        """
        qdrant_settings = self._settings.qdrant
        api_key = (
            qdrant_settings.api_key.get_secret_value()
            if qdrant_settings.api_key
            else None
        )

        try:
            self._client = AsyncQdrantClient(
                host=qdrant_settings.host,
                port=qdrant_settings.http_port,
                grpc_port=qdrant_settings.grpc_port,
                api_key=api_key,
                prefer_grpc=qdrant_settings.prefer_grpc,
                timeout=qdrant_settings.timeout,
            )
            await self._client.get_collections()
        except Exception as e:
            raise QdrantError("Failed to connect to Qdrant", e) from e

    async def close(self) -> None:
        """Close the Qdrant client connection."""
        if self._client is not None:
            await self._client.close()
            self._client = None

    def _ensure_connected(self) -> AsyncQdrantClient:
        if self._client is None:
            raise QdrantError("Qdrant client not connected. Call connect() first.")
        return self._client

    def collection_name(self, collection: str) -> str:
        """Apply the configured collection prefix."""
        return f"{self._settings.qdrant.collection_prefix}{collection}"

    # ========== Collection management ==========

    async def ensure_collection(self, collection: str, keyword_fields: list[str]) -> None:
        """Create a vectorless collection with keyword indexes if it is missing.

        Args:
            collection: Base collection name.
            keyword_fields: Payload fields to index for exact-match filters.

        Raises:
            QdrantError: If creation fails.
        """
        client = self._ensure_connected()
        name = self.collection_name(collection)

        try:
            if await client.collection_exists(name):
                return
            await client.create_collection(collection_name=name, vectors_config={})
            for field_name in keyword_fields:
                await client.create_payload_index(
                    collection_name=name,
                    field_name=field_name,
                    field_schema=models.PayloadSchemaType.KEYWORD,
                )
        except QDRANT_ERRORS as e:
            raise QdrantError(f"Failed to create collection: {name}", e) from e

    # ========== Document operations ==========

    async def upsert_document(
        self,
        collection: str,
        document_id: str,
        document: dict[str, Any],
    ) -> None:
        """Insert or replace the document with this id.

        Raises:
            QdrantError: If upsert fails.
        """
        client = self._ensure_connected()
        name = self.collection_name(collection)

        try:
            await client.upsert(
                collection_name=name,
                points=[models.PointStruct(id=document_id, vector={}, payload=document)],
            )
        except QDRANT_ERRORS as e:
            raise QdrantError(f"Failed to upsert {document_id} to: {name}", e) from e

    async def delete_document(self, collection: str, document_id: str) -> None:
        """Delete the document with this id. Deleting a missing id is not an error.

        Raises:
            QdrantError: If deletion fails.
        """
        client = self._ensure_connected()
        name = self.collection_name(collection)

        try:
            await client.delete(
                collection_name=name,
                points_selector=models.PointIdsList(points=[document_id]),
            )
        except QDRANT_ERRORS as e:
            raise QdrantError(f"Failed to delete {document_id} from: {name}", e) from e

    # ========== Query operations ==========

    async def scroll(
        self,
        collection: str,
        must: dict[str, Any] | None = None,
        limit: int = 20,
        offset: str | None = None,
    ) -> tuple[list[dict[str, Any]], str | None]:
        """Page through documents matching exact-value filters.

        Args:
            collection: Base collection name.
            must: Field/value pairs that must all match.
            limit: Page size.
            offset: Point id to continue from.

        Returns:
            Tuple of (documents, id of the next page start or None).

        Raises:
            QdrantError: If the query fails.
        """
        client = self._ensure_connected()
        name = self.collection_name(collection)

        try:
            points, next_offset = await client.scroll(
                collection_name=name,
                scroll_filter=build_filter(must),
                limit=limit,
                offset=offset,
                with_payload=True,
                with_vectors=False,
            )
        except QDRANT_ERRORS as e:
            raise QdrantError(f"Failed to scroll: {name}", e) from e

        documents = [point.payload or {} for point in points]
        return documents, str(next_offset) if next_offset is not None else None

    async def count(self, collection: str, must: dict[str, Any] | None = None) -> int:
        """Count documents matching exact-value filters.

        Raises:
            QdrantError: If the query fails.
        """
        client = self._ensure_connected()
        name = self.collection_name(collection)

        try:
            result = await client.count(
                collection_name=name,
                count_filter=build_filter(must),
                exact=True,
            )
        except QDRANT_ERRORS as e:
            raise QdrantError(f"Failed to count: {name}", e) from e
        return result.count

    # ========== Health check ==========

    async def ping(self) -> bool:
        """Check if Qdrant is reachable."""
        try:
            client = self._ensure_connected()
            await client.get_collections()
            return True
        except (QdrantError, *QDRANT_ERRORS):
            return False
