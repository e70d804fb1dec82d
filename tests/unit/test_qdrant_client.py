# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the Qdrant document index client."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from qdrant_client.http import models
from qdrant_client.http.exceptions import ResponseHandlingException

from fluency.core.config.settings import QdrantSettings
from fluency.infrastructure.search import QdrantError, QdrantSearchClient, build_filter


@pytest.fixture
def mock_qdrant() -> MagicMock:
    client = MagicMock()
    for name in (
        "collection_exists",
        "create_collection",
        "create_payload_index",
        "upsert",
        "delete",
        "scroll",
        "count",
        "get_collections",
        "close",
    ):
        setattr(client, name, AsyncMock())
    return client


@pytest.fixture
def search_client(settings, mock_qdrant) -> QdrantSearchClient:
    client = QdrantSearchClient(settings)
    client._client = mock_qdrant
    return client


class TestBuildFilter:
    """Tests for payload filter construction."""

    def test_empty_is_no_filter(self) -> None:
        assert build_filter(None) is None
        assert build_filter({}) is None

    def test_scalar_and_list_values(self) -> None:
        result = build_filter({"status": "complete", "type": ["MATCHING", "CHOICE_ONE"]})

        status, type_ = result.must
        assert status.key == "status"
        assert status.match == models.MatchValue(value="complete")
        assert type_.match == models.MatchAny(any=["MATCHING", "CHOICE_ONE"])


class TestCollections:
    """Tests for collection management."""

    def test_collection_prefix(self, settings) -> None:
        settings.qdrant = QdrantSettings(collection_prefix="staging_")

        assert QdrantSearchClient(settings).collection_name("courses") == "staging_courses"

    async def test_existing_collection_is_left_alone(self, search_client, mock_qdrant) -> None:
        mock_qdrant.collection_exists.return_value = True

        await search_client.ensure_collection("courses", ["id", "type", "status"])

        mock_qdrant.create_collection.assert_not_awaited()

    async def test_creates_collection_with_keyword_indexes(self, search_client, mock_qdrant) -> None:
        mock_qdrant.collection_exists.return_value = False

        await search_client.ensure_collection("courses", ["id", "type", "status"])

        mock_qdrant.create_collection.assert_awaited_once_with(
            collection_name="courses", vectors_config={}
        )
        indexed = [c.kwargs["field_name"] for c in mock_qdrant.create_payload_index.await_args_list]
        assert indexed == ["id", "type", "status"]


class TestDocuments:
    """Tests for document operations."""

    async def test_upsert_uses_root_id_as_point_id(self, search_client, mock_qdrant) -> None:
        document_id = str(uuid4())

        await search_client.upsert_document("courses", document_id, {"id": document_id})

        point = mock_qdrant.upsert.await_args.kwargs["points"][0]
        assert point.id == document_id
        assert point.payload == {"id": document_id}

    async def test_delete_by_id(self, search_client, mock_qdrant) -> None:
        document_id = str(uuid4())

        await search_client.delete_document("courses", document_id)

        selector = mock_qdrant.delete.await_args.kwargs["points_selector"]
        assert selector.points == [document_id]

    async def test_scroll_returns_payloads_and_next_offset(self, search_client, mock_qdrant) -> None:
        next_id = uuid4()
        mock_qdrant.scroll.return_value = (
            [SimpleNamespace(payload={"id": "a"}), SimpleNamespace(payload=None)],
            next_id,
        )

        documents, offset = await search_client.scroll("courses", must={"status": "complete"})

        assert documents == [{"id": "a"}, {}]
        assert offset == str(next_id)

    async def test_scroll_last_page(self, search_client, mock_qdrant) -> None:
        mock_qdrant.scroll.return_value = ([], None)

        assert await search_client.scroll("courses") == ([], None)

    async def test_count(self, search_client, mock_qdrant) -> None:
        mock_qdrant.count.return_value = SimpleNamespace(count=7)

        assert await search_client.count("courses", must={"type": "BOOK"}) == 7
        assert mock_qdrant.count.await_args.kwargs["exact"] is True


class TestQdrantErrors:
    """Tests for error wrapping."""

    async def test_driver_errors_are_wrapped(self, search_client, mock_qdrant) -> None:
        mock_qdrant.upsert.side_effect = ResponseHandlingException(Exception("timeout"))

        with pytest.raises(QdrantError) as exc_info:
            await search_client.upsert_document("courses", str(uuid4()), {})

        assert "Failed to upsert" in str(exc_info.value)

    async def test_not_connected(self, settings) -> None:
        with pytest.raises(QdrantError):
            await QdrantSearchClient(settings).count("courses")

    async def test_ping(self, search_client, mock_qdrant, settings) -> None:
        assert await search_client.ping() is True
        assert await QdrantSearchClient(settings).ping() is False
