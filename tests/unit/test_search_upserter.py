# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for search document mapping and publishing."""

import json
from uuid import uuid4

import pytest

from fluency.core.sync import CompletionStatus, SearchUpserter
from fluency.domains import course, listening
from fluency.domains.content.schemas import ExplainedSubQuestionDetail, OptionDetail
from fluency.domains.course.schemas import CourseDetail, LessonDetail
from fluency.domains.listening.schemas import ListeningQuestionDetail


@pytest.fixture
def upserter(search_index) -> SearchUpserter:
    return SearchUpserter(search_index, listening.build_definition().family)


def _choice_one(version: int = 1) -> ListeningQuestionDetail:
    return ListeningQuestionDetail(
        id=uuid4(),
        type="CHOICE_ONE",
        version=version,
        topic=["travel"],
        choice_one_question=ExplainedSubQuestionDetail(id=uuid4(), question="Where is the bank?"),
        choice_one_options=[
            OptionDetail(id=uuid4(), options="Left", is_correct=True),
            OptionDetail(id=uuid4(), options="Right", is_correct=False),
        ],
    )


class TestToDocument:
    """Tests for detail flattening."""

    def test_branches_are_json_strings(self, upserter) -> None:
        detail = _choice_one()

        document = upserter.to_document(detail, CompletionStatus.COMPLETE)

        options = json.loads(document["choice_one_options"])
        assert [o["options"] for o in options] == ["Left", "Right"]
        assert json.loads(document["choice_one_question"])["question"] == "Where is the bank?"

    def test_unpopulated_branches_are_empty_strings(self, upserter) -> None:
        document = upserter.to_document(_choice_one(), CompletionStatus.COMPLETE)

        for name in ("fill_in_the_blank_question", "map_labelling", "matching", "choice_multi_options"):
            assert document[name] == ""

    def test_root_fields_stay_native(self, upserter) -> None:
        detail = _choice_one(version=3)

        document = upserter.to_document(detail, CompletionStatus.UNCOMPLETE)

        assert document["id"] == str(detail.id)
        assert document["type"] == "CHOICE_ONE"
        assert document["version"] == 3
        assert document["topic"] == ["travel"]
        assert document["status"] == "uncomplete"

    def test_course_lessons_are_encoded(self) -> None:
        upserter = SearchUpserter(None, course.build_definition().family)
        detail = CourseDetail(
            id=uuid4(),
            type="OTHER",
            version=1,
            title="Speaking club",
            lessons=[LessonDetail(id=uuid4(), sequence=1, title="Introductions")],
        )

        document = upserter.to_document(detail, CompletionStatus.UNCOMPLETE)

        assert json.loads(document["lessons"])[0]["title"] == "Introductions"
        assert document["course_book"] == ""
        assert document["title"] == "Speaking club"


class TestPublishing:
    """Tests for writes to the search index."""

    async def test_upsert_creates_collection_with_keyword_indexes(self, upserter, search_index) -> None:
        await upserter.upsert(_choice_one(), CompletionStatus.COMPLETE)

        assert search_index.keyword_fields["listening_questions"] == ["id", "type", "status"]

    async def test_upsert_is_idempotent_by_root_id(self, upserter, search_index) -> None:
        detail = _choice_one()

        await upserter.upsert(detail, CompletionStatus.UNCOMPLETE)
        await upserter.upsert(detail, CompletionStatus.COMPLETE)

        documents = search_index.documents("listening_questions")
        assert list(documents) == [str(detail.id)]
        assert documents[str(detail.id)]["status"] == "complete"

    async def test_delete(self, upserter, search_index) -> None:
        detail = _choice_one()
        await upserter.upsert(detail, CompletionStatus.COMPLETE)

        await upserter.delete(detail.id)

        assert search_index.documents("listening_questions") == {}

    async def test_delete_missing_document_is_not_an_error(self, upserter) -> None:
        await upserter.delete(uuid4())

    async def test_search_filters_and_counts(self, upserter) -> None:
        complete, incomplete = _choice_one(), _choice_one()
        await upserter.upsert(complete, CompletionStatus.COMPLETE)
        await upserter.upsert(incomplete, CompletionStatus.UNCOMPLETE)

        documents, next_offset, total = await upserter.search({"status": "complete"})

        assert [d["id"] for d in documents] == [str(complete.id)]
        assert next_offset is None
        assert total == 1

    async def test_search_pages(self, upserter) -> None:
        for _ in range(3):
            await upserter.upsert(_choice_one(), CompletionStatus.COMPLETE)

        first, next_offset, total = await upserter.search({"type": "CHOICE_ONE"}, limit=2)
        second, last_offset, _ = await upserter.search({"type": "CHOICE_ONE"}, limit=2, offset=next_offset)

        assert total == 3
        assert len(first) == 2
        assert len(second) == 1
        assert last_offset is None
