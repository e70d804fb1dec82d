# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the root and child content services.

Services run against a temporary SQLite database with in-memory cache and
search backends.
"""

from uuid import uuid4

import pytest
from sqlalchemy import update

from fluency.core.errors import ConcurrentUpdateError, ContentValidationError, NotFoundError
from fluency.core.sync import CompletionStatus, PublishError
from fluency.infrastructure.database import session_scope
from fluency.infrastructure.database.models import ListeningQuestion


@pytest.fixture
def roots(container):
    return container.roots("listening")


@pytest.fixture
def children(container):
    return container.children("listening")


def _keys(cache_store, root_id) -> list[str]:
    return sorted(key for key in cache_store.data if f":{root_id}:" in key)


async def _choice_one(roots, children):
    detail = await roots.create({"type": "CHOICE_ONE", "instruction": "Listen and choose"})
    question = await children.create("choice_one_question", detail.id, {"question": "Where is the bank?"})
    return detail, question


class TestChoiceOneLifecycle:
    """Completion transitions of a CHOICE_ONE question."""

    async def test_single_correct_option_is_uncomplete(self, roots, children, cache_store) -> None:
        detail, question = await _choice_one(roots, children)

        await children.create("choice_one_option", question.id, {"options": "Left", "is_correct": True})

        assert await roots.get_status(detail.id) == CompletionStatus.UNCOMPLETE
        assert _keys(cache_store, detail.id) == [f"listening_question:{detail.id}:uncomplete:1"]

    async def test_adding_incorrect_option_completes(self, roots, children, cache_store, search_index) -> None:
        """Test the key moves to complete while the version stays at 1."""
        detail, question = await _choice_one(roots, children)
        await children.create("choice_one_option", question.id, {"options": "Left", "is_correct": True})

        await children.create("choice_one_option", question.id, {"options": "Right", "is_correct": False})

        assert _keys(cache_store, detail.id) == [f"listening_question:{detail.id}:complete:1"]
        document = search_index.documents("listening_questions")[str(detail.id)]
        assert document["status"] == "complete"
        assert document["version"] == 1

    async def test_deleting_correct_option_reverts(self, roots, children, cache_store) -> None:
        detail, question = await _choice_one(roots, children)
        correct = await children.create("choice_one_option", question.id, {"options": "Left", "is_correct": True})
        await children.create("choice_one_option", question.id, {"options": "Right", "is_correct": False})

        await children.delete("choice_one_option", correct.id)

        assert _keys(cache_store, detail.id) == [f"listening_question:{detail.id}:uncomplete:1"]
        cached = await roots.get_detail(detail.id)
        assert [o.options for o in cached.choice_one_options] == ["Right"]

    async def test_new_correct_option_clears_previous(self, roots, children) -> None:
        _, question = await _choice_one(roots, children)
        first = await children.create("choice_one_option", question.id, {"options": "Left", "is_correct": True})

        await children.create("choice_one_option", question.id, {"options": "Right", "is_correct": True})

        assert (await children.get("choice_one_option", first.id)).is_correct is False

    async def test_update_to_correct_clears_previous(self, roots, children) -> None:
        _, question = await _choice_one(roots, children)
        first = await children.create("choice_one_option", question.id, {"options": "Left", "is_correct": True})
        second = await children.create("choice_one_option", question.id, {"options": "Right"})

        await children.update("choice_one_option", second.id, {"is_correct": True})

        options = {o.id: o.is_correct for o in await children.list("choice_one_option", question.id)}
        assert options == {first.id: False, second.id: True}

    async def test_choice_multi_keeps_several_correct(self, roots, children) -> None:
        detail = await roots.create({"type": "CHOICE_MULTI"})
        question = await children.create("choice_multi_question", detail.id, {"question": "Pick two"})
        first = await children.create("choice_multi_option", question.id, {"options": "A", "is_correct": True})

        await children.create("choice_multi_option", question.id, {"options": "B", "is_correct": True})

        assert (await children.get("choice_multi_option", first.id)).is_correct is True


class TestRootWrites:
    """Tests for root creates, updates and deletes."""

    async def test_create_starts_at_version_one(self, roots, cache_store, search_index) -> None:
        detail = await roots.create({"type": "MAP_LABELLING", "topic": ["campus"]})

        assert detail.version == 1
        assert detail.map_labelling == []
        assert _keys(cache_store, detail.id) == [f"listening_question:{detail.id}:uncomplete:1"]
        assert str(detail.id) in search_index.documents("listening_questions")

    async def test_create_rejects_unknown_type(self, roots) -> None:
        with pytest.raises(ContentValidationError):
            await roots.create({"type": "SPEAKING"})

    async def test_create_rejects_unknown_field(self, roots) -> None:
        with pytest.raises(ContentValidationError) as exc_info:
            await roots.create({"type": "MATCHING", "colour": "red"})

        assert exc_info.value.field == "colour"

    async def test_each_update_bumps_version_once(self, roots, cache_store) -> None:
        detail = await roots.create({"type": "MATCHING"})

        first = await roots.update_field(detail.id, "instruction", "Match the speakers")
        second = await roots.update(detail.id, {"max_time": 90, "topic": ["work"]})

        assert (first.version, second.version) == (2, 3)
        assert second.instruction == "Match the speakers"
        assert _keys(cache_store, detail.id) == [f"listening_question:{detail.id}:uncomplete:3"]

    async def test_unchanged_value_still_bumps_version(self, roots, cache_store) -> None:
        detail = await roots.create({"type": "MATCHING", "instruction": "Same"})

        updated = await roots.update_field(detail.id, "instruction", "Same")

        assert updated.version == 2
        assert (await roots.get(detail.id)).version == 2
        assert _keys(cache_store, detail.id) == [f"listening_question:{detail.id}:uncomplete:2"]

    async def test_child_writes_keep_version(self, roots, children) -> None:
        detail = await roots.create({"type": "MATCHING"})

        await children.create("matching", detail.id, {"question": "Speaker 1", "answer": "B"})

        assert (await roots.get(detail.id)).version == 1

    async def test_invalid_update_changes_nothing(self, roots) -> None:
        detail = await roots.create({"type": "MATCHING"})

        with pytest.raises(ContentValidationError):
            await roots.update_field(detail.id, "max_time", -5)
        with pytest.raises(ContentValidationError):
            await roots.update_field(detail.id, "not_a_field", 1)

        assert (await roots.get(detail.id)).version == 1

    async def test_update_missing_root(self, roots) -> None:
        with pytest.raises(NotFoundError):
            await roots.update_field(uuid4(), "instruction", "x")

    async def test_concurrent_update_is_rejected(self, roots, sessionmaker, monkeypatch) -> None:
        """Test an update that lost the version race fails instead of overwriting."""
        detail = await roots.create({"type": "MATCHING"})
        original_get = roots.repo.get

        async def racing_get(session, root_id):
            root = await original_get(session, root_id)
            async with session_scope(sessionmaker) as other:
                await other.execute(
                    update(ListeningQuestion)
                    .where(ListeningQuestion.id == root_id)
                    .values(version=ListeningQuestion.version + 1)
                    .execution_options(synchronize_session=False)
                )
            return root

        monkeypatch.setattr(roots.repo, "get", racing_get)

        with pytest.raises(ConcurrentUpdateError):
            await roots.update_field(detail.id, "instruction", "lost update")

    async def test_delete_removes_everything(self, roots, children, cache_store, search_index) -> None:
        detail, question = await _choice_one(roots, children)
        option = await children.create("choice_one_option", question.id, {"options": "Left"})

        await roots.delete(detail.id)

        assert _keys(cache_store, detail.id) == []
        assert search_index.documents("listening_questions") == {}
        with pytest.raises(NotFoundError):
            await children.get("choice_one_option", option.id)
        with pytest.raises(NotFoundError):
            await roots.get(detail.id)

    async def test_delete_missing_root(self, roots) -> None:
        with pytest.raises(NotFoundError):
            await roots.delete(uuid4())


class TestPublishFailures:
    """Root writes surface publish failures, child writes do not."""

    async def test_root_create_raises_after_commit(self, roots, search_index) -> None:
        search_index.failing.add("upsert_document")

        with pytest.raises(PublishError):
            await roots.create({"type": "MATCHING"})

        _, total = await roots.list()
        assert total == 1

    async def test_root_update_raises(self, roots, cache_store) -> None:
        detail = await roots.create({"type": "MATCHING"})
        cache_store.failing.add("set")

        with pytest.raises(PublishError):
            await roots.update_field(detail.id, "instruction", "New")

        assert (await roots.get(detail.id)).version == 2

    async def test_root_delete_raises(self, roots, cache_store) -> None:
        detail = await roots.create({"type": "MATCHING"})
        cache_store.failing.add("delete_pattern")

        with pytest.raises(PublishError):
            await roots.delete(detail.id)

        with pytest.raises(NotFoundError):
            await roots.get(detail.id)

    async def test_child_write_swallows_failures(self, roots, children, cache_store, search_index) -> None:
        detail = await roots.create({"type": "MATCHING"})
        search_index.failing.add("upsert_document")

        row = await children.create("matching", detail.id, {"question": "Speaker 1", "answer": "B"})

        assert row.answer == "B"
        cached = await roots.get_detail(detail.id)
        assert [m.answer for m in cached.matching] == ["B"]


class TestChildValidation:
    """Tests for child input handling."""

    async def test_unknown_kind(self, roots, children) -> None:
        detail = await roots.create({"type": "MATCHING"})

        with pytest.raises(ContentValidationError):
            await children.create("true_false", detail.id, {"question": "q", "answer": "TRUE"})

    async def test_missing_parent(self, children) -> None:
        with pytest.raises(NotFoundError):
            await children.create("matching", uuid4(), {"question": "q", "answer": "a"})

    async def test_missing_required_field(self, roots, children) -> None:
        detail = await roots.create({"type": "MATCHING"})

        with pytest.raises(ContentValidationError):
            await children.create("matching", detail.id, {"question": "q"})

    async def test_blank_value_is_rejected_on_create_and_update(self, roots, children) -> None:
        detail = await roots.create({"type": "MATCHING"})
        row = await children.create("matching", detail.id, {"question": "Speaker 1", "answer": "B"})

        with pytest.raises(ContentValidationError):
            await children.create("matching", detail.id, {"question": "   ", "answer": "C"})
        with pytest.raises(ContentValidationError):
            await children.update("matching", row.id, {"question": "   "})

        assert (await children.get("matching", row.id)).question == "Speaker 1"

    async def test_list_without_children_is_empty(self, roots, children) -> None:
        """Test an absent list of children is not an error."""
        detail = await roots.create({"type": "MATCHING"})

        assert await children.list("matching", detail.id) == []

    async def test_get_missing_child(self, children) -> None:
        with pytest.raises(NotFoundError):
            await children.get("matching", uuid4())


class TestReads:
    """Tests for cached reads and version sync."""

    async def test_get_detail_prefers_cache(self, roots, cache_store) -> None:
        detail = await roots.create({"type": "MATCHING", "instruction": "Stored"})
        (key,) = _keys(cache_store, detail.id)
        cache_store.data[key] = detail.model_copy(update={"instruction": "Cached"}).model_dump_json()

        assert (await roots.get_detail(detail.id)).instruction == "Cached"

    async def test_get_detail_rebuilds_on_miss(self, roots, cache_store) -> None:
        detail = await roots.create({"type": "MATCHING", "instruction": "Stored"})
        cache_store.data.clear()

        rebuilt = await roots.get_detail(detail.id)

        assert rebuilt.instruction == "Stored"
        assert _keys(cache_store, detail.id) == [f"listening_question:{detail.id}:uncomplete:1"]

    async def test_get_detail_survives_cache_outage(self, roots, cache_store) -> None:
        detail = await roots.create({"type": "MATCHING"})
        cache_store.failing.update({"keys", "set"})

        assert (await roots.get_detail(detail.id)).id == detail.id

    async def test_get_detail_missing_root(self, roots) -> None:
        with pytest.raises(NotFoundError):
            await roots.get_detail(uuid4())

    async def test_get_new_updates(self, roots) -> None:
        current = await roots.create({"type": "MATCHING"})
        changed = await roots.create({"type": "MATCHING"})
        await roots.update_field(changed.id, "instruction", "Revised")

        updates = await roots.get_new_updates({current.id: 1, changed.id: 1, uuid4(): 1})

        assert [(d.id, d.version) for d in updates] == [(changed.id, 2)]

    async def test_get_new_updates_up_to_date(self, roots) -> None:
        detail = await roots.create({"type": "MATCHING"})
        await roots.update_field(detail.id, "instruction", "Revised")

        assert await roots.get_new_updates({detail.id: 2}) == []

    async def test_list_filters_by_type(self, roots) -> None:
        await roots.create({"type": "MATCHING"})
        await roots.create({"type": "MAP_LABELLING"})
        await roots.create({"type": "MATCHING"})

        items, total = await roots.list(page=1, page_size=1, content_type="MATCHING")

        assert total == 2
        assert len(items) == 1

    async def test_list_rejects_bad_page(self, roots) -> None:
        with pytest.raises(ContentValidationError):
            await roots.list(page=0)


class TestSearch:
    """Tests for document search."""

    async def test_search_by_status(self, roots, children) -> None:
        complete = await roots.create({"type": "MATCHING"})
        for answer in ("A", "B"):
            await children.create("matching", complete.id, {"question": "Speaker", "answer": answer})
        await roots.create({"type": "MATCHING"})

        page = await roots.search({"status": "complete"})

        assert page.total == 1
        assert page.documents[0]["id"] == str(complete.id)

    async def test_search_by_id(self, roots) -> None:
        detail = await roots.create({"type": "MAP_LABELLING"})

        page = await roots.search({"id": detail.id})

        assert page.documents[0]["type"] == "MAP_LABELLING"

    async def test_search_rejects_unknown_filter(self, roots) -> None:
        with pytest.raises(ContentValidationError):
            await roots.search({"instruction": "x"})

    async def test_search_rejects_bad_status(self, roots) -> None:
        with pytest.raises(ContentValidationError):
            await roots.search({"status": "finished"})


class TestResync:
    """Tests for republishing a whole family."""

    async def test_resync_restores_cache_and_index(self, roots, children, cache_store, search_index) -> None:
        complete = await roots.create({"type": "MATCHING"})
        for answer in ("A", "B"):
            await children.create("matching", complete.id, {"question": "Speaker", "answer": answer})
        await roots.create({"type": "MAP_LABELLING"})
        cache_store.data.clear()
        search_index.collections.clear()

        report = await roots.resync_all()

        assert (report.published, report.complete, report.failed) == (2, 1, [])
        assert len(cache_store.data) == 2
        assert len(search_index.documents("listening_questions")) == 2
