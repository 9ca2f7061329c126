import asyncio

import pytest

from vocabhub.controllers import VocabularyRemover
from vocabhub.errors import BackendError
from vocabhub.models import NoticeLevel, VocabularyEntry


@pytest.fixture
def remover(vocabulary):
    return VocabularyRemover(vocabulary)


@pytest.mark.asyncio
async def test_refresh_lists_newest_first(remover):
    await remover.refresh()

    assert [entry.id for entry in remover.entries] == [7, 4, 3, 2, 1]
    assert remover.categories == ["animals", "food", "weather"]
    assert remover.loading is False


@pytest.mark.asyncio
async def test_filters_by_category_and_keyword(remover):
    await remover.set_filter(category="food")
    assert [entry.word for entry in remover.entries] == ["bread", "apple"]

    await remover.set_filter(keyword="RED")
    assert [entry.word for entry in remover.entries] == ["apple"]

    await remover.set_filter(category="", keyword="")
    assert len(remover.entries) == 5


@pytest.mark.asyncio
async def test_confirm_delete_removes_exactly_one_row(remover, seeded_backend):
    await remover.refresh()
    target = next(entry for entry in remover.entries if entry.id == 7)
    calls = len(seeded_backend.calls)

    remover.request_delete(target)
    assert remover.pending == target
    assert await remover.confirm_delete()

    assert [entry.id for entry in remover.entries] == [4, 3, 2, 1]
    assert seeded_backend.calls[calls:] == ["delete_row"]
    assert remover.pending is None
    assert remover.notice.level is NoticeLevel.SUCCESS

    await remover.refresh()
    assert 7 not in [entry.id for entry in remover.entries]
    assert len(remover.entries) == 4


@pytest.mark.asyncio
async def test_cancel_delete_keeps_everything(remover, seeded_backend):
    await remover.refresh()
    remover.request_delete(remover.entries[0])
    remover.cancel_delete()

    assert await remover.confirm_delete() is False
    assert "delete_row" not in seeded_backend.calls
    assert len(remover.entries) == 5


@pytest.mark.asyncio
async def test_failed_delete_reports_details_and_keeps_list(remover, seeded_backend):
    await remover.refresh()
    seeded_backend.failures["delete_row"] = BackendError(
        "permission denied for table vocab",
        details="RLS",
        hint="Add a delete policy",
        code="42501",
    )
    remover.request_delete(remover.entries[0])

    assert await remover.confirm_delete() is False

    assert len(remover.entries) == 5
    assert remover.notice.is_error
    for fragment in ("permission denied", "RLS", "Add a delete policy", "42501"):
        assert fragment in remover.notice.text


@pytest.mark.asyncio
async def test_verify_deleted_warns_when_row_survives(remover, seeded_backend):
    seeded_backend.protected_ids.add(7)
    await remover.refresh()
    remover.request_delete(next(entry for entry in remover.entries if entry.id == 7))
    assert await remover.confirm_delete()

    assert await remover.verify_deleted(7) is False

    assert remover.notice.level is NoticeLevel.WARNING
    assert "row-level security" in remover.notice.text


@pytest.mark.asyncio
async def test_verify_deleted_passes_when_gone(remover):
    await remover.refresh()
    remover.request_delete(remover.entries[0])
    await remover.confirm_delete()
    notice = remover.notice

    assert await remover.verify_deleted(7) is True
    assert remover.notice == notice


@pytest.mark.asyncio
async def test_superseded_filter_result_is_dropped(remover, monkeypatch):
    release_slow = asyncio.Event()

    async def fetch_entries(category=None, keyword=""):
        if category == "animals":
            await release_slow.wait()
            return [
                VocabularyEntry(2, "cat", "a small feline", "animals"),
                VocabularyEntry(1, "dog", "a loyal animal", "animals"),
            ]
        return [VocabularyEntry(4, "bread", "baked dough", "food")]

    monkeypatch.setattr(remover.service, "fetch_entries", fetch_entries)

    slow = asyncio.create_task(remover.set_filter(category="animals"))
    await asyncio.sleep(0)
    await remover.set_filter(category="food")
    assert remover.loading is False

    release_slow.set()
    await slow

    assert remover.category_filter == "food"
    assert [entry.category for entry in remover.entries] == ["food"]
    assert remover.loading is False


@pytest.mark.asyncio
async def test_superseded_failure_is_not_reported(remover, monkeypatch):
    release_slow = asyncio.Event()

    async def fetch_entries(category=None, keyword=""):
        if category == "animals":
            await release_slow.wait()
            raise BackendError("connection reset")
        return [VocabularyEntry(3, "apple", "a red fruit", "food")]

    monkeypatch.setattr(remover.service, "fetch_entries", fetch_entries)

    slow = asyncio.create_task(remover.set_filter(category="animals"))
    await asyncio.sleep(0)
    await remover.set_filter(category="food")
    release_slow.set()
    await slow

    assert remover.notice is None
    assert [entry.word for entry in remover.entries] == ["apple"]


@pytest.mark.asyncio
async def test_successful_refresh_clears_previous_error(remover, seeded_backend):
    seeded_backend.failures["select_rows"] = BackendError("permission denied")
    await remover.refresh()
    assert remover.notice.level == NoticeLevel.ERROR

    del seeded_backend.failures["select_rows"]
    await remover.refresh()

    assert remover.notice is None
    assert len(remover.entries) == 5
