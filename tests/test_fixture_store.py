# tests/test_fixture_store.py

from __future__ import annotations

import itertools

import pytest

from todo_editor.tasks.fixture_store import FixtureTaskStore
from todo_editor.tasks.task_models import ListQuery, Task, TaskDraft, TaskStatus


@pytest.mark.asyncio
async def test_fixture_sorted_by_priority(fixture_store: FixtureTaskStore) -> None:
    tasks = await fixture_store.list_tasks(ListQuery(sort_by_priority=True))
    assert [(t.id, t.priority) for t in tasks] == [(2, 1), (1, 2), (3, 3)]


@pytest.mark.asyncio
async def test_fixture_default_order_and_filter(fixture_store: FixtureTaskStore) -> None:
    tasks = await fixture_store.list_tasks(ListQuery())
    assert [t.title for t in tasks] == ["テスト1", "テスト2", "テスト3"]

    only_two = await fixture_store.list_tasks(ListQuery(filter_title="2"))
    assert [t.id for t in only_two] == [2]


@pytest.mark.asyncio
async def test_sort_is_non_decreasing_for_any_input_order() -> None:
    base = [
        Task(id=i, title=f"t{i}", status=TaskStatus.NOT_STARTED, priority=p)
        for i, p in enumerate([4, 1, 3, 1], start=1)
    ]
    for perm in itertools.permutations(base):
        store = FixtureTaskStore(perm, list_delay_seconds=0, write_delay_seconds=0)
        out = await store.list_tasks(ListQuery(sort_by_priority=True))
        priorities = [t.priority for t in out]
        assert priorities == sorted(priorities)
        assert len(out) == len(base)


@pytest.mark.asyncio
async def test_create_assigns_fresh_ids_never_reused(fixture_store: FixtureTaskStore) -> None:
    created = await fixture_store.create_task(TaskDraft(title="new", priority=5))
    assert created.id == 4
    await fixture_store.delete_task(4)

    again = await fixture_store.create_task(TaskDraft(title="again"))
    assert again.id == 5


@pytest.mark.asyncio
async def test_update_and_delete_touch_only_the_target(fixture_store: FixtureTaskStore) -> None:
    updated = await fixture_store.update_task(1, TaskDraft(title="renamed", status=TaskStatus.DONE, priority=9))
    assert updated == Task(id=1, title="renamed", status=TaskStatus.DONE, priority=9)

    await fixture_store.delete_task(2)
    snapshot = fixture_store.snapshot()
    assert [t.id for t in snapshot] == [1, 3]
    assert snapshot[0].title == "renamed"
    assert snapshot[1].title == "テスト3"


def test_empty_store_starts_ids_at_one() -> None:
    store = FixtureTaskStore([], list_delay_seconds=0, write_delay_seconds=0)
    assert store.snapshot() == []
    assert "0 tasks" in store.describe()
