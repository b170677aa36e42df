# src/todo_editor/tasks/fixture_store.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from .task_models import ListQuery, Task, TaskDraft, TaskStatus, apply_query

logger = logging.getLogger(__name__)

FIXTURE_TASKS: tuple[Task, ...] = (
    Task(id=1, title="テスト1", status=TaskStatus.NOT_STARTED, priority=2),
    Task(id=2, title="テスト2", status=TaskStatus.IN_PROGRESS, priority=1),
    Task(id=3, title="テスト3", status=TaskStatus.DONE, priority=3),
)


class FixtureTaskStore:
    """
    Offline stand-in for the backend used in mock mode.

    Holds its own copy of the fixture, sleeps to emulate latency, and applies
    filter/sort client-side. Writes return the resulting Task so the session
    can apply them locally instead of re-listing.

    IDs come from a monotonic counter: an id is never handed out twice,
    even after the task that had the highest id is deleted.
    """

    refetch_after_write = False

    def __init__(
        self,
        tasks: Iterable[Task] | None = None,
        *,
        list_delay_seconds: float = 0.5,
        write_delay_seconds: float = 0.3,
    ) -> None:
        self._tasks: list[Task] = list(FIXTURE_TASKS if tasks is None else tasks)
        self._last_id = max((t.id for t in self._tasks), default=0)
        self._list_delay = max(0.0, float(list_delay_seconds))
        self._write_delay = max(0.0, float(write_delay_seconds))

    def describe(self) -> str:
        return f"mock data ({len(self._tasks)} tasks in memory)"

    def snapshot(self) -> list[Task]:
        return list(self._tasks)

    async def list_tasks(self, query: ListQuery) -> list[Task]:
        logger.debug("Mock list: filter=%r sorted=%s", query.filter_title, query.sort_by_priority)
        await asyncio.sleep(self._list_delay)
        return apply_query(self._tasks, query)

    async def create_task(self, draft: TaskDraft) -> Task:
        await asyncio.sleep(self._write_delay)
        self._last_id += 1
        task = Task(id=self._last_id, title=draft.title, status=draft.status, priority=draft.priority)
        self._tasks.append(task)
        logger.debug("Mock create: id=%s title=%r", task.id, task.title)
        return task

    async def update_task(self, task_id: int, draft: TaskDraft) -> Task:
        await asyncio.sleep(self._write_delay)
        task = Task(id=task_id, title=draft.title, status=draft.status, priority=draft.priority)
        self._tasks = [task if t.id == task_id else t for t in self._tasks]
        logger.debug("Mock update: id=%s", task_id)
        return task

    async def delete_task(self, task_id: int) -> None:
        await asyncio.sleep(self._write_delay)
        self._tasks = [t for t in self._tasks if t.id != task_id]
        logger.debug("Mock delete: id=%s", task_id)
