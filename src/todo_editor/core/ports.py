# src/todo_editor/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The session depends on the TaskStore Protocol instead of a concrete store.
Live (HTTP) and mock (fixture) stores are swappable at runtime and tests can pass fakes.
"""

from typing import Awaitable, Callable, Protocol

from ..tasks.task_models import ListQuery, Task, TaskDraft

ConfirmFn = Callable[[str], "bool | Awaitable[bool]"]
# Asked before irreversible actions; returning False cancels the action.


class TaskStore(Protocol):
    """Data source for tasks. Implementations raise core.errors.TaskStoreError on failure."""

    # True: the store is the source of truth, re-list after every write.
    # False: the write result is applied to the local list directly.
    refetch_after_write: bool

    def describe(self) -> str: ...

    async def list_tasks(self, query: ListQuery) -> list[Task]: ...

    # Stores that do not return the written entity return None.
    async def create_task(self, draft: TaskDraft) -> Task | None: ...
    async def update_task(self, task_id: int, draft: TaskDraft) -> Task | None: ...

    async def delete_task(self, task_id: int) -> None: ...
