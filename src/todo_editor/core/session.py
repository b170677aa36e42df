# src/todo_editor/core/session.py

"""
Task session: the client-side store the view talks to.

Every operation:
- clears the previous error and sets is_loading,
- calls the active TaskStore (remote or fixture),
- folds the outcome into StoreState via reduce(),
- clears is_loading, whatever happened.

Only one operation is expected in flight at a time. The console enforces that by
handling one command at a time; the session itself does not lock, so concurrent
callers get last-writer-wins on tasks/error_message.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from dataclasses import replace

from ..tasks.task_models import ListQuery, Task, TaskDraft, TaskStatus
from .errors import EMPTY_TITLE_MESSAGE, TaskError, TaskValidationError, friendly_error_message
from .ports import ConfirmFn, TaskStore
from .state import (
    EditDraftChanged,
    EditFinished,
    EditorEvent,
    EditorState,
    EditStarted,
    ListFailed,
    MockModeChanged,
    NewDraftChanged,
    NewDraftReset,
    OperationFailed,
    QueryChanged,
    RequestFinished,
    RequestStarted,
    StoreEvent,
    StoreState,
    TaskAppended,
    TaskRemoved,
    TaskReplaced,
    TasksLoaded,
    reduce,
    reduce_editor,
)

logger = logging.getLogger(__name__)

StateListener = Callable[["TaskSession"], None]


def _validate(draft: TaskDraft) -> None:
    if not draft.has_title():
        raise TaskValidationError(EMPTY_TITLE_MESSAGE)


class TaskSession:
    def __init__(
        self,
        *,
        remote: TaskStore,
        fixture: TaskStore,
        mock_mode: bool = True,
        confirm: ConfirmFn | None = None,
    ) -> None:
        self._remote = remote
        self._fixture = fixture
        self.confirm = confirm
        self.state = StoreState()
        self.editor = EditorState(mock_mode=mock_mode)
        self._listeners: list[StateListener] = []

    # ---- plumbing ----

    @property
    def store(self) -> TaskStore:
        return self._fixture if self.editor.mock_mode else self._remote

    @property
    def remote(self) -> TaskStore:
        return self._remote

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _dispatch(self, event: StoreEvent) -> None:
        self.state = reduce(self.state, event)
        self._notify()

    def _dispatch_editor(self, event: EditorEvent) -> None:
        self.editor = reduce_editor(self.editor, event)
        self._notify()

    def find_task(self, task_id: int) -> Task | None:
        for t in self.state.tasks:
            if t.id == task_id:
                return t
        return None

    # ---- mode / forms ----

    def set_mock_mode(self, enabled: bool) -> None:
        """Select the data source. The current list is left as is until the next list()."""
        if self.editor.mock_mode == enabled:
            return
        logger.info("Mock mode %s (store: %s)", "ON" if enabled else "OFF",
                    (self._fixture if enabled else self._remote).describe())
        self._dispatch_editor(MockModeChanged(enabled))

    def set_new_draft(
        self,
        *,
        title: str | None = None,
        status: TaskStatus | None = None,
        priority: int | None = None,
    ) -> TaskDraft:
        draft = self.editor.new_draft
        if title is not None:
            draft = replace(draft, title=title)
        if status is not None:
            draft = replace(draft, status=status)
        if priority is not None:
            draft = replace(draft, priority=priority)
        self._dispatch_editor(NewDraftChanged(draft))
        return draft

    def start_edit(self, task_id: int) -> Task:
        task = self.find_task(task_id)
        if task is None:
            raise KeyError(task_id)
        self._dispatch_editor(EditStarted(task))
        return task

    def set_edit_draft(
        self,
        *,
        title: str | None = None,
        status: TaskStatus | None = None,
        priority: int | None = None,
    ) -> TaskDraft:
        if self.editor.editing_id is None:
            raise RuntimeError("No task is being edited.")
        draft = self.editor.edit_draft
        if title is not None:
            draft = replace(draft, title=title)
        if status is not None:
            draft = replace(draft, status=status)
        if priority is not None:
            draft = replace(draft, priority=priority)
        self._dispatch_editor(EditDraftChanged(draft))
        return draft

    def cancel_edit(self) -> None:
        self._dispatch_editor(EditFinished())

    # ---- operations ----

    async def _fetch(self, query: ListQuery) -> bool:
        try:
            tasks = await self.store.list_tasks(query)
        except TaskError as e:
            msg = friendly_error_message("Fetch", e)
            logger.info("List failed: %s", msg)
            self._dispatch(ListFailed(msg))
            return False
        self._dispatch(TasksLoaded(tuple(tasks)))
        logger.debug("Loaded %d tasks", len(tasks))
        return True

    async def list(self, filter_title: str | None = None, sort_by_priority: bool | None = None) -> bool:
        """
        Fetch tasks with the given query (None keeps the active value) and make it the active query.

        Returns True on success. On failure the list is emptied and error_message is set.
        """
        title = self.editor.search_title if filter_title is None else filter_title
        sort = self.editor.sort_by_priority if sort_by_priority is None else sort_by_priority
        if (title, sort) != (self.editor.search_title, self.editor.sort_by_priority):
            self._dispatch_editor(QueryChanged(search_title=title, sort_by_priority=sort))

        self._dispatch(RequestStarted())
        try:
            return await self._fetch(self.editor.query)
        finally:
            self._dispatch(RequestFinished())

    async def search(self, title: str) -> bool:
        return await self.list(filter_title=title.strip())

    async def toggle_sort(self) -> bool:
        return await self.list(sort_by_priority=not self.editor.sort_by_priority)

    async def create(self, draft: TaskDraft | None = None) -> bool:
        draft = self.editor.new_draft if draft is None else draft
        try:
            _validate(draft)
        except TaskValidationError as e:
            self._dispatch(OperationFailed(friendly_error_message("Add", e)))
            return False

        self._dispatch(RequestStarted())
        try:
            store = self.store
            try:
                created = await store.create_task(draft)
            except TaskError as e:
                # The form keeps its content so nothing typed is lost.
                self._dispatch(OperationFailed(friendly_error_message("Add", e)))
                return False

            self._dispatch_editor(NewDraftReset())
            if store.refetch_after_write or created is None:
                await self._fetch(self.editor.query)
            else:
                self._dispatch(TaskAppended(created))
            logger.info("Task created: %r", draft.title)
            return True
        finally:
            self._dispatch(RequestFinished())

    async def update(self, task_id: int, draft: TaskDraft | None = None) -> bool:
        draft = self.editor.edit_draft if draft is None else draft
        try:
            _validate(draft)
        except TaskValidationError as e:
            self._dispatch(OperationFailed(friendly_error_message("Update", e)))
            return False

        self._dispatch(RequestStarted())
        try:
            store = self.store
            try:
                updated = await store.update_task(task_id, draft)
            except TaskError as e:
                self._dispatch(OperationFailed(friendly_error_message("Update", e)))
                return False

            if self.editor.editing_id == task_id:
                self._dispatch_editor(EditFinished())
            if store.refetch_after_write or updated is None:
                await self._fetch(self.editor.query)
            else:
                self._dispatch(TaskReplaced(updated))
            logger.info("Task updated: id=%s", task_id)
            return True
        finally:
            self._dispatch(RequestFinished())

    async def _confirmed(self, prompt: str) -> bool:
        if self.confirm is None:
            return False
        answer = self.confirm(prompt)
        if inspect.isawaitable(answer):
            answer = await answer
        return bool(answer)

    async def delete(self, task_id: int) -> bool | None:
        """
        Delete after confirmation.

        Returns True when deleted, False when the request failed
        and None when the confirmation was declined (nothing was sent).
        """
        if not await self._confirmed(f"Really delete task {task_id}?"):
            logger.debug("Delete of task %s not confirmed", task_id)
            return None

        self._dispatch(RequestStarted())
        try:
            store = self.store
            try:
                await store.delete_task(task_id)
            except TaskError as e:
                self._dispatch(OperationFailed(friendly_error_message("Delete", e)))
                return False

            if self.editor.editing_id == task_id:
                self._dispatch_editor(EditFinished())
            if store.refetch_after_write:
                await self._fetch(self.editor.query)
            else:
                self._dispatch(TaskRemoved(task_id))
            logger.info("Task deleted: id=%s", task_id)
            return True
        finally:
            self._dispatch(RequestFinished())
