# src/todo_editor/core/state.py

"""
Session state and its pure transitions.

Two immutable records:
- StoreState: what the backend told us (tasks) plus request/error status,
- EditorState: what the user is typing (forms) and the active list query.

reduce()/reduce_editor() never perform I/O; TaskSession feeds them events
produced around the async request/response exchange.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from ..tasks.task_models import ListQuery, Task, TaskDraft


@dataclass(frozen=True, slots=True)
class StoreState:
    tasks: tuple[Task, ...] = ()
    is_loading: bool = False
    error_message: str = ""


@dataclass(frozen=True, slots=True)
class EditorState:
    new_draft: TaskDraft = field(default_factory=TaskDraft)
    editing_id: int | None = None
    edit_draft: TaskDraft = field(default_factory=TaskDraft)
    search_title: str = ""
    sort_by_priority: bool = False
    mock_mode: bool = True

    @property
    def query(self) -> ListQuery:
        return ListQuery(filter_title=self.search_title, sort_by_priority=self.sort_by_priority)


# ---- store events ----


@dataclass(frozen=True, slots=True)
class RequestStarted:
    pass


@dataclass(frozen=True, slots=True)
class RequestFinished:
    pass


@dataclass(frozen=True, slots=True)
class TasksLoaded:
    tasks: tuple[Task, ...]


@dataclass(frozen=True, slots=True)
class ListFailed:
    message: str


@dataclass(frozen=True, slots=True)
class OperationFailed:
    message: str


@dataclass(frozen=True, slots=True)
class TaskAppended:
    task: Task


@dataclass(frozen=True, slots=True)
class TaskReplaced:
    task: Task


@dataclass(frozen=True, slots=True)
class TaskRemoved:
    task_id: int


StoreEvent = (
    RequestStarted
    | RequestFinished
    | TasksLoaded
    | ListFailed
    | OperationFailed
    | TaskAppended
    | TaskReplaced
    | TaskRemoved
)


def reduce(state: StoreState, event: StoreEvent) -> StoreState:
    if isinstance(event, RequestStarted):
        return replace(state, is_loading=True, error_message="")
    if isinstance(event, RequestFinished):
        return replace(state, is_loading=False)
    if isinstance(event, TasksLoaded):
        return replace(state, tasks=tuple(event.tasks))
    if isinstance(event, ListFailed):
        # No stale data after a failed fetch.
        return replace(state, tasks=(), error_message=event.message)
    if isinstance(event, OperationFailed):
        return replace(state, error_message=event.message)
    if isinstance(event, TaskAppended):
        return replace(state, tasks=(*state.tasks, event.task))
    if isinstance(event, TaskReplaced):
        return replace(
            state,
            tasks=tuple(event.task if t.id == event.task.id else t for t in state.tasks),
        )
    if isinstance(event, TaskRemoved):
        return replace(state, tasks=tuple(t for t in state.tasks if t.id != event.task_id))
    raise TypeError(f"Unknown store event: {event!r}")


# ---- editor events ----


@dataclass(frozen=True, slots=True)
class QueryChanged:
    search_title: str
    sort_by_priority: bool


@dataclass(frozen=True, slots=True)
class NewDraftChanged:
    draft: TaskDraft


@dataclass(frozen=True, slots=True)
class NewDraftReset:
    pass


@dataclass(frozen=True, slots=True)
class EditStarted:
    task: Task


@dataclass(frozen=True, slots=True)
class EditDraftChanged:
    draft: TaskDraft


@dataclass(frozen=True, slots=True)
class EditFinished:
    pass


@dataclass(frozen=True, slots=True)
class MockModeChanged:
    enabled: bool


EditorEvent = (
    QueryChanged
    | NewDraftChanged
    | NewDraftReset
    | EditStarted
    | EditDraftChanged
    | EditFinished
    | MockModeChanged
)


def reduce_editor(editor: EditorState, event: EditorEvent) -> EditorState:
    if isinstance(event, QueryChanged):
        return replace(editor, search_title=event.search_title, sort_by_priority=event.sort_by_priority)
    if isinstance(event, NewDraftChanged):
        return replace(editor, new_draft=event.draft)
    if isinstance(event, NewDraftReset):
        return replace(editor, new_draft=TaskDraft())
    if isinstance(event, EditStarted):
        return replace(editor, editing_id=event.task.id, edit_draft=event.task.to_draft())
    if isinstance(event, EditDraftChanged):
        return replace(editor, edit_draft=event.draft)
    if isinstance(event, EditFinished):
        return replace(editor, editing_id=None, edit_draft=TaskDraft())
    if isinstance(event, MockModeChanged):
        return replace(editor, mock_mode=event.enabled)
    raise TypeError(f"Unknown editor event: {event!r}")
