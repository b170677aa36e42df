# src/todo_editor/view/render.py

"""Plain-text rendering of the session for the console."""

from __future__ import annotations

from ..core.session import TaskSession
from ..core.state import EditorState, StoreState
from ..tasks.task_models import Task, TaskDraft


def render_mode(session: TaskSession) -> str:
    if session.editor.mock_mode:
        return "[MOCK] Using mock data."
    return f"[LIVE] Connected to {session.remote.describe()}."


def render_draft(draft: TaskDraft) -> str:
    title = draft.title if draft.title else "(empty)"
    return f"title={title} | status={draft.status.value} | priority={draft.priority}"


def render_task(task: Task, *, editing: bool = False) -> str:
    marker = "*" if editing else " "
    return f"{marker}[{task.id}] {task.title}  <{task.status.value}>  priority: {task.priority}"


def render_query(editor: EditorState) -> str:
    order = "by priority" if editor.sort_by_priority else "default order"
    if editor.search_title:
        return f"search: {editor.search_title!r}, {order}"
    return order


def render_tasks(state: StoreState, editor: EditorState) -> str:
    lines: list[str] = []
    if state.error_message:
        lines.append(f"! {state.error_message}")
    if state.is_loading:
        lines.append("Loading...")

    lines.append(f"Tasks ({len(state.tasks)}) - {render_query(editor)}")
    if not state.tasks and not state.is_loading:
        lines.append("  No tasks.")
    for task in state.tasks:
        editing = editor.editing_id == task.id
        lines.append("  " + render_task(task, editing=editing))
        if editing:
            lines.append("      editing: " + render_draft(editor.edit_draft))
    return "\n".join(lines)


def render_session(session: TaskSession) -> str:
    return "\n".join([render_mode(session), render_tasks(session.state, session.editor)])
