# src/todo_editor/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """
    Task status. Values are the backend's wire strings.
    """

    NOT_STARTED = "未着手"
    IN_PROGRESS = "進行中"
    DONE = "完了"

    @classmethod
    def from_wire(cls, raw: Any) -> TaskStatus:
        if not raw:
            return cls.NOT_STARTED
        try:
            return cls(str(raw))
        except ValueError:
            return cls.NOT_STARTED

    @classmethod
    def parse(cls, raw: str) -> TaskStatus:
        """Parse console input: wire value, member name or an English alias."""
        s = (raw or "").strip()
        try:
            return cls(s)
        except ValueError:
            pass
        key = s.lower().replace("_", "-")
        member = _STATUS_ALIASES.get(key)
        if member is None:
            raise ValueError(f"Unknown status: {raw!r}")
        return member


_STATUS_ALIASES: dict[str, TaskStatus] = {
    "todo": TaskStatus.NOT_STARTED,
    "not-started": TaskStatus.NOT_STARTED,
    "notstarted": TaskStatus.NOT_STARTED,
    "doing": TaskStatus.IN_PROGRESS,
    "in-progress": TaskStatus.IN_PROGRESS,
    "inprogress": TaskStatus.IN_PROGRESS,
    "done": TaskStatus.DONE,
}


def parse_priority(raw: Any, default: int = 1) -> int:
    """Mirror the form input: anything that is not a positive integer falls back to the default."""
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return default
    return value if value >= 1 else default


def _wire_priority(raw: Any) -> int:
    # Server data is kept as sent; a value that is not a whole number is malformed.
    if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
        raise ValueError(f"Invalid priority: {raw!r}")
    return int(raw)


@dataclass(frozen=True, slots=True)
class TaskDraft:
    title: str = ""
    status: TaskStatus = TaskStatus.NOT_STARTED
    priority: int = 1

    def has_title(self) -> bool:
        return bool(self.title.strip())


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    title: str
    status: TaskStatus
    priority: int

    @classmethod
    def from_wire(cls, raw: dict[str, Any]) -> Task:
        return cls(
            id=int(raw["ID"]),
            title=str(raw.get("Title") or ""),
            status=TaskStatus.from_wire(raw.get("Status")),
            priority=_wire_priority(raw.get("Priority")),
        )

    def to_wire(self) -> dict[str, Any]:
        return {
            "ID": self.id,
            "Title": self.title,
            "Status": self.status.value,
            "Priority": self.priority,
        }

    def to_draft(self) -> TaskDraft:
        return TaskDraft(title=self.title, status=self.status, priority=self.priority)


@dataclass(frozen=True, slots=True)
class ListQuery:
    """
    Active list query.

    The remote store sends only one of the two (the sorted endpoint takes no filter);
    the fixture store applies both.
    """

    filter_title: str = ""
    sort_by_priority: bool = False


def apply_query(tasks: list[Task], query: ListQuery) -> list[Task]:
    """Client-side version of the backend's filter/sort, used by the fixture store."""
    out = list(tasks)
    needle = query.filter_title.lower()
    if needle:
        out = [t for t in out if needle in t.title.lower()]
    if query.sort_by_priority:
        # sorted() is stable: equal priorities keep their insertion order.
        out = sorted(out, key=lambda t: t.priority)
    return out
