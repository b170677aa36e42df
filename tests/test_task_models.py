# tests/test_task_models.py

from __future__ import annotations

import pytest

from todo_editor.tasks.task_models import ListQuery, Task, TaskDraft, TaskStatus, apply_query, parse_priority


def test_status_parse_accepts_wire_values_and_aliases() -> None:
    assert TaskStatus.parse("未着手") is TaskStatus.NOT_STARTED
    assert TaskStatus.parse("進行中") is TaskStatus.IN_PROGRESS
    assert TaskStatus.parse("Done") is TaskStatus.DONE
    assert TaskStatus.parse("in_progress") is TaskStatus.IN_PROGRESS
    assert TaskStatus.parse("todo") is TaskStatus.NOT_STARTED
    with pytest.raises(ValueError):
        TaskStatus.parse("later")


def test_status_from_wire_falls_back_to_not_started() -> None:
    assert TaskStatus.from_wire("完了") is TaskStatus.DONE
    assert TaskStatus.from_wire("???") is TaskStatus.NOT_STARTED
    assert TaskStatus.from_wire(None) is TaskStatus.NOT_STARTED


def test_parse_priority_falls_back_to_one() -> None:
    assert parse_priority("3") == 3
    assert parse_priority("abc") == 1
    assert parse_priority("") == 1
    assert parse_priority("0") == 1
    assert parse_priority(None) == 1


def test_task_wire_mapping() -> None:
    task = Task.from_wire({"ID": 7, "Title": "write docs", "Status": "進行中", "Priority": 2})
    assert task == Task(id=7, title="write docs", status=TaskStatus.IN_PROGRESS, priority=2)
    assert task.to_wire() == {"ID": 7, "Title": "write docs", "Status": "進行中", "Priority": 2}
    assert task.to_draft() == TaskDraft(title="write docs", status=TaskStatus.IN_PROGRESS, priority=2)


def test_wire_priority_is_not_clamped_like_form_input() -> None:
    raw = {"ID": 1, "Title": "x", "Status": "未着手"}
    assert Task.from_wire({**raw, "Priority": 0}).priority == 0
    assert Task.from_wire({**raw, "Priority": "5"}).priority == 5
    with pytest.raises(ValueError):
        Task.from_wire({**raw, "Priority": 2.5})
    with pytest.raises(TypeError):
        Task.from_wire(raw)


def test_draft_has_title_ignores_whitespace() -> None:
    assert TaskDraft(title="x").has_title()
    assert not TaskDraft(title="   ").has_title()
    assert not TaskDraft().has_title()


def test_apply_query_filters_case_insensitively_then_sorts() -> None:
    tasks = [
        Task(id=1, title="Buy Milk", status=TaskStatus.NOT_STARTED, priority=3),
        Task(id=2, title="walk dog", status=TaskStatus.NOT_STARTED, priority=1),
        Task(id=3, title="milkshake", status=TaskStatus.DONE, priority=2),
    ]
    out = apply_query(tasks, ListQuery(filter_title="MILK"))
    assert [t.id for t in out] == [1, 3]

    out = apply_query(tasks, ListQuery(filter_title="milk", sort_by_priority=True))
    assert [t.id for t in out] == [3, 1]

    assert apply_query(tasks, ListQuery()) == tasks
