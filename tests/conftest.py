# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_editor.core.session import TaskSession
from todo_editor.tasks.fixture_store import FIXTURE_TASKS, FixtureTaskStore
from todo_editor.tasks.remote_store import RemoteTaskStore

from .fakes import BASE_URL, FakeBackend, make_remote_store


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment and .env.
    """
    return SimpleNamespace(
        app_name="todo-editor-test",
        log_level="DEBUG",
        api_base_url=BASE_URL,
        http_timeout_seconds=0.0,
        mock_mode=True,
        mock_list_delay_seconds=0.0,
        mock_write_delay_seconds=0.0,
        data_dir=tmp_path / "data",
    )


@pytest.fixture()
def fixture_store() -> FixtureTaskStore:
    return FixtureTaskStore(list_delay_seconds=0.0, write_delay_seconds=0.0)


@pytest.fixture()
def backend() -> FakeBackend:
    """Fake server seeded with the same three tasks as the mock fixture."""
    return FakeBackend.with_tasks(list(FIXTURE_TASKS))


@pytest.fixture()
def remote_store(backend: FakeBackend) -> RemoteTaskStore:
    return make_remote_store(backend)


@pytest.fixture()
def confirmations() -> list[str]:
    return []


@pytest.fixture()
def mock_session(fixture_store, remote_store, confirmations) -> TaskSession:
    def confirm(prompt: str) -> bool:
        confirmations.append(prompt)
        return True

    return TaskSession(remote=remote_store, fixture=fixture_store, mock_mode=True, confirm=confirm)


@pytest.fixture()
def live_session(fixture_store, remote_store, confirmations) -> TaskSession:
    def confirm(prompt: str) -> bool:
        confirmations.append(prompt)
        return True

    return TaskSession(remote=remote_store, fixture=fixture_store, mock_mode=False, confirm=confirm)
