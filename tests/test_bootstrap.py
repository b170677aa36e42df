# tests/test_bootstrap.py

from __future__ import annotations

import logging
from types import SimpleNamespace

import pytest

from todo_editor.cli.bootstrap import close_session, create_session
from todo_editor.config import Settings
from todo_editor.logging_setup import _ConsoleNoiseFilter, setup_logging
from todo_editor.tasks.fixture_store import FixtureTaskStore
from todo_editor.tasks.remote_store import RemoteTaskStore


@pytest.mark.asyncio
async def test_create_session_wires_both_stores(settings: SimpleNamespace) -> None:
    session = create_session(settings=settings)
    assert settings.data_dir.is_dir()
    assert session.editor.mock_mode is True
    assert isinstance(session.store, FixtureTaskStore)
    assert isinstance(session.remote, RemoteTaskStore)
    assert session.remote.describe() == "API http://testserver/Todo"

    await session.list()
    assert len(session.state.tasks) == 3
    await close_session(session)


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("TODO_API_BASE_URL", "http://api.local/Todo")
    monkeypatch.setenv("TODO_MOCK_MODE", "off")
    monkeypatch.setenv("TODO_HTTP_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("TODO_MOCK_LIST_DELAY_SECONDS", "not-a-number")
    monkeypatch.setenv("TODO_DATA_DIR", str(tmp_path / "d"))

    s = Settings.from_env()
    assert s.api_base_url == "http://api.local/Todo"
    assert s.mock_mode is False
    assert s.http_timeout_seconds == 2.5
    assert s.mock_list_delay_seconds == 0.5
    assert s.data_dir == tmp_path / "d"


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TODO_API_BASE_URL", "TODO_MOCK_MODE", "TODO_HTTP_TIMEOUT_SECONDS", "TODO_APP_NAME"):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()
    assert s.api_base_url == "http://localhost:8080/Todo"
    assert s.mock_mode is True
    assert s.http_timeout_seconds == 0.0
    assert s.app_name == "todo-editor"


def test_setup_logging_writes_everything_to_file(tmp_path) -> None:
    root = logging.getLogger()
    saved = list(root.handlers)
    try:
        log_file = setup_logging(log_dir=tmp_path, console_level=logging.INFO)
        logging.getLogger("todo_editor.test").info("hello from app")
        logging.getLogger("somelib").warning("third-party noise")
        for h in root.handlers:
            h.flush()
        text = log_file.read_text("utf-8")
        assert "hello from app" in text
        assert "third-party noise" in text
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved:
            root.addHandler(h)


def test_console_filter_passes_app_logs_and_gates_libraries() -> None:
    def record(name: str, level: int) -> logging.LogRecord:
        return logging.LogRecord(name, level, __file__, 1, "msg", None, None)

    console_filter = _ConsoleNoiseFilter()
    assert console_filter.filter(record("todo_editor.core.session", logging.DEBUG))
    assert not console_filter.filter(record("somelib", logging.WARNING))
    assert console_filter.filter(record("somelib.sub", logging.ERROR))
    assert console_filter.filter(record("httpx", logging.WARNING))
    assert not console_filter.filter(record("httpx", logging.INFO))
    assert not console_filter.filter(record("py.warnings", logging.WARNING))
