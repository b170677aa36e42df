# src/todo_editor/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is contacted at import time; the API base URL is only used by the remote store.
- Mock mode is on by default so the editor works without a backend.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO"

DEFAULT_API_BASE_URL = "http://localhost:8080/Todo"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Backend ----
    api_base_url: str
    http_timeout_seconds: float  # 0 => no timeout

    # ---- Mock mode ----
    mock_mode: bool
    mock_list_delay_seconds: float
    mock_write_delay_seconds: float

    # ---- Local data (logs) ----
    data_dir: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todo-editor").strip() or "todo-editor"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        api_base_url = _env(_k("API_BASE_URL"), DEFAULT_API_BASE_URL).strip() or DEFAULT_API_BASE_URL
        http_timeout_seconds = max(0.0, _env_float(_k("HTTP_TIMEOUT_SECONDS"), 0.0))

        mock_mode = _env_bool(_k("MOCK_MODE"), True)
        mock_list_delay_seconds = max(0.0, _env_float(_k("MOCK_LIST_DELAY_SECONDS"), 0.5))
        mock_write_delay_seconds = max(0.0, _env_float(_k("MOCK_WRITE_DELAY_SECONDS"), 0.3))

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo-editor"))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            api_base_url=api_base_url,
            http_timeout_seconds=http_timeout_seconds,
            mock_mode=mock_mode,
            mock_list_delay_seconds=mock_list_delay_seconds,
            mock_write_delay_seconds=mock_write_delay_seconds,
            data_dir=data_dir,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
