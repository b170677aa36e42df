# src/todo_editor/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- builds both task stores and wires them into a TaskSession.
"""

from __future__ import annotations

import contextlib
import logging

from ..config import get_settings
from ..core.ports import ConfirmFn
from ..core.session import TaskSession
from ..tasks.fixture_store import FixtureTaskStore
from ..tasks.remote_store import RemoteTaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_session(*, settings=None, confirm: ConfirmFn | None = None) -> TaskSession:
    """
    Create a TaskSession from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    remote = RemoteTaskStore(
        settings.api_base_url,
        timeout_seconds=settings.http_timeout_seconds,
    )
    fixture = FixtureTaskStore(
        list_delay_seconds=settings.mock_list_delay_seconds,
        write_delay_seconds=settings.mock_write_delay_seconds,
    )

    logger.info(
        "Session ready (mock=%s, api=%s)",
        settings.mock_mode,
        settings.api_base_url,
    )
    return TaskSession(remote=remote, fixture=fixture, mock_mode=settings.mock_mode, confirm=confirm)


async def close_session(session: TaskSession) -> None:
    """Best-effort: release the HTTP client, if one was opened."""
    aclose = getattr(session.remote, "aclose", None)
    if aclose is None:
        return
    with contextlib.suppress(Exception):
        await aclose()
