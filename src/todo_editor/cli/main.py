# src/todo_editor/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the TaskSession, then runs the console REPL
on an asyncio loop until /exit, EOF or Ctrl+C.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import close_session, create_session
from ..config import get_settings
from ..connectors.console_connector import make_console_confirm, run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _run(settings) -> None:
    session = create_session(settings=settings, confirm=make_console_confirm())
    try:
        await run_console_loop(session)
    finally:
        await close_session(session)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    main()
