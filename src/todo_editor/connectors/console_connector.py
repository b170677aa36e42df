# src/todo_editor/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.session import TaskSession
from ..view.render import render_session

logger = logging.getLogger(__name__)

InputFn = Callable[[str], Awaitable[str]]

YES_ANSWERS = {"y", "yes"}


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


async def _read_line(prompt: str) -> str:
    # input() blocks; keep the event loop free while waiting.
    return await asyncio.to_thread(input, prompt)


def make_console_confirm(read_line: InputFn = _read_line) -> Callable[[str], Awaitable[bool]]:
    async def confirm(prompt: str) -> bool:
        try:
            answer = await read_line(f"{prompt} [y/N]: ")
        except (EOFError, KeyboardInterrupt):
            return False
        return answer.strip().lower() in YES_ANSWERS

    return confirm


async def run_console_loop(session: TaskSession, read_line: InputFn = _read_line) -> None:
    logger.info("Console connector started (mock=%s).", session.editor.mock_mode)
    _print_ts("[CONSOLE] Type a title to add a task. Use /help for commands. Use /exit to quit.\n")

    def emit(text: str) -> None:
        _print_ts(text)

    was_loading = False

    def on_change(s: TaskSession) -> None:
        nonlocal was_loading
        if s.state.is_loading and not was_loading:
            _print_ts("Loading...")
        was_loading = s.state.is_loading

    unsubscribe = session.subscribe(on_change)
    try:
        await session.list()
        print(render_session(session) + "\n", flush=True)

        while True:
            try:
                line = (await read_line(">>> ")).strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not line:
                continue

            if line.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            if not line.startswith("/"):
                line = f"/add {line}"

            try:
                reply = await command_registry.handle(session, line, emit=emit)
            except Exception:
                logger.exception("Command handler crashed.")
                reply = "Internal error while handling a command."

            if reply is not None:
                print(reply + "\n", flush=True)
    finally:
        unsubscribe()

    logger.info("Console connector finished.")
