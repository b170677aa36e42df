# src/todo_editor/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "todo-editor.log"
APP_LOGGER_PREFIX = "todo_editor."

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Lowest level a non-app logger needs to reach the console, by top-level name.
# The REPL prints its own results, so request-level chatter stays in the file.
CONSOLE_THRESHOLDS: dict[str, int] = {
    "httpx": logging.WARNING,
    "py.warnings": logging.ERROR,
}
DEFAULT_CONSOLE_THRESHOLD = logging.ERROR

# httpx logs one INFO line per request; keep them out of the file too.
QUIET_LIBRARIES = ("httpx", "httpcore")


class _ConsoleNoiseFilter(logging.Filter):
    """App records always pass; everything else is gated by CONSOLE_THRESHOLDS."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(APP_LOGGER_PREFIX):
            return True
        top = "py.warnings" if record.name == "py.warnings" else record.name.split(".", 1)[0]
        return record.levelno >= CONSOLE_THRESHOLDS.get(top, DEFAULT_CONSOLE_THRESHOLD)


def _drop_root_handlers(root: logging.Logger) -> None:
    for h in list(root.handlers):
        root.removeHandler(h)


def setup_logging(
    *,
    log_dir: str | Path = ".local/todo-editor",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Send app logs to stderr (filtered) and everything to <log_dir>/todo-editor.log.

    Meant to run once at startup; calling it again replaces the handlers.
    Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    _drop_root_handlers(root)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(formatter)
    console.addFilter(_ConsoleNoiseFilter())

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(formatter)

    root.addHandler(console)
    root.addHandler(file_handler)

    for name in QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.captureWarnings(True)
    return log_file
