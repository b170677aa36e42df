# src/todo_editor/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from ..core.session import TaskSession
from ..tasks.task_models import TaskStatus, parse_priority
from ..view.render import render_draft, render_session

CommandEmitter = Callable[[str], None]
# Handlers get the raw text after the command name so titles keep their spacing.
CommandHandler = Callable[[TaskSession, str, CommandEmitter | None], Awaitable[str]]

logger = logging.getLogger(__name__)

FIELDS = ("title", "status", "priority")


class CommandRegistry:
    """Slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        session: TaskSession,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1] if len(parts) > 1 else ""

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return await handler(session, args, emit)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  Text without a leading slash adds a task with that title.")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_task_id(args: str) -> int | None:
    words = args.split()
    if not words:
        return None
    try:
        return int(words[0])
    except ValueError:
        return None


def _parse_field(args: str) -> tuple[str, str] | None:
    """Split "<field> <value>"; the value keeps its inner spacing."""
    words = args.split(maxsplit=1)
    if not words or words[0].lower() not in FIELDS:
        return None
    return words[0].lower(), (words[1] if len(words) > 1 else "")


def _field_kwargs(field: str, value: str) -> dict:
    if field == "title":
        return {"title": value}
    if field == "status":
        return {"status": TaskStatus.parse(value)}
    return {"priority": parse_priority(value)}


async def cmd_help(session: TaskSession, args: str, emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


async def cmd_status(session: TaskSession, args: str, emit: CommandEmitter | None = None) -> str:
    editor = session.editor
    editing = "-" if editor.editing_id is None else str(editor.editing_id)
    return (
        "Status:\n"
        f"  Mode: {'MOCK' if editor.mock_mode else 'LIVE'}\n"
        f"  Store: {session.store.describe()}\n"
        f"  Tasks shown: {len(session.state.tasks)}\n"
        f"  Search: {editor.search_title or '-'}\n"
        f"  Sort by priority: {'ON' if editor.sort_by_priority else 'OFF'}\n"
        f"  New task form: {render_draft(editor.new_draft)}\n"
        f"  Editing: {editing}"
    )


async def cmd_list(session: TaskSession, args: str, emit: CommandEmitter | None = None) -> str:
    await session.list()
    return render_session(session)


async def cmd_search(session: TaskSession, args: str, emit: CommandEmitter | None = None) -> str:
    """
    /search text  -> show tasks whose title contains text
    /search       -> clear the search
    """
    await session.search(args)
    return render_session(session)


async def cmd_sort(session: TaskSession, args: str, emit: CommandEmitter | None = None) -> str:
    await session.toggle_sort()
    return render_session(session)


async def cmd_new(session: TaskSession, args: str, emit: CommandEmitter | None = None) -> str:
    """
    /new                      -> show the new task form
    /new title|status|priority <value>
    """
    if args:
        parsed = _parse_field(args)
        if parsed is None:
            return "Usage: /new title|status|priority <value>."
        try:
            session.set_new_draft(**_field_kwargs(*parsed))
        except ValueError as e:
            return str(e)
    return "New task: " + render_draft(session.editor.new_draft)


async def cmd_add(session: TaskSession, args: str, emit: CommandEmitter | None = None) -> str:
    """
    /add            -> submit the new task form
    /add some title -> set the form title, then submit
    """
    if args:
        session.set_new_draft(title=args)
    await session.create()
    return render_session(session)


async def cmd_edit(session: TaskSession, args: str, emit: CommandEmitter | None = None) -> str:
    task_id = _parse_task_id(args)
    if task_id is None:
        return "Usage: /edit <id>."
    try:
        session.start_edit(task_id)
    except KeyError:
        return f"No task with id {task_id} in the current list."
    return (
        f"Editing task {task_id}: {render_draft(session.editor.edit_draft)}\n"
        "Use /set title|status|priority <value>, then /save or /cancel."
    )


async def cmd_set(session: TaskSession, args: str, emit: CommandEmitter | None = None) -> str:
    if session.editor.editing_id is None:
        return "Nothing is being edited. Use /edit <id> first."
    parsed = _parse_field(args)
    if parsed is None:
        return "Usage: /set title|status|priority <value>."
    try:
        draft = session.set_edit_draft(**_field_kwargs(*parsed))
    except ValueError as e:
        return str(e)
    return f"Editing task {session.editor.editing_id}: {render_draft(draft)}"


async def cmd_save(session: TaskSession, args: str, emit: CommandEmitter | None = None) -> str:
    task_id = session.editor.editing_id
    if task_id is None:
        return "Nothing is being edited. Use /edit <id> first."
    await session.update(task_id)
    return render_session(session)


async def cmd_cancel(session: TaskSession, args: str, emit: CommandEmitter | None = None) -> str:
    if session.editor.editing_id is None:
        return "Nothing is being edited."
    session.cancel_edit()
    return "Edit cancelled."


async def cmd_delete(session: TaskSession, args: str, emit: CommandEmitter | None = None) -> str:
    task_id = _parse_task_id(args)
    if task_id is None:
        return "Usage: /delete <id>."
    if await session.delete(task_id) is None:
        return "Delete cancelled."
    return render_session(session)


async def cmd_mock(session: TaskSession, args: str, emit: CommandEmitter | None = None) -> str:
    """
    /mock      -> show mode
    /mock on   -> use mock data
    /mock off  -> use the API
    """
    if not args.strip():
        state = "ON" if session.editor.mock_mode else "OFF"
        return f"Mock mode is currently {state}. Use /mock on or /mock off."

    arg = args.split()[0].lower()
    if arg in ("on", "1", "true", "yes"):
        enabled = True
    elif arg in ("off", "0", "false", "no"):
        enabled = False
    else:
        return "Usage: /mock on or /mock off."

    if session.editor.mock_mode == enabled:
        return f"Mock mode is already {'ON' if enabled else 'OFF'}."

    session.set_mock_mode(enabled)
    if emit:
        emit(f"Mock mode {'ON' if enabled else 'OFF'}. Reloading...")
    await session.list()
    return render_session(session)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show mode, store, query and forms.")
registry.register("list", cmd_list, help_text="Reload the task list.", aliases=["ls"])
registry.register("search", cmd_search, help_text="Filter by title: /search <text> (no text clears).")
registry.register("sort", cmd_sort, help_text="Toggle sorting by priority.")
registry.register("new", cmd_new, help_text="Show or edit the new task form: /new title|status|priority <value>.")
registry.register("add", cmd_add, help_text="Add a task: /add [title...].")
registry.register("edit", cmd_edit, help_text="Start editing a task: /edit <id>.")
registry.register("set", cmd_set, help_text="Change the edited task: /set title|status|priority <value>.")
registry.register("save", cmd_save, help_text="Save the edited task.")
registry.register("cancel", cmd_cancel, help_text="Stop editing without saving.")
registry.register("delete", cmd_delete, help_text="Delete a task (asks first): /delete <id>.", aliases=["rm"])
registry.register("mock", cmd_mock, help_text="Use mock data or the API: /mock on | /mock off.")
