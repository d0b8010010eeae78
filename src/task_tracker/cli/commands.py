# src/task_tracker/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from datetime import date, datetime
from typing import cast

from ..core.state import AppState
from ..tasks.errors import TaskNotFoundError
from ..tasks.task_models import Task

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

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

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- argument parsing (validation happens here, before the store is called) ----


def _is_ascii_digits(s: str) -> bool:
    # str.isdigit alone also accepts non-ASCII digits such as "\u0663".
    return s.isascii() and s.isdigit()


def parse_task_id(raw: str) -> int | None:
    if not _is_ascii_digits(raw):
        return None
    return int(raw)


def parse_due(raw: str) -> datetime | None:
    """Accept YYYY-MM-DD or a full ISO timestamp; None if it does not parse."""
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


def parse_date_args(args: list[str]) -> date | None:
    """Accept either ["YYYY-MM-DD"] or ["yyyy", "mm", "dd"]."""
    try:
        if len(args) == 1 and args[0].isascii():
            return date.fromisoformat(args[0])
        if len(args) == 3 and all(_is_ascii_digits(a) for a in args):
            return date(int(args[0]), int(args[1]), int(args[2]))
    except ValueError:
        return None
    return None


def format_task(task: Task) -> str:
    line = f"#{task.id} {task.text}"
    if task.tags:
        line += f" [tags: {', '.join(task.tags)}]"
    if task.due is not None:
        line += f" (due {task.due.isoformat()})"
    return line


def _format_list(title: str, tasks: list[Task], empty: str) -> str:
    if not tasks:
        return empty
    return "\n".join([title, *(f"  {format_task(t)}" for t in tasks)])


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    backend = getattr(state.settings, "store_backend", "memory")
    return (
        "Status:\n"
        f"  Store backend: {backend}\n"
        f"  Live tasks: {state.task_store.count_tasks()}"
    )


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add buy milk #home #errands @2024-05-01T18:00
    Words starting with # are tags, one word starting with @ is the due date.
    """
    words: list[str] = []
    tags: list[str] = []
    due: datetime | None = None

    for a in args:
        if a.startswith("#") and len(a) > 1:
            tags.append(a[1:])
        elif a.startswith("@") and len(a) > 1:
            if due is not None:
                return "Only one due date is allowed."
            due = parse_due(a[1:])
            if due is None:
                return f"Invalid due date: {a[1:]}. Use YYYY-MM-DD or YYYY-MM-DDTHH:MM."
        else:
            words.append(a)

    text = " ".join(words)
    if not text:
        return "Usage: /add <text> [#tag ...] [@YYYY-MM-DD[THH:MM]]"

    task_id = state.task_store.create_task(text, tags, due)
    logger.debug("Console created task id=%s", task_id)
    return f"Created task #{task_id}."


def cmd_get(state: AppState, args: list[str]) -> str:
    task_id = parse_task_id(args[0]) if len(args) == 1 else None
    if task_id is None:
        return "Usage: /get <id>"
    try:
        return format_task(state.task_store.get_task(task_id))
    except TaskNotFoundError:
        return f"Task #{task_id} not found."


def cmd_list(state: AppState, args: list[str]) -> str:
    return _format_list("Tasks:", state.task_store.get_all_tasks(), "No tasks.")


def cmd_del(state: AppState, args: list[str]) -> str:
    task_id = parse_task_id(args[0]) if len(args) == 1 else None
    if task_id is None:
        return "Usage: /del <id>"
    try:
        state.task_store.delete_task(task_id)
    except TaskNotFoundError:
        return f"Task #{task_id} not found."
    return f"Deleted task #{task_id}."


def cmd_clear(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if emit:
        emit(f"Deleting {state.task_store.count_tasks()} task(s)...")
    state.task_store.delete_all_tasks()
    return "All tasks deleted."


def cmd_tag(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /tag <name>"
    tag = args[0].removeprefix("#")
    tasks = state.task_store.get_tasks_by_tag(tag)
    return _format_list(f"Tasks tagged {tag}:", tasks, f"No tasks tagged {tag}.")


def cmd_due(state: AppState, args: list[str]) -> str:
    day = parse_date_args(args)
    if day is None:
        return "Usage: /due <YYYY-MM-DD> or /due <yyyy> <mm> <dd>"
    tasks = state.task_store.get_tasks_by_due_date(day.year, day.month, day.day)
    return _format_list(
        f"Tasks due {day.isoformat()}:", tasks, f"No tasks due {day.isoformat()}."
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show store backend and task count.")
registry.register(
    "add", cmd_add, help_text="Create a task: /add <text> [#tag ...] [@YYYY-MM-DD[THH:MM]]."
)
registry.register("get", cmd_get, help_text="Show one task: /get <id>.")
registry.register("list", cmd_list, help_text="List all tasks.", aliases=["ls"])
registry.register("del", cmd_del, help_text="Delete a task: /del <id>.", aliases=["rm"])
registry.register("clear", cmd_clear, help_text="Delete all tasks.")
registry.register("tag", cmd_tag, help_text="Tasks with a tag: /tag <name>.")
registry.register("due", cmd_due, help_text="Tasks due on a date: /due <YYYY-MM-DD>.")
