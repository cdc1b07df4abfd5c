# src/tasktrack/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import cast

from ..core.models import Task, TaskStatus
from ..core.state import AppState

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], Awaitable[str]]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], Awaitable[str]]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /tasks, ...)."""

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
        except Exception:
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return await h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return await h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _fmt_task(t: Task) -> str:
    line = f"[{t.status.value:<11}] {t.id}  {t.title}"
    if t.description:
        line += f" - {t.description}"
    return line


def _working(emit: CommandEmitter | None) -> None:
    if emit is not None:
        emit("...")


async def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


async def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    return (
        "Status:\n"
        f"  Blob dir: {getattr(settings, 'blob_dir', '?')}\n"
        f"  Storage key: {state.store.key}\n"
        f"  Snapshot source: {state.store.snapshot_source}\n"
        f"  Latency: {int(state.store.latency * 1000)} ms\n"
        f"  Tasks: {state.store.count_tasks()}\n"
        f"  Current user: {state.current_user_id}"
    )


async def cmd_tasks(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    _working(emit)
    tasks = await state.api.tasks.list()
    if not tasks:
        return "No tasks."
    lines = [f"Tasks ({len(tasks)}):"]
    lines.extend(f"  {_fmt_task(t)}" for t in tasks)
    return "\n".join(lines)


async def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /add <title>                 -> new TODO task for the current user
    /add <title> | <description>
    """
    text = " ".join(args).strip()
    if not text:
        return "Usage: /add <title> [| description]"

    title, _, description = text.partition("|")
    title = title.strip()
    if not title:
        return "Usage: /add <title> [| description]"

    _working(emit)
    task = await state.api.tasks.create(
        title=title,
        description=description.strip(),
        user_id=state.current_user_id,
    )
    return f"Created: {_fmt_task(task)}"


async def cmd_mark(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/mark <id> <todo|in_progress|done>"""
    if len(args) != 2:
        return "Usage: /mark <id> <todo|in_progress|done>"

    task_id, raw_status = args
    try:
        status = TaskStatus.parse(raw_status)
    except ValueError as e:
        return str(e)

    _working(emit)
    task = await state.api.tasks.update(task_id, status=status)
    if task is None:
        return f"No task with id={task_id}."
    return f"Updated: {_fmt_task(task)}"


async def cmd_rename(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if len(args) < 2:
        return "Usage: /rename <id> <new title>"

    task_id = args[0]
    title = " ".join(args[1:]).strip()

    _working(emit)
    task = await state.api.tasks.update(task_id, title=title)
    if task is None:
        return f"No task with id={task_id}."
    return f"Updated: {_fmt_task(task)}"


async def cmd_rm(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if len(args) != 1:
        return "Usage: /rm <id>"

    _working(emit)
    deleted = await state.api.tasks.delete(args[0])
    return f"Deleted task {args[0]}." if deleted else f"No task with id={args[0]}."


async def cmd_user(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /user       -> show the current user
    /user <id>  -> look up another user
    """
    user_id = args[0] if args else state.current_user_id

    _working(emit)
    user = await state.api.users.get(user_id)
    if user is None:
        return f"No user with id={user_id}."
    return f"User {user.id}: {user.name} <{user.email}>"


async def cmd_exit(state: AppState, args: list[str]) -> str:
    # The console loop intercepts /exit before dispatch; other callers only get a hint.
    return "Use /exit or /quit at the console prompt to leave."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show store status (key/source/latency).")
registry.register("tasks", cmd_tasks, help_text="List all tasks.", aliases=["ls", "list"])
registry.register("add", cmd_add, help_text="Create a task: /add <title> [| description].")
registry.register("mark", cmd_mark, help_text="Set task status: /mark <id> <todo|in_progress|done>.")
registry.register("rename", cmd_rename, help_text="Rename a task: /rename <id> <title>.")
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <id>.", aliases=["delete", "del"])
registry.register("user", cmd_user, help_text="Show a user: /user [id].")
registry.register("exit", cmd_exit, help_text="Quit the console.", aliases=["quit"])
