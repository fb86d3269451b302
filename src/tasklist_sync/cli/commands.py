# src/tasklist_sync/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
from collections.abc import Awaitable, Callable
from typing import cast

from ..core.state import AppState
from ..core.synchronizer import Operation, OpStatus
from ..tasks.task_models import Task

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], Awaitable[str]]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], Awaitable[str]]
CommandHandler = CommandHandler2 | CommandHandler3


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /list, ...)."""

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
        except (TypeError, ValueError):
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
        lines.append("  Any other text creates a task with that title.")
        return "\n".join(lines)


registry = CommandRegistry()


def render_tasks(state: AppState) -> str:
    """Numbered list view: "N. [x] title" lines under the progress summary."""
    sync = state.sync
    lines = [sync.progress().summary()]
    if sync.loading:
        lines.append("Loading tasks...")
    elif not sync.tasks:
        lines.append("No tasks yet. Create one to get started!")
    for i, task in enumerate(sync.tasks, start=1):
        mark = "x" if task.completed else " "
        lines.append(f"{i}. [{mark}] {task.title}")
    return "\n".join(lines)


def describe_failure(op: Operation) -> str:
    msg = op.error.message if op.error is not None else "unknown error"
    return f"{op.kind.value.capitalize()} failed: {msg}"


def _pick_task(state: AppState, args: list[str]) -> Task | str:
    """Resolve a 1-based list position from args, or return a usage message."""
    if not args:
        return "Give the task number shown in the list, e.g. /done 2."
    try:
        pos = int(args[0])
    except ValueError:
        return f"Not a task number: {args[0]}"

    tasks = state.sync.tasks
    if pos < 1 or pos > len(tasks):
        return f"No task #{pos} (list has {len(tasks)} tasks)."
    return tasks[pos - 1]


async def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


async def cmd_list(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    if emit:
        with contextlib.suppress(Exception):
            emit("Loading tasks...")

    op = await state.sync.refresh()
    if not op.ok:
        return f"{describe_failure(op)}\n{render_tasks(state)}"
    return render_tasks(state)


async def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <title>  -> create a task
    /add          -> retry the draft kept from a failed create
    """
    title = " ".join(args) if args else None
    op = await state.sync.create(title)
    if op.status == OpStatus.SKIPPED:
        return "Task title is empty; nothing to add."
    if not op.ok:
        return f"{describe_failure(op)}\nDraft kept: {state.sync.draft!r} (use /add to retry)"
    return render_tasks(state)


async def cmd_done(state: AppState, args: list[str]) -> str:
    picked = _pick_task(state, args)
    if isinstance(picked, str):
        return picked

    op = await state.sync.toggle(picked)
    if not op.ok:
        return describe_failure(op)
    return render_tasks(state)


async def cmd_rm(state: AppState, args: list[str]) -> str:
    picked = _pick_task(state, args)
    if isinstance(picked, str):
        return picked

    op = await state.sync.remove(picked.id)
    if not op.ok:
        return describe_failure(op)
    return render_tasks(state)


async def cmd_status(state: AppState, args: list[str]) -> str:
    sync = state.sync
    err = sync.last_error.message if sync.last_error is not None else "none"
    return (
        "Status:\n"
        f"  Store: {state.backend}\n"
        f"  Tasks: {sync.progress().summary()}\n"
        f"  Requests in flight: {len(sync.in_flight)}\n"
        f"  Last error: {err}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Reload the task list from the store.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Create a task: /add <title>.")
registry.register(
    "done", cmd_done, help_text="Toggle completion of task N: /done N.", aliases=["toggle"]
)
registry.register("rm", cmd_rm, help_text="Delete task N: /rm N.", aliases=["del"])
registry.register("status", cmd_status, help_text="Show store backend, progress and last error.")
