# src/tasklist_sync/connectors/console_connector.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import describe_failure, render_tasks
from ..core.state import AppState
from ..core.synchronizer import OpStatus

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


async def read_line(prompt: str) -> str:
    """
    Read one line of stdin without blocking the event loop.

    input() runs in a daemon thread: a pending read never holds up interpreter
    shutdown, and cancelling the awaiting task returns immediately.
    Raises EOFError at end of input.
    """
    loop = asyncio.get_running_loop()
    fut: asyncio.Future[str] = loop.create_future()

    def _deliver(line: str | None, exc: Exception | None) -> None:
        if fut.done():
            return
        if exc is not None:
            fut.set_exception(exc)
        else:
            fut.set_result(line or "")

    def _reader() -> None:
        try:
            line = input(prompt)
        except Exception as e:
            result: tuple[str | None, Exception | None] = (None, e)
        else:
            result = (line, None)
        # The loop may already be closed if the read outlived the app.
        with contextlib.suppress(RuntimeError):
            loop.call_soon_threadsafe(_deliver, *result)

    threading.Thread(target=_reader, name="console-input", daemon=True).start()
    return await fut


async def run_console_loop(state: AppState) -> None:
    """
    Text presentation layer for the synchronizer.

    Loads the list once at start, then reads lines:
    - "/command args" goes to the command registry
    - any other text creates a task with that title
    """
    logger.info("Console connector started (store=%s).", state.backend)
    _print_ts("[CONSOLE] Type a task to add it. Use /help for commands. Use /exit to quit.\n")

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    op = await state.sync.refresh()
    if not op.ok:
        _print_ts(describe_failure(op))
    _print_ts(render_tasks(state))

    while True:
        try:
            user_input = (await read_line(">>> ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except asyncio.CancelledError:
            # Ctrl+C: asyncio.run cancels the main task.
            logger.info("Console cancelled, exiting.")
            print()
            raise

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = await command_registry.handle(state, user_input, emit=emit)
            if reply is None:
                op = await state.sync.create(user_input)
                if op.status == OpStatus.APPLIED:
                    reply = render_tasks(state)
                elif op.status == OpStatus.FAILED:
                    reply = describe_failure(op)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply:
            _print_ts(reply)

    logger.info("Console connector finished.")
