# src/tasklist_sync/core/synchronizer.py

from __future__ import annotations

"""
Client-side task list synchronizer.

Owns the local view of the task list and keeps it consistent with the Store:
- refresh: replace the whole list with the Store's ordered listing
- create:  prepend the record the Store returns
- toggle:  replace the matching record in place (same index)
- remove:  filter the record out

Policy is confirm-then-apply: local state changes only after the Store call succeeds.
Failures are reported (log + last_error + Operation.error) and never raised to the caller.

Concurrent operations are not serialized. Each applies its result when it resolves,
so two toggles of the same task race and the last response to arrive wins.
"""

import contextlib
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import TypeVar

from ..tasks.task_models import Progress, Task, TaskId
from .ports import StateListener, StoreError, TaskStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OpKind(StrEnum):
    REFRESH = "refresh"
    CREATE = "create"
    TOGGLE = "toggle"
    REMOVE = "remove"


class OpStatus(StrEnum):
    PENDING = "pending"
    APPLIED = "applied"
    FAILED = "failed"
    SKIPPED = "skipped"  # create() with a blank title: nothing was sent


@dataclass(slots=True, eq=False)
class Operation:
    """Lifecycle record of one intent: pending -> applied | failed."""

    kind: OpKind
    task_id: TaskId | None = None
    status: OpStatus = OpStatus.PENDING
    error: StoreError | None = None

    @property
    def ok(self) -> bool:
        return self.status == OpStatus.APPLIED


class Synchronizer:
    def __init__(self, store: TaskStore) -> None:
        self._store = store
        self._tasks: tuple[Task, ...] = ()
        self._refreshing = 0
        self._draft = ""
        self._last_error: StoreError | None = None
        self._in_flight: list[Operation] = []
        self._listeners: list[StateListener] = []

    # ---- read access ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._tasks

    @property
    def loading(self) -> bool:
        return self._refreshing > 0

    @property
    def draft(self) -> str:
        return self._draft

    @draft.setter
    def draft(self, text: str) -> None:
        self._draft = text
        self._notify()

    @property
    def last_error(self) -> StoreError | None:
        return self._last_error

    @property
    def in_flight(self) -> tuple[Operation, ...]:
        return tuple(self._in_flight)

    def get(self, task_id: TaskId) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def progress(self) -> Progress:
        return Progress.of(self._tasks)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a change listener. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("State listener failed.")

    # ---- operation plumbing ----

    async def _call(self, op: Operation, call: Awaitable[T], what: str) -> T | None:
        """
        Await a Store call for `op`.

        Returns the result on success. On failure records the error on the
        operation and in last_error, logs it, and returns None.
        """
        self._in_flight.append(op)
        try:
            result = await call
        except StoreError as e:
            err = e
            logger.error("Error %s: %s", what, e.message)
        except Exception as e:
            err = StoreError(str(e) or e.__class__.__name__)
            logger.exception("Unexpected error %s", what)
        else:
            op.status = OpStatus.APPLIED
            self._last_error = None
            return result
        finally:
            with contextlib.suppress(ValueError):
                self._in_flight.remove(op)

        op.status = OpStatus.FAILED
        op.error = err
        self._last_error = err
        return None

    # ---- intents ----

    async def refresh(self) -> Operation:
        op = Operation(OpKind.REFRESH)
        self._refreshing += 1
        self._notify()
        try:
            tasks = await self._call(op, self._store.list_tasks(), "getting list")
        finally:
            self._refreshing -= 1

        if op.ok and tasks is not None:
            self._tasks = tuple(tasks)
            logger.debug("Refreshed task list: %d tasks", len(self._tasks))
        self._notify()
        return op

    async def create(self, title: str | None = None) -> Operation:
        """
        Create a task from `title` (or from the current draft when omitted).

        Blank titles are a no-op. The draft is cleared only when the Store
        confirms the insert; on failure it keeps what the user typed.
        """
        text = self._draft if title is None else title
        clean = text.strip()
        if not clean:
            return Operation(OpKind.CREATE, status=OpStatus.SKIPPED)

        if text != self._draft:
            self._draft = text
            self._notify()

        op = Operation(OpKind.CREATE)
        task = await self._call(op, self._store.create_task(clean), "creating task")
        if op.ok and task is not None:
            op.task_id = task.id
            # A refresh that resolved meanwhile may already contain the new row.
            rest = tuple(t for t in self._tasks if t.id != task.id)
            self._tasks = (task, *rest)
            self._draft = ""
            logger.info("Task created id=%s", task.id)
        self._notify()
        return op

    async def toggle(self, task: Task) -> Operation:
        op = Operation(OpKind.TOGGLE, task_id=task.id)
        updated = await self._call(
            op,
            self._store.update_task(task.id, completed=not task.completed),
            "updating task",
        )
        if op.ok and updated is not None:
            self._tasks = tuple(updated if t.id == task.id else t for t in self._tasks)
            logger.info("Task toggled id=%s completed=%s", task.id, updated.completed)
        self._notify()
        return op

    async def remove(self, task_id: TaskId) -> Operation:
        op = Operation(OpKind.REMOVE, task_id=task_id)
        await self._call(op, self._store.delete_task(task_id), "deleting task")
        if op.ok:
            self._tasks = tuple(t for t in self._tasks if t.id != task_id)
            logger.info("Task deleted id=%s", task_id)
        self._notify()
        return op
