# tests/fakes.py

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from typing import Any

from tasklist_sync.core.ports import StoreError
from tasklist_sync.tasks.task_models import Task, TaskId

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def make_task(task_id: int, title: str, *, completed: bool = False, minute: int = 0) -> Task:
    """Task whose created_at is BASE_TIME + `minute` minutes."""
    return Task(
        id=task_id,
        title=title,
        completed=completed,
        created_at=BASE_TIME + timedelta(minutes=minute),
    )


class FakeTaskStore:
    """
    In-memory TaskStore used for synchronizer tests.

    - Records every call for assertions
    - `fail[method] = "message"` makes that method raise StoreError
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self.rows: dict[TaskId, Task] = {t.id: t for t in tasks or []}
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.fail: dict[str, str] = {}
        self._next_id = max((int(t.id) for t in self.rows.values()), default=0) + 1
        self._minute = max((t.created_at for t in self.rows.values()), default=BASE_TIME)

    def _enter(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        msg = self.fail.get(name)
        if msg is not None:
            raise StoreError(msg)

    async def list_tasks(self) -> list[Task]:
        self._enter("list_tasks")
        return sorted(self.rows.values(), key=lambda t: (t.created_at, t.id), reverse=True)

    async def create_task(self, title: str) -> Task:
        self._enter("create_task", title)
        self._minute += timedelta(minutes=1)
        task = Task(id=self._next_id, title=title, completed=False, created_at=self._minute)
        self._next_id += 1
        self.rows[task.id] = task
        return task

    async def update_task(self, task_id: TaskId, *, completed: bool) -> Task:
        self._enter("update_task", task_id, completed)
        if task_id not in self.rows:
            raise StoreError(f"Task not found: {task_id}")
        self.rows[task_id] = replace(self.rows[task_id], completed=completed)
        return self.rows[task_id]

    async def delete_task(self, task_id: TaskId) -> None:
        self._enter("delete_task", task_id)
        self.rows.pop(task_id, None)

    async def close(self) -> None:
        self._enter("close")

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


@dataclass(slots=True)
class PendingCall:
    name: str
    args: tuple[Any, ...]
    future: asyncio.Future = field(repr=False)

    def resolve(self, value: Any = None) -> None:
        self.future.set_result(value)

    def reject(self, message: str) -> None:
        self.future.set_exception(StoreError(message))


class GatedTaskStore:
    """
    TaskStore whose calls stay in flight until the test resolves them.

    Lets tests control the order in which Store responses arrive.
    """

    def __init__(self) -> None:
        self.pending: list[PendingCall] = []

    async def _gate(self, name: str, *args: Any) -> Any:
        call = PendingCall(name, args, asyncio.get_running_loop().create_future())
        self.pending.append(call)
        return await call.future

    async def wait_for_calls(self, n: int) -> None:
        for _ in range(100):
            if len(self.pending) >= n:
                return
            await asyncio.sleep(0)
        raise AssertionError(f"expected {n} store calls, got {len(self.pending)}")

    async def list_tasks(self) -> list[Task]:
        return await self._gate("list_tasks")

    async def create_task(self, title: str) -> Task:
        return await self._gate("create_task", title)

    async def update_task(self, task_id: TaskId, *, completed: bool) -> Task:
        return await self._gate("update_task", task_id, completed)

    async def delete_task(self, task_id: TaskId) -> None:
        return await self._gate("delete_task", task_id)

    async def close(self) -> None:
        return None
