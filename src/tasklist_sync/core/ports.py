# src/tasklist_sync/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The Synchronizer depends on the TaskStore Protocol instead of a concrete backend.
This keeps the SQLite and REST stores swappable and makes testing easier.
"""

from typing import TYPE_CHECKING, Callable, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Task, TaskId

StateListener = Callable[[], None]
# Called after every local state change (list, loading, draft, last error).


class StoreError(Exception):
    """
    The single failure kind of the Store boundary.

    Network failures, validation failures, missing rows, malformed responses:
    all of them are a StoreError carrying a human-readable message.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class TaskStore(Protocol):
    """
    Remote persistent store that owns canonical task state.

    Every method raises StoreError on failure.
    """

    async def list_tasks(self) -> list[Task]:
        """All tasks, ordered by created_at descending (newest first)."""
        ...

    async def create_task(self, title: str) -> Task:
        """Insert a task; the store assigns id, created_at and completed=False."""
        ...

    async def update_task(self, task_id: TaskId, *, completed: bool) -> Task:
        """Set the completion flag and return the full updated record."""
        ...

    async def delete_task(self, task_id: TaskId) -> None: ...

    async def close(self) -> None: ...
