# src/tasklist_sync/tasks/task_store.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import sqlite3
import time
from pathlib import Path

from ..core.ports import StoreError
from .task_models import Task, TaskId

logger = logging.getLogger(__name__)


class SqliteTaskStore:
    """
    SQLite implementation of the TaskStore port.

    The schema is intentionally simple:
    - create table if missing
    - created_at is a POSIX timestamp assigned at insert time

    Thread-safety:
    - each call opens its own SQLite connection
    - blocking work runs in a worker thread (asyncio.to_thread), so the
      event loop stays responsive while a query is running
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._ensure_schema()
            total = self.count_tasks()
        except (sqlite3.Error, OSError) as e:
            raise StoreError(f"Database error: {e}") from e
        logger.info("SqliteTaskStore ready db=%s total=%s", self._db_path, total)

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(sqlite3.DatabaseError):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS todos (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    completed INTEGER NOT NULL DEFAULT 0,
                    created_at REAL NOT NULL
                )
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_todos_created ON todos(created_at)")
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task.from_record(
            {
                "id": int(row["id"]),
                "title": row["title"],
                "completed": bool(row["completed"]),
                "created_at": float(row["created_at"]),
            }
        )

    @staticmethod
    def _coerce_id(task_id: TaskId) -> int:
        try:
            return int(task_id)
        except (TypeError, ValueError) as e:
            raise StoreError(f"Invalid task id: {task_id!r}") from e

    # ---- blocking API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            (n,) = conn.execute("SELECT COUNT(*) FROM todos").fetchone()
            return int(n)
        finally:
            conn.close()

    def list_tasks_sync(self) -> list[Task]:
        conn = self._get_conn()
        try:
            rows = conn.execute(
                "SELECT * FROM todos ORDER BY created_at DESC, id DESC"
            ).fetchall()
            return [self._row_to_task(r) for r in rows]
        finally:
            conn.close()

    def create_task_sync(self, title: str) -> Task:
        title = (title or "").strip()
        if not title:
            raise StoreError("title is required")

        conn = self._get_conn()
        try:
            cur = conn.execute(
                "INSERT INTO todos(title, completed, created_at) VALUES (?, 0, ?)",
                (title, time.time()),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise StoreError("SQLite did not return lastrowid for todos insert")
            row = conn.execute("SELECT * FROM todos WHERE id = ?", (int(rowid),)).fetchone()
            task = self._row_to_task(row)
            logger.debug("Task added id=%s", task.id)
            return task
        finally:
            conn.close()

    def update_task_sync(self, task_id: TaskId, *, completed: bool) -> Task:
        tid = self._coerce_id(task_id)
        conn = self._get_conn()
        try:
            cur = conn.execute(
                "UPDATE todos SET completed = ? WHERE id = ?",
                (1 if completed else 0, tid),
            )
            conn.commit()
            if cur.rowcount != 1:
                raise StoreError(f"Task not found: {task_id}")
            row = conn.execute("SELECT * FROM todos WHERE id = ?", (tid,)).fetchone()
            logger.debug("Task updated id=%s completed=%s", tid, completed)
            return self._row_to_task(row)
        finally:
            conn.close()

    def delete_task_sync(self, task_id: TaskId) -> None:
        tid = self._coerce_id(task_id)
        conn = self._get_conn()
        try:
            cur = conn.execute("DELETE FROM todos WHERE id = ?", (tid,))
            conn.commit()
            logger.debug("Task delete id=%s rows=%s", tid, cur.rowcount)
        finally:
            conn.close()

    # ---- TaskStore port ----

    async def _run(self, fn, *args, **kwargs):
        try:
            return await asyncio.to_thread(fn, *args, **kwargs)
        except sqlite3.Error as e:
            raise StoreError(f"Database error: {e}") from e

    async def list_tasks(self) -> list[Task]:
        return await self._run(self.list_tasks_sync)

    async def create_task(self, title: str) -> Task:
        return await self._run(self.create_task_sync, title)

    async def update_task(self, task_id: TaskId, *, completed: bool) -> Task:
        return await self._run(self.update_task_sync, task_id, completed=completed)

    async def delete_task(self, task_id: TaskId) -> None:
        await self._run(self.delete_task_sync, task_id)

    async def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return
