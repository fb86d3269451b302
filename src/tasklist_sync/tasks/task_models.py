# src/tasklist_sync/tasks/task_models.py

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from ..core.ports import StoreError

TaskId = int | str


def parse_timestamp(raw: Any) -> datetime:
    """
    Normalize a Store timestamp to an aware UTC datetime.

    Accepts:
    - datetime (naive values are treated as UTC)
    - ISO-8601 strings ("2024-01-01T10:00:00Z", "...+00:00")
    - POSIX timestamps (int/float, as stored by SqliteTaskStore)
    """
    if isinstance(raw, datetime):
        dt = raw
    elif isinstance(raw, bool):
        raise StoreError(f"Invalid created_at: {raw!r}")
    elif isinstance(raw, (int, float)):
        dt = datetime.fromtimestamp(float(raw), tz=UTC)
    elif isinstance(raw, str) and raw.strip():
        try:
            dt = datetime.fromisoformat(raw.strip())
        except ValueError as e:
            raise StoreError(f"Invalid created_at: {raw!r}") from e
    else:
        raise StoreError(f"Invalid created_at: {raw!r}")

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


@dataclass(frozen=True, slots=True)
class Task:
    id: TaskId
    title: str
    completed: bool
    created_at: datetime

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Task:
        """Build a Task from a Store wire record ({id, title, completed, created_at})."""
        if not isinstance(record, Mapping):
            raise StoreError(f"Unexpected task record: {record!r}")

        missing = [k for k in ("id", "title", "created_at") if record.get(k) is None]
        if missing:
            raise StoreError(f"Task record is missing fields: {', '.join(missing)}")

        task_id = record["id"]
        if not isinstance(task_id, (int, str)) or isinstance(task_id, bool):
            raise StoreError(f"Invalid task id: {task_id!r}")

        title = str(record["title"])
        if not title.strip():
            raise StoreError(f"Task record has a blank title: id={task_id!r}")

        return cls(
            id=task_id,
            title=title,
            completed=bool(record.get("completed") or False),
            created_at=parse_timestamp(record["created_at"]),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "completed": self.completed,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class Progress:
    completed: int
    total: int

    @classmethod
    def of(cls, tasks: Iterable[Task]) -> Progress:
        items = list(tasks)
        return cls(completed=sum(1 for t in items if t.completed), total=len(items))

    @property
    def ratio(self) -> float:
        if self.total <= 0:
            return 0.0
        return self.completed / self.total

    def summary(self) -> str:
        if self.total <= 0:
            return "Start adding tasks"
        return f"{self.completed} out of {self.total} completed"
