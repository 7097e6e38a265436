# src/todo_cli/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


def now_local() -> datetime:
    return datetime.now().astimezone()


@dataclass(slots=True)
class Task:
    id: int
    title: str
    completed: bool = False
    created_at: datetime = field(default_factory=now_local)

    @property
    def status_marker(self) -> str:
        return "[✓]" if self.completed else "[ ]"

    def to_record(self) -> dict[str, Any]:
        """
        JSON record for the backing file.

        Field names match files written by earlier releases:
        id / title / completed / time.
        """
        return {
            "id": self.id,
            "title": self.title,
            "completed": self.completed,
            "time": self.created_at.isoformat(),
        }

    @classmethod
    def from_record(cls, raw: Any) -> Task:
        """
        Build a Task from a decoded JSON record.

        Raises ValueError on a record of the wrong shape; the store turns that
        into StoreDecodeError with the offending position.
        """
        if not isinstance(raw, dict):
            raise ValueError("task record must be an object")

        task_id = raw.get("id")
        if not isinstance(task_id, int) or isinstance(task_id, bool) or task_id < 1:
            raise ValueError(f"invalid id: {task_id!r}")

        title = raw.get("title")
        if not isinstance(title, str):
            raise ValueError(f"invalid title for id={task_id}")

        completed = raw.get("completed", False)
        if not isinstance(completed, bool):
            raise ValueError(f"invalid completed flag for id={task_id}")

        raw_time = raw.get("time", raw.get("created_at"))
        if not isinstance(raw_time, str):
            raise ValueError(f"missing timestamp for id={task_id}")

        return cls(
            id=task_id,
            title=title,
            completed=completed,
            created_at=_parse_timestamp(raw_time),
        )


def _parse_timestamp(raw: str) -> datetime:
    # RFC 3339 with nanoseconds: fromisoformat truncates past microseconds.
    try:
        dt = datetime.fromisoformat(raw.strip())
    except ValueError as e:
        raise ValueError(f"invalid timestamp: {raw!r}") from e
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt
