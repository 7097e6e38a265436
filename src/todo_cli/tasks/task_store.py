# src/todo_cli/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any

from ..errors import StoreDecodeError, StoreIOError, wrap_io_error
from .task_models import Task, now_local

logger = logging.getLogger(__name__)


class TaskStore:
    """
    JSON file task store.

    The whole collection lives in memory; every mutation rewrites the full
    snapshot (tasks, file path, next id) to `file_path`.

    Writes go through a temp file in the same directory + os.replace, so an
    interrupted save leaves the previous snapshot intact.

    No locking: one process at a time (last writer wins).
    """

    def __init__(self, file_path: str | Path = "./todo.json") -> None:
        self._file_path = Path(file_path)
        self.tasks: list[Task] = []
        self.next_id: int = 1

    @property
    def file_path(self) -> Path:
        return self._file_path

    # ---- persistence ----

    def load(self) -> None:
        """
        Replace in-memory state with the file contents.

        Missing file or zero-byte file -> keep the empty default.
        """
        path = self._file_path
        if not path.exists():
            logger.debug("No task file at %s, starting empty.", path)
            return

        try:
            raw = path.read_text("utf-8")
        except OSError as e:
            raise wrap_io_error(e, message=f"Cannot read task file {path}") from e
        except UnicodeDecodeError as e:
            raise StoreDecodeError(f"Task file {path} is not UTF-8 text", detail=str(e)) from e

        if not raw:
            logger.debug("Task file %s is empty, starting empty.", path)
            return

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StoreDecodeError(f"Task file {path} is not valid JSON", detail=str(e)) from e

        tasks, next_id = self._decode_document(data)
        self.tasks = tasks
        self.next_id = next_id
        logger.debug("Loaded %d tasks from %s next_id=%s", len(tasks), path, next_id)

    def save(self) -> None:
        """
        Write the full snapshot to `file_path`, overwriting it.

        A symlinked file_path is followed: the link target is rewritten and
        the link stays. The file keeps its permission bits; a new file gets
        0666 minus the umask.
        """
        path = self._file_path
        payload = json.dumps(self._encode_document(), ensure_ascii=False, indent=2)

        tmp_name: str | None = None
        try:
            target = Path(os.path.realpath(path))
            target.parent.mkdir(parents=True, exist_ok=True)
            mode = _file_mode(target)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.write("\n")
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, target)
            tmp_name = None
        except OSError as e:
            raise wrap_io_error(e, message=f"Cannot write task file {path}") from e
        finally:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)

        logger.debug("Saved %d tasks to %s next_id=%s", len(self.tasks), path, self.next_id)

    def _encode_document(self) -> dict[str, Any]:
        return {
            "tasks": [t.to_record() for t in self.tasks],
            "filePath": str(self._file_path),
            "nextId": self.next_id,
        }

    def _decode_document(self, data: Any) -> tuple[list[Task], int]:
        path = self._file_path
        if not isinstance(data, dict):
            raise StoreDecodeError(f"Task file {path} must contain a JSON object")

        raw_tasks = data.get("tasks")
        if raw_tasks is None:
            # Older files store a null list once the last task is deleted.
            raw_tasks = []
        if not isinstance(raw_tasks, list):
            raise StoreDecodeError(f"Task file {path}: 'tasks' must be a list")

        tasks: list[Task] = []
        seen: set[int] = set()
        for i, raw in enumerate(raw_tasks):
            try:
                task = Task.from_record(raw)
            except ValueError as e:
                raise StoreDecodeError(
                    f"Task file {path}: bad task record at index {i}", detail=str(e)
                ) from e
            if task.id in seen:
                raise StoreDecodeError(f"Task file {path}: duplicate task id {task.id}")
            seen.add(task.id)
            tasks.append(task)

        raw_next = data.get("nextId", data.get("next_id"))
        if raw_next is not None and (not isinstance(raw_next, int) or isinstance(raw_next, bool)):
            raise StoreDecodeError(f"Task file {path}: 'nextId' must be an integer")

        floor = max(seen, default=0) + 1
        next_id = raw_next if raw_next is not None else floor
        if next_id < floor:
            logger.warning(
                "Task file %s has nextId=%s below highest id; using %s.", path, next_id, floor
            )
            next_id = floor

        return tasks, next_id

    # ---- public API ----

    def count_tasks(self) -> int:
        return len(self.tasks)

    def get_task(self, task_id: int) -> Task | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def add_task(self, title: str) -> Task:
        task = Task(id=self.next_id, title=title, completed=False, created_at=now_local())
        self.tasks.append(task)
        self.next_id += 1
        try:
            self.save()
        except StoreIOError:
            # Memory mirrors the file: undo when the write did not happen.
            self.tasks.pop()
            self.next_id -= 1
            raise
        logger.debug("Task added id=%s", task.id)
        return task

    def list_tasks(self, show_completed: bool = False) -> list[Task]:
        if show_completed:
            return list(self.tasks)
        return [t for t in self.tasks if not t.completed]

    def complete_task(self, task_id: int) -> bool:
        task = self.get_task(task_id)
        if task is None:
            return False
        was_completed = task.completed
        task.completed = True
        try:
            self.save()
        except StoreIOError:
            task.completed = was_completed
            raise
        logger.debug("Task completed id=%s", task_id)
        return True

    def delete_task(self, task_id: int) -> bool:
        for i, task in enumerate(self.tasks):
            if task.id == task_id:
                del self.tasks[i]
                try:
                    self.save()
                except StoreIOError:
                    self.tasks.insert(i, task)
                    raise
                logger.debug("Task deleted id=%s", task_id)
                return True
        return False


def _file_mode(target: Path) -> int:
    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask
