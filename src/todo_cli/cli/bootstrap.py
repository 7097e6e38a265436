# src/todo_cli/cli/bootstrap.py

"""
CLI bootstrap helpers.

Composition root: turns Settings into a loaded TaskStore.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_store(*, settings: Settings | None = None) -> TaskStore:
    """
    Build a TaskStore for settings.file_path and load it.

    Settings stay injectable so tests never read the real environment.
    Load errors (StoreIOError / StoreDecodeError) propagate: the caller
    decides whether to abort rather than continue with an empty list and
    overwrite the file on the next save.
    """
    if settings is None:
        settings = get_settings()

    store = TaskStore(settings.file_path)
    store.load()
    logger.debug("TaskStore ready file=%s total=%s", store.file_path, store.count_tasks())
    return store
