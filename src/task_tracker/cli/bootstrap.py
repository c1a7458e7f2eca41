# src/task_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- takes settings (injected or loaded once),
- wires the concrete JSON store into AppState,
- loads the tasks so handlers only ever see an in-memory list.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings and load the task file.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().

    Raises CorruptStoreError / OSError when the task file cannot be read.
    """
    if settings is None:
        settings = get_settings()

    store = TaskStore(settings.tasks_path, indent=settings.json_indent)
    store.load()
    logger.debug("TaskStore ready path=%s total=%s", store.path, store.count_tasks())

    return AppState(settings=settings, task_store=store)
