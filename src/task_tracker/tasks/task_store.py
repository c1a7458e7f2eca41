# src/task_tracker/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .task_models import Task, TaskStatus

logger = logging.getLogger(__name__)


class CorruptStoreError(ValueError):
    """The backing file exists but does not hold a JSON array of tasks."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


def dump_tasks(tasks: Iterable[Task], indent: int = 2) -> str:
    return json.dumps([t.to_json() for t in tasks], ensure_ascii=False, indent=indent)


def _task_from_json(raw: Any, index: int) -> Task:
    if not isinstance(raw, dict):
        raise ValueError(f"item {index} is not an object")

    task_id = raw.get("Id")
    if isinstance(task_id, bool) or not isinstance(task_id, int):
        raise ValueError(f"item {index} has no integer Id")

    description = raw.get("Description", "")
    if not isinstance(description, str):
        raise ValueError(f"item {index} has a non-string Description")

    try:
        status = TaskStatus.from_code(raw.get("Status", TaskStatus.NOT_DONE.code))
    except ValueError as e:
        raise ValueError(f"item {index}: {e}") from None

    return Task(id=task_id, description=description, status=status)


def parse_tasks(text: str) -> list[Task]:
    """
    Decode the file content.

    Empty content and JSON null both mean "no tasks".
    Anything else must be an array of task objects; raises ValueError otherwise.
    """
    if not text.strip():
        return []
    data = json.loads(text)
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError("top-level value is not an array")
    return [_task_from_json(item, i) for i, item in enumerate(data)]


class TaskStore:
    """
    JSON file task store.

    The whole file is read on load() and rewritten on save();
    between the two, all operations work on the in-memory list.

    Not safe for concurrent writers (last save wins).
    """

    def __init__(self, path: str | Path = "tasks.json", *, indent: int = 2) -> None:
        self._path = Path(path)
        self._indent = indent
        self._tasks: list[Task] = []

    @property
    def path(self) -> Path:
        return self._path

    # ---- persistence ----

    def load(self) -> list[Task]:
        if not self._path.exists():
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text("[]", "utf-8")
            logger.info("Created empty task file %s", self._path)
            self._tasks = []
            return self.tasks()

        text = self._path.read_text("utf-8")
        try:
            self._tasks = parse_tasks(text)
        except (ValueError, RecursionError) as e:
            # json.JSONDecodeError is a ValueError; absurdly deep nesting hits the recursion limit.
            raise CorruptStoreError(self._path, str(e)) from e

        logger.debug("Loaded %d tasks from %s", len(self._tasks), self._path)
        return self.tasks()

    def save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_name(self._path.name + ".tmp")
        data = dump_tasks(self._tasks, self._indent).encode("utf-8")
        try:
            tmp.write_bytes(data)
            os.replace(tmp, self._path)
        except Exception:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise
        logger.debug("Saved %d tasks to %s", len(self._tasks), self._path)

    # ---- queries ----

    def tasks(self) -> list[Task]:
        return list(self._tasks)

    def count_tasks(self) -> int:
        return len(self._tasks)

    def get_task(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def list_tasks(self, status: TaskStatus | None = None) -> list[Task]:
        if status is None:
            return self.tasks()
        return [t for t in self._tasks if t.status is status]

    def next_id(self) -> int:
        # Last element + 1, not max + 1: removing the tail frees its id for reuse.
        if not self._tasks:
            return 1
        return self._tasks[-1].id + 1

    # ---- mutations ----

    def add_task(self, description: str) -> Task:
        task = Task(id=self.next_id(), description=description, status=TaskStatus.NOT_DONE)
        self._tasks.append(task)
        logger.debug("Task added id=%s", task.id)
        return task

    def update_task_description(self, task_id: int, description: str) -> Task | None:
        task = self.get_task(task_id)
        if task is None:
            return None
        task.description = description
        logger.debug("Task id=%s description updated", task_id)
        return task

    def update_task_status(self, task_id: int, new_status: TaskStatus) -> Task | None:
        task = self.get_task(task_id)
        if task is None:
            return None
        old = task.status
        task.status = new_status
        logger.debug("Task id=%s status %s -> %s", task_id, old.label, new_status.label)
        return task

    def delete_task(self, task_id: int) -> Task | None:
        task = self.get_task(task_id)
        if task is None:
            return None
        self._tasks.remove(task)
        logger.debug("Task id=%s deleted", task_id)
        return task
