# src/task_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the command handlers.

Handlers depend on Protocols instead of the concrete JSON store.
This keeps storage swappable and makes testing easier.
"""

from typing import Protocol

from ..tasks.task_models import Task, TaskStatus


class TaskRepo(Protocol):
    # Persistence
    def load(self) -> list[Task]: ...
    def save(self) -> None: ...

    # Queries
    def get_task(self, task_id: int) -> Task | None: ...
    def list_tasks(self, status: TaskStatus | None = None) -> list[Task]: ...
    def count_tasks(self) -> int: ...

    # Mutations (return None when the id is unknown)
    def add_task(self, description: str) -> Task: ...
    def update_task_description(self, task_id: int, description: str) -> Task | None: ...
    def update_task_status(self, task_id: int, new_status: TaskStatus) -> Task | None: ...
    def delete_task(self, task_id: int) -> Task | None: ...
