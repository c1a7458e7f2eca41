# src/task_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any


class TaskStatus(IntEnum):
    """
    Task lifecycle status.

    Notes:
    - codes are explicit and are what gets persisted, never the declaration order
    - transitions are not enforced: any status may be set from any other
    """

    NOT_DONE = 0
    IN_PROGRESS = 1
    DONE = 2

    @property
    def code(self) -> int:
        return int(self.value)

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_code(cls, raw: int) -> TaskStatus:
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise ValueError(f"status code must be an integer, got {raw!r}")
        try:
            return cls(raw)
        except ValueError:
            raise ValueError(f"unknown status code {raw}") from None


_LABELS: dict[TaskStatus, str] = {
    TaskStatus.NOT_DONE: "NotDone",
    TaskStatus.IN_PROGRESS: "InProgress",
    TaskStatus.DONE: "Done",
}


@dataclass(slots=True)
class Task:
    id: int
    description: str
    status: TaskStatus = TaskStatus.NOT_DONE

    def __str__(self) -> str:
        return f"ID: {self.id}, Description: {self.description}, Status: {self.status.label}"

    def to_json(self) -> dict[str, Any]:
        return {"Id": self.id, "Description": self.description, "Status": self.status.code}
