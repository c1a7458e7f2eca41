# src/task_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from .ports import TaskRepo


@dataclass(slots=True)
class AppState:
    """Everything a command handler may touch during one invocation."""

    # Settings object (config.Settings or a test double with the same attributes).
    settings: object
    task_store: TaskRepo
