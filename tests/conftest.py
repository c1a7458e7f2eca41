# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from task_tracker.core.state import AppState
from task_tracker.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState, bootstrap and main.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="task-tracker-test",
        log_level="WARNING",
        log_dir=None,
        tasks_path=tmp_path / "tasks.json",
        json_indent=2,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    s = TaskStore(settings.tasks_path, indent=settings.json_indent)
    s.load()
    return s


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    """
    AppState wired with the real JSON store.

    NOTE: the store's file handling is part of what we want to test;
    handler-only tests use FakeTaskRepo from tests/fakes.py instead.
    """
    return AppState(settings=settings, task_store=store)
