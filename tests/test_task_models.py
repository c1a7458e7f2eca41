# tests/test_task_models.py

from __future__ import annotations

import pytest

from task_tracker.tasks.task_models import Task, TaskStatus


def test_status_codes_are_explicit() -> None:
    assert [s.code for s in TaskStatus] == [0, 1, 2]
    assert TaskStatus.from_code(0) is TaskStatus.NOT_DONE
    assert TaskStatus.from_code(1) is TaskStatus.IN_PROGRESS
    assert TaskStatus.from_code(2) is TaskStatus.DONE


@pytest.mark.parametrize("raw", [3, -1, "1", 1.0, True, None])
def test_status_from_code_rejects_unknown(raw) -> None:
    with pytest.raises(ValueError):
        TaskStatus.from_code(raw)


def test_task_str_and_json() -> None:
    task = Task(id=7, description="Buy milk", status=TaskStatus.IN_PROGRESS)
    assert str(task) == "ID: 7, Description: Buy milk, Status: InProgress"
    assert task.to_json() == {"Id": 7, "Description": "Buy milk", "Status": 1}


def test_new_task_defaults_to_not_done() -> None:
    assert Task(id=1, description="x").status is TaskStatus.NOT_DONE
