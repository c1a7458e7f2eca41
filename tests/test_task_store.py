# tests/test_task_store.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from task_tracker.tasks.task_models import Task, TaskStatus
from task_tracker.tasks.task_store import CorruptStoreError, TaskStore, dump_tasks, parse_tasks


def test_load_creates_missing_file(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "tasks.json"
    store = TaskStore(path)

    assert store.load() == []
    assert path.read_text("utf-8") == "[]"


@pytest.mark.parametrize("content", ["", "   \n", "null"])
def test_load_empty_or_null_means_no_tasks(tmp_path: Path, content: str) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(content, "utf-8")

    assert TaskStore(path).load() == []


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        '{"Id": 1}',
        "[1, 2]",
        '[{"Description": "no id", "Status": 0}]',
        '[{"Id": "1", "Description": "string id", "Status": 0}]',
        '[{"Id": 1, "Description": 5, "Status": 0}]',
        '[{"Id": 1, "Description": "bad status", "Status": 9}]',
    ],
)
def test_load_malformed_content_is_fatal(tmp_path: Path, content: str) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(content, "utf-8")

    with pytest.raises(CorruptStoreError) as exc_info:
        TaskStore(path).load()
    assert exc_info.value.path == path
    # Loading must never rewrite a file it could not parse.
    assert path.read_text("utf-8") == content


def test_load_fills_missing_optional_fields(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text('[{"Id": 4}]', "utf-8")

    (task,) = TaskStore(path).load()
    assert task == Task(id=4, description="", status=TaskStatus.NOT_DONE)


def test_save_writes_indented_json_and_no_tmp(store: TaskStore) -> None:
    store.add_task("Buy milk")
    store.save()

    text = store.path.read_text("utf-8")
    assert json.loads(text) == [{"Id": 1, "Description": "Buy milk", "Status": 0}]
    assert '\n  {\n    "Id": 1,' in text
    assert not store.path.with_name(store.path.name + ".tmp").exists()


def test_roundtrip_is_stable(tmp_path: Path) -> None:
    tasks = [
        Task(id=2, description="Walk dog", status=TaskStatus.DONE),
        Task(id=3, description="Čaj ☕", status=TaskStatus.IN_PROGRESS),
        Task(id=10, description="", status=TaskStatus.NOT_DONE),
    ]
    first = dump_tasks(tasks)
    assert parse_tasks(first) == tasks

    path = tmp_path / "tasks.json"
    path.write_text(first, "utf-8")
    store = TaskStore(path)
    store.load()
    store.save()
    assert path.read_text("utf-8") == first


def test_ids_follow_last_task_not_max(store: TaskStore) -> None:
    assert [store.add_task(d).id for d in ("a", "b", "c")] == [1, 2, 3]

    store.delete_task(1)
    assert store.add_task("d").id == 4

    # Known defect kept on purpose: deleting the tail frees its id for reuse.
    store.delete_task(4)
    store.delete_task(3)
    assert store.add_task("e").id == 3
    assert [t.id for t in store.tasks()] == [2, 3]


def test_next_id_after_unordered_ids(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(
        dump_tasks([Task(id=9, description="x"), Task(id=2, description="y")]), "utf-8"
    )
    store = TaskStore(path)
    store.load()

    # The last element decides (2 + 1), not the largest id (9).
    assert store.next_id() == 3


def test_delete_keeps_relative_order(store: TaskStore) -> None:
    for d in ("a", "b", "c", "d"):
        store.add_task(d)

    deleted = store.delete_task(2)

    assert deleted is not None and deleted.description == "b"
    assert [t.description for t in store.tasks()] == ["a", "c", "d"]
    assert store.delete_task(2) is None


def test_update_and_status_missing_id_return_none(store: TaskStore) -> None:
    store.add_task("a")
    assert store.update_task_description(5, "x") is None
    assert store.update_task_status(5, TaskStatus.DONE) is None
    assert store.tasks() == [Task(id=1, description="a")]


def test_list_tasks_filters_by_status(store: TaskStore) -> None:
    for d in ("a", "b", "c"):
        store.add_task(d)
    store.update_task_status(2, TaskStatus.DONE)
    store.update_task_status(3, TaskStatus.IN_PROGRESS)

    assert [t.id for t in store.list_tasks()] == [1, 2, 3]
    assert [t.id for t in store.list_tasks(TaskStatus.DONE)] == [2]
    assert [t.id for t in store.list_tasks(TaskStatus.IN_PROGRESS)] == [3]
    assert [t.id for t in store.list_tasks(TaskStatus.NOT_DONE)] == [1]


def test_load_absurd_nesting_is_corrupt(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text("[" * 100_000 + "]" * 100_000, "utf-8")

    with pytest.raises(CorruptStoreError):
        TaskStore(path).load()


def test_failed_replace_removes_tmp_and_keeps_file(store: TaskStore, monkeypatch) -> None:
    store.add_task("a")

    def fail_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("task_tracker.tasks.task_store.os.replace", fail_replace)

    with pytest.raises(OSError, match="disk full"):
        store.save()

    assert store.path.read_text("utf-8") == "[]"
    assert not store.path.with_name(store.path.name + ".tmp").exists()


def test_unencodable_description_fails_before_touching_disk(store: TaskStore) -> None:
    store.add_task("bad\udcff")

    with pytest.raises(UnicodeEncodeError):
        store.save()

    assert store.path.read_text("utf-8") == "[]"
    assert not store.path.with_name(store.path.name + ".tmp").exists()
