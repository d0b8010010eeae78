# tests/test_sqlite_task_store.py

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from pathlib import Path

import pytest

from task_tracker.tasks.errors import StorageUnavailableError, TaskNotFoundError, TaskStoreError
from task_tracker.tasks.sqlite_store import SqliteTaskStore


def test_tasks_survive_reopen(tmp_path: Path) -> None:
    db = tmp_path / "tasks.sqlite3"
    due = datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)

    first = SqliteTaskStore(db)
    task_id = first.create_task("persisted", ["work", "home"], due)
    first.close()

    second = SqliteTaskStore(db)
    task = second.get_task(task_id)
    assert task.text == "persisted"
    assert task.tags == ("work", "home")
    assert task.due == due
    assert [t.id for t in second.get_tasks_by_tag("home")] == [task_id]
    assert [t.id for t in second.get_tasks_by_due_date(2024, 5, 1)] == [task_id]


def test_ids_not_reused_after_clear_and_reopen(tmp_path: Path) -> None:
    db = tmp_path / "tasks.sqlite3"

    first = SqliteTaskStore(db)
    last = max(first.create_task(f"t{i}") for i in range(3))
    first.delete_all_tasks()

    second = SqliteTaskStore(db)
    assert second.count_tasks() == 0
    assert second.create_task("after restart") > last


def test_delete_removes_tag_rows(tmp_path: Path) -> None:
    db = tmp_path / "tasks.sqlite3"
    store = SqliteTaskStore(db)
    task_id = store.create_task("a", ["x", "y"])
    store.delete_task(task_id)

    with sqlite3.connect(db) as conn:
        (n,) = conn.execute("SELECT COUNT(*) FROM task_tags").fetchone()
    assert n == 0


def test_tasks_table_holds_only_task_fields(tmp_path: Path) -> None:
    db = tmp_path / "tasks.sqlite3"
    SqliteTaskStore(db).create_task("a", ["x"], datetime(2024, 5, 1, tzinfo=timezone.utc))

    with sqlite3.connect(db) as conn:
        columns = {row[1] for row in conn.execute("PRAGMA table_info(tasks)")}
    assert columns == {"id", "text", "tags", "due", "due_date"}


def test_out_of_range_id_is_not_found(tmp_path: Path) -> None:
    store = SqliteTaskStore(tmp_path / "tasks.sqlite3")
    with pytest.raises(TaskNotFoundError):
        store.get_task(2**70)
    with pytest.raises(TaskNotFoundError):
        store.delete_task(-1)


def test_corrupt_database_raises_storage_unavailable(tmp_path: Path) -> None:
    db = tmp_path / "tasks.sqlite3"
    db.write_bytes(b"this is not a sqlite database, just some bytes" * 100)

    with pytest.raises(StorageUnavailableError) as exc_info:
        SqliteTaskStore(db)
    assert isinstance(exc_info.value.__cause__, sqlite3.Error)
    # Distinguishable from NotFound, but still a store failure.
    assert not isinstance(exc_info.value, TaskNotFoundError)
    assert isinstance(exc_info.value, TaskStoreError)


def test_failed_write_leaves_no_partial_task(tmp_path: Path) -> None:
    db = tmp_path / "tasks.sqlite3"
    store = SqliteTaskStore(db)
    store.create_task("before")

    # Break the tag table so the second half of create_task fails.
    with sqlite3.connect(db) as conn:
        conn.execute("DROP TABLE task_tags")

    with pytest.raises(StorageUnavailableError):
        store.create_task("half written", ["boom"])

    assert [t.text for t in store.get_all_tasks()] == ["before"]
