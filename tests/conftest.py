# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from task_tracker.core.ports import TaskRepo
from task_tracker.core.state import AppState
from task_tracker.tasks.sqlite_store import SqliteTaskStore
from task_tracker.tasks.task_store import InMemoryTaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the connectors.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="task-tracker-test",
        log_level="DEBUG",
        store_backend="memory",
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        http_enabled=False,
        http_host="127.0.0.1",
        http_port=0,
        console_enabled=False,
    )


@pytest.fixture(params=["memory", "sqlite"])
def store(request: pytest.FixtureRequest, tmp_path: Path) -> TaskRepo:
    """Every store test runs against both backends: they must behave identically."""
    if request.param == "sqlite":
        return SqliteTaskStore(tmp_path / "tasks.sqlite3")
    return InMemoryTaskStore()


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    return AppState(settings=settings, task_store=InMemoryTaskStore())
