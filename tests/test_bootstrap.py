# tests/test_bootstrap.py

from __future__ import annotations

import logging

from task_tracker.cli.bootstrap import create_initial_state
from task_tracker.tasks.sqlite_store import SqliteTaskStore
from task_tracker.tasks.task_store import InMemoryTaskStore


def test_memory_backend_is_default(settings) -> None:
    state = create_initial_state(settings=settings)
    assert isinstance(state.task_store, InMemoryTaskStore)
    assert state.settings is settings


def test_sqlite_backend_uses_configured_path(settings, tmp_path) -> None:
    settings.store_backend = "sqlite"
    settings.tasks_db_path = tmp_path / "nested" / "tasks.sqlite3"

    state = create_initial_state(settings=settings)
    assert isinstance(state.task_store, SqliteTaskStore)
    state.task_store.create_task("persisted")
    assert settings.tasks_db_path.exists()


def test_unknown_backend_falls_back_to_memory(settings, caplog) -> None:
    settings.store_backend = "postgres"
    with caplog.at_level(logging.WARNING):
        state = create_initial_state(settings=settings)
    assert isinstance(state.task_store, InMemoryTaskStore)
    assert "Unknown store backend" in caplog.text
