# src/task_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- builds the single task store the connectors share and wires it into AppState.
"""

from __future__ import annotations

import logging

from ..config import STORE_BACKENDS, get_settings
from ..core.ports import TaskRepo
from ..core.state import AppState
from ..tasks.sqlite_store import SqliteTaskStore
from ..tasks.task_store import InMemoryTaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_task_store(settings) -> TaskRepo:
    backend = str(getattr(settings, "store_backend", "memory")).lower()
    if backend not in STORE_BACKENDS:
        logger.warning("Unknown store backend %r, falling back to memory.", backend)
        backend = "memory"

    if backend == "sqlite":
        _ensure_local_dirs(settings)
        return SqliteTaskStore(settings.tasks_db_path)
    return InMemoryTaskStore()


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    return AppState(settings=settings, task_store=create_task_store(settings))
