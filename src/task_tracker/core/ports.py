# src/task_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the adapters.

Connectors depend on this Protocol instead of a concrete store, so the
in-memory and SQLite backends stay swappable and tests can pass either.
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    """
    Synchronous task store.

    get_task/delete_task raise TaskNotFoundError for unknown ids; persisted
    backends raise StorageUnavailableError on storage faults.
    """

    def create_task(self, text: str, tags: Iterable[str] = (), due: datetime | None = None) -> int: ...
    def get_task(self, task_id: int) -> Task: ...
    def get_all_tasks(self) -> list[Task]: ...
    def delete_task(self, task_id: int) -> None: ...
    def delete_all_tasks(self) -> None: ...

    # Secondary queries
    def get_tasks_by_tag(self, tag: str) -> list[Task]: ...
    def get_tasks_by_due_date(self, year: int, month: int, day: int) -> list[Task]: ...

    def count_tasks(self) -> int: ...
    def close(self) -> None: ...
