# src/task_tracker/tasks/errors.py

from __future__ import annotations


class TaskStoreError(Exception):
    """Base class for failures reported by a task store."""


class TaskNotFoundError(TaskStoreError, LookupError):
    """No live task has the requested id (never created or already deleted)."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"task with id={task_id} not found")
        self.task_id = task_id


class StorageUnavailableError(TaskStoreError):
    """The persistence layer failed; the operation was not applied."""
