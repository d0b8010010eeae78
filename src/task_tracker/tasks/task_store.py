# src/task_tracker/tasks/task_store.py

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from datetime import date, datetime

from .errors import TaskNotFoundError
from .id_allocator import IdAllocator
from .task_models import Task

logger = logging.getLogger(__name__)


class InMemoryTaskStore:
    """
    In-memory task store.

    Layout:
    - id -> Task mapping (point lookups and deletes are O(1))
    - tag -> ids and due date -> ids indexes for the two filtered queries

    Thread-safety:
    - one lock guards the mapping, the indexes and the id allocator, so every
      create/delete is applied to all of them at once or not at all
    """

    def __init__(self, allocator: IdAllocator | None = None) -> None:
        self._lock = threading.Lock()
        self._ids = allocator or IdAllocator()
        self._tasks: dict[int, Task] = {}
        self._by_tag: dict[str, set[int]] = {}
        self._by_due: dict[date, set[int]] = {}
        logger.info("InMemoryTaskStore ready last_id=%s", self._ids.last_issued)

    def close(self) -> None:
        """Shutdown hook (nothing to flush)."""
        return

    # ---- index helpers (caller holds the lock) ----

    def _index(self, task: Task) -> None:
        for tag in set(task.tags):
            self._by_tag.setdefault(tag, set()).add(task.id)
        due = task.due_date
        if due is not None:
            self._by_due.setdefault(due, set()).add(task.id)

    def _unindex(self, task: Task) -> None:
        for tag in set(task.tags):
            ids = self._by_tag.get(tag)
            if ids is None:
                continue
            ids.discard(task.id)
            if not ids:
                del self._by_tag[tag]
        due = task.due_date
        if due is not None:
            ids = self._by_due.get(due)
            if ids is not None:
                ids.discard(task.id)
                if not ids:
                    del self._by_due[due]

    def _collect(self, ids: Iterable[int]) -> list[Task]:
        return [self._tasks[i] for i in sorted(ids)]

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._lock:
            return len(self._tasks)

    def create_task(self, text: str, tags: Iterable[str] = (), due: datetime | None = None) -> int:
        tags_t = tuple(tags)
        with self._lock:
            task_id = self._ids.next_id()
            task = Task(id=task_id, text=text, tags=tags_t, due=due)
            self._tasks[task_id] = task
            self._index(task)
        logger.debug("Task added id=%s tags=%s due=%s", task_id, tags_t, due)
        return task_id

    def get_task(self, task_id: int) -> Task:
        with self._lock:
            task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def get_all_tasks(self) -> list[Task]:
        with self._lock:
            return self._collect(self._tasks)

    def delete_task(self, task_id: int) -> None:
        with self._lock:
            task = self._tasks.pop(task_id, None)
            if task is None:
                raise TaskNotFoundError(task_id)
            self._unindex(task)
        logger.debug("Task deleted id=%s", task_id)

    def delete_all_tasks(self) -> None:
        # The allocator is left alone: ids keep growing past the last one issued.
        with self._lock:
            n = len(self._tasks)
            self._tasks.clear()
            self._by_tag.clear()
            self._by_due.clear()
        logger.debug("All tasks deleted count=%s", n)

    def get_tasks_by_tag(self, tag: str) -> list[Task]:
        with self._lock:
            return self._collect(self._by_tag.get(tag, ()))

    def get_tasks_by_due_date(self, year: int, month: int, day: int) -> list[Task]:
        target = date(year, month, day)
        with self._lock:
            return self._collect(self._by_due.get(target, ()))
