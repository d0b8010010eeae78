# src/task_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True, slots=True)
class Task:
    """
    A stored task.

    Instances are immutable, so stores hand them out directly without copying.
    `due` is None when the task has no due date.
    """

    id: int
    text: str
    tags: tuple[str, ...] = ()
    due: datetime | None = None

    @property
    def due_date(self) -> date | None:
        # Calendar date in the timestamp's own offset; time of day is dropped.
        return self.due.date() if self.due is not None else None
