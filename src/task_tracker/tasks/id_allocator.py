# src/task_tracker/tasks/id_allocator.py

from __future__ import annotations

MAX_TASK_ID = 2**63 - 1


class IdAllocator:
    """
    Monotonic id counter.

    Ids start at start + 1 and are never handed out twice. The allocator has no
    lock of its own: the owning store calls it while holding its lock.
    """

    def __init__(self, start: int = 0, limit: int = MAX_TASK_ID) -> None:
        if start < 0:
            raise ValueError("start must be >= 0")
        if limit <= start:
            raise ValueError("limit must be greater than start")
        self._last = start
        self._limit = limit

    @property
    def last_issued(self) -> int:
        return self._last

    def next_id(self) -> int:
        if self._last >= self._limit:
            raise OverflowError(f"task id space exhausted (limit={self._limit})")
        self._last += 1
        return self._last
