# tests/test_id_allocator.py

from __future__ import annotations

import pytest

from task_tracker.tasks.id_allocator import IdAllocator
from task_tracker.tasks.task_store import InMemoryTaskStore


def test_allocator_is_strictly_increasing() -> None:
    ids = IdAllocator()
    issued = [ids.next_id() for _ in range(5)]
    assert issued == [1, 2, 3, 4, 5]
    assert ids.last_issued == 5


def test_allocator_start_offset() -> None:
    ids = IdAllocator(start=41)
    assert ids.next_id() == 42


def test_allocator_overflow_is_not_a_domain_error() -> None:
    ids = IdAllocator(start=0, limit=2)
    ids.next_id()
    ids.next_id()
    with pytest.raises(OverflowError):
        ids.next_id()
    # A failed call does not move the counter.
    assert ids.last_issued == 2


def test_allocator_rejects_bad_bounds() -> None:
    with pytest.raises(ValueError):
        IdAllocator(start=-1)
    with pytest.raises(ValueError):
        IdAllocator(start=5, limit=5)


def test_store_create_fails_cleanly_when_ids_run_out() -> None:
    store = InMemoryTaskStore(IdAllocator(limit=1))
    assert store.create_task("only one") == 1
    with pytest.raises(OverflowError):
        store.create_task("one too many")
    assert [t.id for t in store.get_all_tasks()] == [1]
