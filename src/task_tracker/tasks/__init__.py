"""
Task subsystem.

Components:
- task_models.py: the immutable Task record
- errors.py: store failure types (not found / storage unavailable)
- id_allocator.py: monotonic task id counter
- task_store.py: in-memory store guarded by a lock
- sqlite_store.py: SQLite-backed store with the same behaviour
"""
