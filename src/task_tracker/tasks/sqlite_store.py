# src/task_tracker/tasks/sqlite_store.py

from __future__ import annotations

import contextlib
import json
import logging
import sqlite3
from collections.abc import Iterable, Iterator
from datetime import date, datetime
from pathlib import Path

from .errors import StorageUnavailableError, TaskNotFoundError
from .id_allocator import MAX_TASK_ID
from .task_models import Task

logger = logging.getLogger(__name__)


class SqliteTaskStore:
    """
    SQLite task store.

    Schema:
    - tasks: one row per live task; tags kept as a JSON array for reads,
      due kept as ISO-8601 text plus its calendar date (YYYY-MM-DD)
    - task_tags: (task_id, position, tag) rows backing the tag query

    Ids come from INTEGER PRIMARY KEY AUTOINCREMENT, so SQLite never hands out
    an id twice, even after DELETE FROM tasks or a restart.

    Thread-safety:
    - each method opens its own SQLite connection and runs one transaction
    - any sqlite3.Error rolls the transaction back and is re-raised as
      StorageUnavailableError
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("SqliteTaskStore ready db=%s total=%s", self._db_path, self.count_tasks())

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    @contextlib.contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise StorageUnavailableError(f"cannot open {self._db_path}: {e}") from e
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            with contextlib.suppress(sqlite3.Error):
                conn.rollback()
            raise StorageUnavailableError(f"task database error: {e}") from e
        except BaseException:
            with contextlib.suppress(sqlite3.Error):
                conn.rollback()
            raise
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._transaction() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    text TEXT NOT NULL,
                    tags TEXT NOT NULL DEFAULT '[]',
                    due TEXT,
                    due_date TEXT
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS task_tags (
                    task_id INTEGER NOT NULL,
                    position INTEGER NOT NULL,
                    tag TEXT NOT NULL,
                    PRIMARY KEY (task_id, position)
                )
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_task_tags_tag ON task_tags(tag)")
            conn.execute("CREATE INDEX IF NOT EXISTS idx_tasks_due_date ON tasks(due_date)")

    @staticmethod
    def _str_to_tags(s: str | None) -> tuple[str, ...]:
        if not s:
            return ()
        val = json.loads(s)
        return tuple(str(t) for t in val) if isinstance(val, list) else ()

    def _row_to_task(self, row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            text=str(row["text"]),
            tags=self._str_to_tags(row["tags"]),
            due=datetime.fromisoformat(row["due"]) if row["due"] else None,
        )

    def _select(self, sql: str, params: tuple = ()) -> list[Task]:
        with self._transaction() as conn:
            rows = conn.execute(sql, params).fetchall()
        return [self._row_to_task(r) for r in rows]

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._transaction() as conn:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
        return int(n)

    def create_task(self, text: str, tags: Iterable[str] = (), due: datetime | None = None) -> int:
        tags_t = tuple(tags)
        due_str = due.isoformat() if due is not None else None
        due_date = due.date().isoformat() if due is not None else None

        with self._transaction() as conn:
            cur = conn.execute(
                """
                INSERT INTO tasks(text, tags, due, due_date)
                VALUES (?, ?, ?, ?)
                """,
                (text, json.dumps(list(tags_t), ensure_ascii=False), due_str, due_date),
            )
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError("SQLite did not return lastrowid for tasks insert")
            task_id = int(rowid)
            conn.executemany(
                "INSERT INTO task_tags(task_id, position, tag) VALUES (?, ?, ?)",
                [(task_id, pos, tag) for pos, tag in enumerate(tags_t)],
            )

        logger.debug("Task added id=%s tags=%s due=%s", task_id, tags_t, due_str)
        return task_id

    def get_task(self, task_id: int) -> Task:
        if not 0 < task_id <= MAX_TASK_ID:
            raise TaskNotFoundError(task_id)
        with self._transaction() as conn:
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (int(task_id),)).fetchone()
        if row is None:
            raise TaskNotFoundError(task_id)
        return self._row_to_task(row)

    def get_all_tasks(self) -> list[Task]:
        return self._select("SELECT * FROM tasks ORDER BY id ASC")

    def delete_task(self, task_id: int) -> None:
        if not 0 < task_id <= MAX_TASK_ID:
            raise TaskNotFoundError(task_id)
        with self._transaction() as conn:
            cur = conn.execute("DELETE FROM tasks WHERE id = ?", (int(task_id),))
            if cur.rowcount != 1:
                raise TaskNotFoundError(task_id)
            conn.execute("DELETE FROM task_tags WHERE task_id = ?", (int(task_id),))
        logger.debug("Task deleted id=%s", task_id)

    def delete_all_tasks(self) -> None:
        # sqlite_sequence is untouched, so ids keep growing after this.
        with self._transaction() as conn:
            conn.execute("DELETE FROM task_tags")
            cur = conn.execute("DELETE FROM tasks")
            n = cur.rowcount
        logger.debug("All tasks deleted count=%s", n)

    def get_tasks_by_tag(self, tag: str) -> list[Task]:
        return self._select(
            """
            SELECT *
            FROM tasks
            WHERE id IN (SELECT task_id FROM task_tags WHERE tag = ?)
            ORDER BY id ASC
            """,
            (tag,),
        )

    def get_tasks_by_due_date(self, year: int, month: int, day: int) -> list[Task]:
        target = date(year, month, day).isoformat()
        return self._select(
            "SELECT * FROM tasks WHERE due_date = ? ORDER BY id ASC",
            (target,),
        )
