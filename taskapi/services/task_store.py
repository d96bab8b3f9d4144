# taskapi/services/task_store.py

import logging
import sqlite3
from pathlib import Path

from ..models.task import Task, clean_task_text, new_task_id, utc_timestamp

logger = logging.getLogger(__name__)

COLLECTION = "tasks"


class TaskStoreError(RuntimeError):
    """Any failure coming out of the persistence layer."""


class TaskStore:
    """
    SQLite-backed task collection.

    Each call opens its own connection, so the store can be used from
    executor threads. The document counter in ``collection_stats`` is the
    collection metadata read by ``estimated_count``.
    """

    def __init__(self, db_path="tasks.sqlite3"):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info(f"TaskStore ready db={self.db_path} total={self.count_tasks()}")

    def _connect(self):
        try:
            conn = sqlite3.connect(str(self.db_path), timeout=30.0)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA journal_mode=WAL")
        except sqlite3.Error as e:
            raise TaskStoreError(f"Could not open task store: {e}") from e
        return conn

    def _ensure_schema(self):
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS tasks (
                        id TEXT PRIMARY KEY,
                        text TEXT NOT NULL CHECK (length(text) <= 200),
                        created_at TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    )
                    """
                )
                conn.execute("CREATE INDEX IF NOT EXISTS idx_tasks_created_at ON tasks(created_at DESC)")
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS collection_stats (
                        name TEXT PRIMARY KEY,
                        doc_count INTEGER NOT NULL DEFAULT 0
                    )
                    """
                )
                conn.execute(
                    "INSERT OR IGNORE INTO collection_stats (name, doc_count) "
                    "SELECT ?, COUNT(*) FROM tasks",
                    (COLLECTION,),
                )
        except sqlite3.Error as e:
            raise TaskStoreError(f"Could not initialize task store: {e}") from e
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row):
        return Task(
            id=row["id"],
            text=row["text"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def create_task(self, text: str) -> Task:
        task_id = new_task_id()
        now = utc_timestamp()
        task = Task(id=task_id, text=clean_task_text(text), created_at=now, updated_at=now)

        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    "INSERT INTO tasks (id, text, created_at, updated_at) VALUES (?, ?, ?, ?)",
                    (task.id, task.text, task.created_at, task.updated_at),
                )
                conn.execute(
                    "UPDATE collection_stats SET doc_count = doc_count + 1 WHERE name = ?",
                    (COLLECTION,),
                )
        except sqlite3.Error as e:
            raise TaskStoreError(f"Could not save task: {e}") from e
        finally:
            conn.close()

        logger.debug(f"Created task id={task.id}")
        return task

    def find_tasks(self, skip: int = 0, limit: int = 50) -> list:
        """Return up to ``limit`` tasks after ``skip``, newest first."""
        conn = self._connect()
        try:
            rows = conn.execute(
                "SELECT id, text, created_at, updated_at FROM tasks "
                "ORDER BY created_at DESC, rowid DESC LIMIT ? OFFSET ?",
                (limit, skip),
            ).fetchall()
        except sqlite3.Error as e:
            raise TaskStoreError(f"Could not list tasks: {e}") from e
        finally:
            conn.close()
        return [self._row_to_task(row) for row in rows]

    def estimated_count(self) -> int:
        """
        Collection size from metadata, without scanning the table.

        Read on its own connection, so it may not match a page fetched a
        moment earlier or later when writes are in flight.
        """
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT doc_count FROM collection_stats WHERE name = ?", (COLLECTION,)
            ).fetchone()
        except sqlite3.Error as e:
            raise TaskStoreError(f"Could not count tasks: {e}") from e
        finally:
            conn.close()
        return max(int(row["doc_count"]), 0) if row else 0

    def count_tasks(self) -> int:
        conn = self._connect()
        try:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
        except sqlite3.Error as e:
            raise TaskStoreError(f"Could not count tasks: {e}") from e
        finally:
            conn.close()
        return int(n)

    def find_and_delete(self, task_id: str):
        """Delete the task and return it, or None when no task has this id."""
        conn = self._connect()
        try:
            with conn:
                row = conn.execute(
                    "SELECT id, text, created_at, updated_at FROM tasks WHERE id = ?",
                    (task_id,),
                ).fetchone()
                if row is None:
                    return None
                cur = conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
                # Lost a race with another delete of the same id.
                if cur.rowcount == 0:
                    return None
                conn.execute(
                    "UPDATE collection_stats SET doc_count = doc_count - 1 WHERE name = ?",
                    (COLLECTION,),
                )
        except sqlite3.Error as e:
            raise TaskStoreError(f"Could not delete task: {e}") from e
        finally:
            conn.close()

        logger.debug(f"Deleted task id={task_id}")
        return self._row_to_task(row)
