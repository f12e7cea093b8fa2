"""SQLite-backed task store for running the API without AWS."""

import asyncio
import logging
from pathlib import Path
from typing import Any

import aiosqlite

from src.core.errors import TaskNotFoundError, TaskStoreError
from src.core.task_store import MUTABLE_FIELDS


logger = logging.getLogger(__name__)

TABLE_NAME = "tasks"

COLUMNS = ("id", "task", "status", "priority", "dueDate", "comments", "createdAt", "updatedAt")

_CREATE_TABLE = f"""
CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
    id TEXT PRIMARY KEY,
    task TEXT,
    status TEXT,
    priority TEXT,
    dueDate TEXT,
    comments TEXT,
    createdAt TEXT,
    updatedAt TEXT
)
"""


def _row_to_record(columns: list[str], row: tuple[Any, ...]) -> dict[str, Any]:
    """Build a record dict, dropping NULL columns (e.g. updatedAt before the first update)."""
    return {key: value for key, value in zip(columns, row, strict=True) if value is not None}


class SqliteTaskStore:
    """Task store over a single SQLite table keyed by TEXT id."""

    def __init__(self, *, db_path: str) -> None:
        self._db_path = Path(db_path).resolve()
        self._conn: aiosqlite.Connection | None = None
        self._lock = asyncio.Lock()

    async def _connection(self) -> aiosqlite.Connection:
        if self._conn is not None:
            return self._conn

        async with self._lock:
            # Double-check after acquiring lock
            if self._conn is not None:
                return self._conn

            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = await aiosqlite.connect(str(self._db_path))
            await conn.execute("PRAGMA journal_mode = WAL")
            await conn.execute(_CREATE_TABLE)
            await conn.commit()
            self._conn = conn

            logger.info("Created new SQLite connection", extra={"db_path": str(self._db_path)})
            return conn

    def _failure(self, operation: str, e: Exception, **context: object) -> TaskStoreError:
        logger.error(f"{operation}_failed", extra={"db_path": str(self._db_path), "error": str(e), **context})
        return TaskStoreError(f"Failed to {operation.replace('_', ' ')} in {TABLE_NAME}: {e}")

    async def get(self, task_id: str) -> dict[str, Any] | None:
        """Fetch a task by id, or None if absent."""
        try:
            conn = await self._connection()
            cursor = await conn.execute(f"SELECT * FROM {TABLE_NAME} WHERE id = ?", (task_id,))  # noqa: S608
            row = await cursor.fetchone()
            if row is None:
                return None
            columns = [description[0] for description in cursor.description]
            return _row_to_record(columns, row)
        except (aiosqlite.Error, OSError) as e:
            raise self._failure("get_task", e, task_id=task_id) from e

    async def put(self, task: dict[str, Any]) -> None:
        """Write a task, replacing any record with the same id."""
        values = [task.get(column) for column in COLUMNS]
        placeholders = ", ".join("?" for _ in COLUMNS)
        try:
            conn = await self._connection()
            await conn.execute(
                f"INSERT OR REPLACE INTO {TABLE_NAME} ({', '.join(COLUMNS)}) VALUES ({placeholders})",  # noqa: S608
                values,
            )
            await conn.commit()
        except (aiosqlite.Error, OSError) as e:
            raise self._failure("put_task", e, task_id=task.get("id")) from e

        logger.info("Stored task", extra={"task_id": task.get("id")})

    async def scan(self) -> list[dict[str, Any]]:
        """Read every task in the table."""
        try:
            conn = await self._connection()
            cursor = await conn.execute(f"SELECT * FROM {TABLE_NAME}")  # noqa: S608
            rows = await cursor.fetchall()
            columns = [description[0] for description in cursor.description]
        except (aiosqlite.Error, OSError) as e:
            raise self._failure("scan_tasks", e) from e

        records = [_row_to_record(columns, row) for row in rows]
        logger.info("Scanned tasks", extra={"count": len(records)})
        return records

    async def update(self, task_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Replace the mutable fields of an existing task.

        Raises:
            TaskNotFoundError: If no task exists under task_id
        """
        set_clause = ", ".join(f"{field} = ?" for field in MUTABLE_FIELDS)
        values = [fields.get(field) for field in MUTABLE_FIELDS]
        values.append(task_id)

        try:
            conn = await self._connection()
            cursor = await conn.execute(f"UPDATE {TABLE_NAME} SET {set_clause} WHERE id = ?", values)  # noqa: S608
            await conn.commit()
        except (aiosqlite.Error, OSError) as e:
            raise self._failure("update_task", e, task_id=task_id) from e

        if cursor.rowcount == 0:
            raise TaskNotFoundError(task_id)

        logger.info("Updated task", extra={"task_id": task_id})
        record = await self.get(task_id)
        if record is None:
            raise TaskNotFoundError(task_id)
        return record

    async def delete(self, task_id: str) -> None:
        """Delete a task; deleting a missing id is not an error."""
        try:
            conn = await self._connection()
            await conn.execute(f"DELETE FROM {TABLE_NAME} WHERE id = ?", (task_id,))  # noqa: S608
            await conn.commit()
        except (aiosqlite.Error, OSError) as e:
            raise self._failure("delete_task", e, task_id=task_id) from e

        logger.info("Deleted task", extra={"task_id": task_id})

    async def ping(self) -> None:
        """Check that the database file can be opened."""
        try:
            conn = await self._connection()
            await conn.execute("SELECT 1")
        except (aiosqlite.Error, OSError) as e:
            raise self._failure("open_database", e) from e

    async def close(self) -> None:
        """Close the underlying connection if one was opened."""
        if self._conn is None:
            return
        try:
            await self._conn.close()
            logger.info("Closed SQLite connection", extra={"db_path": str(self._db_path)})
        except aiosqlite.Error as e:
            logger.warning("Error closing SQLite connection", extra={"error": str(e)})
        finally:
            self._conn = None
