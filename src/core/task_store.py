"""Task store interface and backend factory."""

from typing import Any, Protocol

from src.core.config import Settings


# Fields replaced by every update, in write order.
MUTABLE_FIELDS = ("task", "status", "priority", "dueDate", "updatedAt")


class TaskStore(Protocol):
    """Single-key access to the table of task records.

    Implementations raise TaskStoreError for any backend failure and
    TaskNotFoundError when update targets a missing id.
    """

    async def get(self, task_id: str) -> dict[str, Any] | None: ...

    async def put(self, task: dict[str, Any]) -> None: ...

    async def scan(self) -> list[dict[str, Any]]: ...

    async def update(self, task_id: str, fields: dict[str, Any]) -> dict[str, Any]: ...

    async def delete(self, task_id: str) -> None: ...

    async def ping(self) -> None: ...

    async def close(self) -> None: ...


def build_task_store(settings: Settings) -> TaskStore:
    """Create the store selected by TASK_STORE_BACKEND."""
    if settings.task_store_backend == "sqlite":
        from src.core.sqlite_store import SqliteTaskStore  # noqa: PLC0415

        return SqliteTaskStore(db_path=settings.sqlite_db_path)

    from src.core.dynamodb_store import DynamoDBTaskStore  # noqa: PLC0415

    return DynamoDBTaskStore.from_settings(settings)
