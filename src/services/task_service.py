"""Task service: validation, identifiers and timestamps over a task store."""

import logging
import uuid
from typing import Any

from pydantic import ValidationError

from src.core.errors import TaskNotFoundError, TaskValidationError
from src.core.logging import span
from src.core.task_store import TaskStore
from src.domain.create_models import TaskCreate
from src.domain.task import Task, utc_timestamp
from src.domain.update_models import TaskUpdate


logger = logging.getLogger(__name__)


def _validation_message(exc: ValidationError) -> str:
    """Collapse the first pydantic error into a client-facing message."""
    error = exc.errors()[0]
    if error["type"] == "value_error":
        return str(error["ctx"]["error"])
    location = ".".join(str(part) for part in error["loc"])
    return f"{location}: {error['msg']}" if location else error["msg"]


async def list_tasks(*, store: TaskStore) -> list[dict[str, Any]]:
    """List every task.

    Returns:
        All task records in no particular order (empty list when there are none)
    """
    with span("task_service.list_tasks"):
        return await store.scan()


async def create_task(*, store: TaskStore, payload: dict[str, Any]) -> dict[str, Any]:
    """Validate a new task, assign its id and creation time, and store it.

    Args:
        store: Task store to write to
        payload: Request body with task and optional status, priority, dueDate, comments

    Returns:
        The created task record

    Raises:
        TaskValidationError: If the description is missing or a label is out of range
    """
    with span("task_service.create_task"):
        try:
            data = TaskCreate.model_validate(payload)
        except ValidationError as e:
            message = _validation_message(e)
            logger.info("Rejected task creation", extra={"reason": message})
            raise TaskValidationError(message) from e

        task = Task(
            id=str(uuid.uuid4()),
            createdAt=utc_timestamp(),
            **data.model_dump(),
        )
        record = task.to_record()
        await store.put(record)

        logger.info("Created task", extra={"task_id": task.id})
        return record


async def get_task(*, store: TaskStore, task_id: str) -> dict[str, Any]:
    """Get a task by id.

    Raises:
        TaskNotFoundError: If no task exists under task_id
    """
    with span("task_service.get_task"):
        record = await store.get(task_id)
        if record is None:
            raise TaskNotFoundError(task_id)
        return record


async def update_task(*, store: TaskStore, task_id: str, payload: dict[str, Any]) -> dict[str, Any]:
    """Replace the editable fields of a task and stamp updatedAt.

    id, createdAt and comments are never touched, even if present in the payload.

    Args:
        store: Task store to write to
        task_id: ID of the task to update
        payload: Request body with task and optional status, priority, dueDate

    Returns:
        The task record as reported by the store after the write

    Raises:
        TaskValidationError: If the description is missing or a label is out of range
        TaskNotFoundError: If no task exists under task_id
    """
    with span("task_service.update_task"):
        try:
            data = TaskUpdate.model_validate(payload)
        except ValidationError as e:
            message = _validation_message(e)
            logger.info("Rejected task update", extra={"task_id": task_id, "reason": message})
            raise TaskValidationError(message) from e

        fields = {**data.model_dump(mode="json"), "updatedAt": utc_timestamp()}
        record = await store.update(task_id, fields)

        logger.info("Updated task", extra={"task_id": task_id, "status": data.status})
        return record


async def delete_task(*, store: TaskStore, task_id: str) -> None:
    """Delete a task. Deleting an unknown id succeeds."""
    with span("task_service.delete_task"):
        await store.delete(task_id)
        logger.info("Deleted task", extra={"task_id": task_id})
