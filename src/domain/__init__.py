"""Domain models and DTOs."""

from src.domain.create_models import EditableTaskFields, TaskCreate
from src.domain.task import Task, TaskPriority, TaskStatus, utc_timestamp
from src.domain.update_models import TaskUpdate


__all__ = [
    "EditableTaskFields",
    "Task",
    "TaskCreate",
    "TaskPriority",
    "TaskStatus",
    "TaskUpdate",
    "utc_timestamp",
]
