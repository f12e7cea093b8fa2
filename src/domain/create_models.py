"""Pydantic models for creating task records."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from src.core.config import constants
from src.domain.task import TaskPriority, TaskStatus


class EditableTaskFields(BaseModel):
    """Fields a client may set on create and replace on update.

    Unknown keys (id, createdAt, ...) are ignored so a client can send back a
    whole record it previously received.
    """

    model_config = ConfigDict(extra="ignore")

    task: str = Field(default="", validate_default=True, description="Task description")
    status: TaskStatus = Field(default=TaskStatus.NOT_STARTED, description="Progress label")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="Priority label")
    dueDate: str = Field(default="", description="Due date string")  # noqa: N815

    @field_validator("task", mode="before")
    @classmethod
    def coerce_missing_task(cls, v: Any) -> Any:
        """Treat null as an empty description so it fails the required check."""
        return "" if v is None else v

    @field_validator("task")
    @classmethod
    def validate_task_not_blank(cls, v: str) -> str:
        """Reject descriptions that are empty after trimming."""
        if not v.strip():
            raise ValueError(constants.MSG_TASK_REQUIRED)
        return v

    @field_validator("status", "priority", mode="before")
    @classmethod
    def default_blank_label(cls, v: Any, info: ValidationInfo) -> Any:
        """Fall back to the default label when the client sends null or an empty string."""
        if v is None or v == "":
            return cls.model_fields[info.field_name].default
        return v

    @field_validator("dueDate", mode="before")
    @classmethod
    def default_blank_due_date(cls, v: Any) -> Any:
        return "" if v is None else v


class TaskCreate(EditableTaskFields):
    """Pydantic model for creating a task record."""

    comments: str = Field(default="", description="Free-form comments")

    @field_validator("comments", mode="before")
    @classmethod
    def default_blank_comments(cls, v: Any) -> Any:
        return "" if v is None else v
