"""Task domain model and enums."""

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class TaskStatus(StrEnum):
    """Progress label of a task. Any transition between labels is allowed."""

    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class TaskPriority(StrEnum):
    """Priority label of a task."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Task(BaseModel):
    """Task record as stored in the table and returned by the API."""

    id: str = Field(..., description="Unique task ID (UUID4), immutable")
    task: str = Field(..., description="Task description")
    status: TaskStatus = Field(default=TaskStatus.NOT_STARTED, description="Progress label")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="Priority label")
    dueDate: str = Field(default="", description="Due date string")  # noqa: N815
    comments: str = Field(default="", description="Free-form comments")
    createdAt: str = Field(..., description="Creation timestamp (ISO format)")  # noqa: N815
    updatedAt: str | None = Field(default=None, description="Last update timestamp (ISO format)")  # noqa: N815

    def to_record(self) -> dict[str, str]:
        """Serialize to the stored/wire shape, leaving out updatedAt until the first update."""
        return self.model_dump(mode="json", exclude_none=True)
