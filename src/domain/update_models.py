"""Update models for task records."""

from src.domain.create_models import EditableTaskFields


class TaskUpdate(EditableTaskFields):
    """Full replacement of the editable fields of a task.

    Omitted status, priority and dueDate are reset to their defaults.
    """
