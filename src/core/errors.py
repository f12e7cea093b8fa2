"""Error taxonomy for the task API and its mapping to JSON error payloads."""

from typing import Any

from src.core.config import constants


class TaskValidationError(ValueError):
    """A request body failed validation; the store is never called."""


class TaskNotFoundError(KeyError):
    """No task exists under the requested id."""

    def __init__(self, task_id: str) -> None:
        super().__init__(task_id)
        self.task_id = task_id

    def __str__(self) -> str:
        return f"Task not found: {self.task_id}"


class MethodNotAllowedError(Exception):
    """The HTTP verb is not supported on the route."""

    def __init__(self, method: str) -> None:
        super().__init__(method)
        self.method = method


class TaskStoreError(RuntimeError):
    """Any failure reported by the backing store."""


def error_payload(exc: Exception, *, expose_details: bool = True) -> tuple[int, dict[str, Any]]:
    """Map an exception to an HTTP status code and JSON error body.

    Args:
        exc: The exception raised while handling a request
        expose_details: Whether to attach the underlying error text to server errors

    Returns:
        Tuple of (status_code, body)
    """
    if isinstance(exc, TaskValidationError):
        return constants.HTTP_BAD_REQUEST, {"error": str(exc)}

    if isinstance(exc, TaskNotFoundError):
        return constants.HTTP_NOT_FOUND, {"error": constants.MSG_TASK_NOT_FOUND}

    if isinstance(exc, MethodNotAllowedError):
        return constants.HTTP_METHOD_NOT_ALLOWED, {"error": constants.MSG_METHOD_NOT_ALLOWED}

    body: dict[str, Any] = {"error": constants.MSG_INTERNAL_ERROR}
    if expose_details:
        body["message"] = str(exc)
    return constants.HTTP_SERVER_ERROR, body
