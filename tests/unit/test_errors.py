"""Unit tests for error payload mapping."""

import pytest

from src.core.errors import (
    MethodNotAllowedError,
    TaskNotFoundError,
    TaskStoreError,
    TaskValidationError,
    error_payload,
)


@pytest.mark.unit
class TestErrorPayload:
    """Tests for error_payload function."""

    def test_validation_error(self):
        assert error_payload(TaskValidationError("Task description is required")) == (
            400,
            {"error": "Task description is required"},
        )

    def test_not_found(self):
        assert error_payload(TaskNotFoundError("abc")) == (404, {"error": "Task not found"})

    def test_method_not_allowed(self):
        assert error_payload(MethodNotAllowedError("PATCH")) == (405, {"error": "Method not allowed"})

    def test_store_error_exposes_message(self):
        status_code, body = error_payload(TaskStoreError("Failed to scan tasks in TodoTasks: boom"))

        assert status_code == 500
        assert body == {"error": "Internal server error", "message": "Failed to scan tasks in TodoTasks: boom"}

    def test_store_error_hides_message(self):
        assert error_payload(TaskStoreError("boom"), expose_details=False) == (
            500,
            {"error": "Internal server error"},
        )

    def test_unexpected_exception_is_server_error(self):
        status_code, body = error_payload(ZeroDivisionError("division by zero"))

        assert status_code == 500
        assert body["message"] == "division by zero"


@pytest.mark.unit
def test_not_found_is_a_key_error():
    """Test not-found errors keep KeyError semantics with a readable message."""
    error = TaskNotFoundError("abc")

    assert isinstance(error, KeyError)
    assert error.task_id == "abc"
    assert str(error) == "Task not found: abc"
