"""Transport-neutral task API.

Both the FastAPI router and the serverless handler translate their request
into a call to handle_request() and render the returned ApiResponse, so the
two deployments answer every verb identically.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

from src.core.config import constants, settings
from src.core.errors import (
    MethodNotAllowedError,
    TaskNotFoundError,
    TaskValidationError,
    error_payload,
)
from src.core.task_store import TaskStore
from src.services import task_service


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiResponse:
    """Status code and JSON body (None for an empty body)."""

    status_code: int
    body: Any = None


def parse_json_body(raw: bytes | str | None) -> dict[str, Any]:
    """Decode a request body into a JSON object; an empty body is an empty object.

    Raises:
        TaskValidationError: If the body is not valid JSON or not an object
    """
    if raw is None or not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except (ValueError, UnicodeDecodeError) as e:
        raise TaskValidationError(constants.MSG_INVALID_JSON) from e
    if not isinstance(payload, dict):
        raise TaskValidationError(constants.MSG_INVALID_JSON)
    return payload


async def _dispatch_collection(*, store: TaskStore, method: str, body: bytes | str | None) -> ApiResponse:
    if method == "GET":
        return ApiResponse(constants.HTTP_OK, await task_service.list_tasks(store=store))
    if method == "POST":
        payload = parse_json_body(body)
        return ApiResponse(constants.HTTP_CREATED, await task_service.create_task(store=store, payload=payload))
    raise MethodNotAllowedError(method)


async def _dispatch_item(*, store: TaskStore, method: str, task_id: str, body: bytes | str | None) -> ApiResponse:
    if method == "GET":
        return ApiResponse(constants.HTTP_OK, await task_service.get_task(store=store, task_id=task_id))
    if method == "PUT":
        payload = parse_json_body(body)
        record = await task_service.update_task(store=store, task_id=task_id, payload=payload)
        return ApiResponse(constants.HTTP_OK, record)
    if method == "DELETE":
        await task_service.delete_task(store=store, task_id=task_id)
        return ApiResponse(constants.HTTP_OK, {"message": constants.MSG_TASK_DELETED})
    raise MethodNotAllowedError(method)


async def handle_request(
    *,
    store: TaskStore,
    method: str,
    task_id: str | None = None,
    body: bytes | str | None = None,
    expose_error_details: bool | None = None,
) -> ApiResponse:
    """Route one task API request to the service and shape the response.

    Args:
        store: Task store injected by the transport
        method: HTTP verb
        task_id: Item id, or None for the collection route
        body: Raw request body
        expose_error_details: Attach raw store error text to 500s (defaults to settings)

    Returns:
        ApiResponse carrying the status code and JSON body
    """
    method = method.upper()
    if method == "OPTIONS":
        return ApiResponse(constants.HTTP_OK)

    if expose_error_details is None:
        expose_error_details = settings.expose_error_details

    try:
        if task_id is None:
            return await _dispatch_collection(store=store, method=method, body=body)
        return await _dispatch_item(store=store, method=method, task_id=task_id, body=body)
    except (TaskValidationError, TaskNotFoundError, MethodNotAllowedError) as e:
        status_code, payload = error_payload(e)
        return ApiResponse(status_code, payload)
    except Exception as e:
        logger.error(
            "task_api_request_failed",
            extra={"method": method, "task_id": task_id, "error": str(e)},
        )
        status_code, payload = error_payload(e, expose_details=expose_error_details)
        return ApiResponse(status_code, payload)
