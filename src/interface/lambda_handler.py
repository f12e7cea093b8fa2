"""Serverless entry point for the task API.

Accepts API Gateway proxy events (REST API v1 and HTTP API v2 payloads) and
returns proxy responses. Routing and response shaping are shared with the
standalone server through handle_request().
"""

import asyncio
import base64
import functools
import json
import logging
from collections.abc import Callable
from typing import Any

from src.core.config import constants, settings
from src.core.logging import configure_logfire, log_with_context
from src.core.task_store import TaskStore, build_task_store
from src.interface.task_api import ApiResponse, handle_request


logger = logging.getLogger(__name__)

LambdaHandler = Callable[[dict[str, Any], Any], dict[str, Any]]

CORS_HEADERS = {
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Methods": constants.CORS_ALLOW_METHODS,
    "Access-Control-Allow-Headers": constants.CORS_ALLOW_HEADERS,
}


def _event_method(event: dict[str, Any]) -> str:
    if "httpMethod" in event:
        return event["httpMethod"]
    return event.get("requestContext", {}).get("http", {}).get("method", "GET")


def _event_task_id(event: dict[str, Any]) -> str | None:
    path_parameters = event.get("pathParameters") or {}
    return path_parameters.get("id")


def _event_body(event: dict[str, Any]) -> bytes | str | None:
    body = event.get("body")
    if body is not None and event.get("isBase64Encoded"):
        return base64.b64decode(body)
    return body


def _event_origin(event: dict[str, Any]) -> str | None:
    headers = event.get("headers") or {}
    for name, value in headers.items():
        if name.lower() == "origin":
            return value
    return None


def cors_headers(origin: str | None, allowed_origins: list[str] | None = None) -> dict[str, str]:
    """CORS headers for a request from origin.

    Access-Control-Allow-Origin holds a single origin, so an allow-listed
    request origin is echoed back. Unlisted origins get no allow header.
    """
    allowed = settings.cors_allow_origins if allowed_origins is None else allowed_origins
    headers = dict(CORS_HEADERS)
    if "*" in allowed:
        headers["Access-Control-Allow-Origin"] = "*"
    elif origin in allowed:
        headers["Access-Control-Allow-Origin"] = origin
        headers["Vary"] = "Origin"
    return headers


def to_proxy_response(response: ApiResponse, origin: str | None = None) -> dict[str, Any]:
    """Render a dispatcher response as an API Gateway proxy response."""
    headers = cors_headers(origin)
    if response.body is None:
        return {"statusCode": response.status_code, "headers": headers, "body": ""}
    headers["Content-Type"] = "application/json"
    return {"statusCode": response.status_code, "headers": headers, "body": json.dumps(response.body)}


def build_handler(store: TaskStore) -> LambdaHandler:
    """Create a Lambda handler bound to the given task store."""

    def _handler(event: dict[str, Any], _context: Any) -> dict[str, Any]:
        method = _event_method(event)
        task_id = _event_task_id(event)
        log_with_context(logger, "info", "lambda_request", method=method, task_id=task_id)

        response = asyncio.run(
            handle_request(store=store, method=method, task_id=task_id, body=_event_body(event))
        )
        return to_proxy_response(response, _event_origin(event))

    return _handler


@functools.cache
def _default_handler() -> LambdaHandler:
    # One store per warm container
    configure_logfire()
    return build_handler(build_task_store(settings))


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """AWS Lambda entry point configured from environment settings."""
    return _default_handler()(event, context)
