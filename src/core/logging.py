"""Observability for the task API.

Both deployments (the uvicorn server and the Lambda handler) call
configure_logfire() once per process before serving. Service functions open
spans through span(); everything else logs through the standard library
(logging.getLogger(__name__)) with structured fields passed as `extra`, which
logfire picks up once configured.
"""

import logging

import logfire
from fastapi import FastAPI

from src.core.config import settings


logger = logging.getLogger(__name__)

SERVICE_NAME = "tasksheet"
SERVICE_VERSION = "0.1.0"


def configure_logfire() -> None:
    """Configure logfire for this process; spans stay local unless LOGFIRE_TOKEN is set."""
    logfire.configure(
        token=settings.logfire_token,
        service_name=SERVICE_NAME,
        service_version=SERVICE_VERSION,
        environment=settings.environment,
        send_to_logfire="if-token-present",
    )
    logger.info("Logfire configured", extra={"environment": settings.environment})


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request the standalone server handles."""
    logfire.instrument_fastapi(app)
    logger.info("FastAPI instrumentation configured")


def span(name: str) -> logfire.LogfireSpan:
    """Open a span around one task service operation, e.g. span("task_service.create_task")."""
    return logfire.span(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: object,
) -> None:
    """Log a message with structured context fields.

    Args:
        logger: Logger instance to use
        level: Log level ("debug", "info", "warning", "error", "critical")
        message: Log message
        **context: Fields attached to the record, such as task_id or method
    """
    log_method = getattr(logger, level.lower())
    log_method(message, extra=context)
