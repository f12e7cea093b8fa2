"""tasksheet - task list API backed by DynamoDB."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.core.config import settings
from src.core.errors import TaskStoreError
from src.core.logging import SERVICE_NAME, SERVICE_VERSION, configure_logfire, instrument_fastapi
from src.core.task_store import TaskStore, build_task_store
from src.interface.task_router import router as task_router
from src.interface.ui_router import router as ui_router


logger = logging.getLogger(__name__)


async def check_store_connectivity(store: TaskStore) -> None:
    """Verify the task store is reachable.

    Logs a warning if it is not, so the server can start before the table is provisioned.
    """
    try:
        await store.ping()
        logger.info("startup_validation", extra={"service": "task_store", "status": "ok"})
    except TaskStoreError as e:
        logger.warning("startup_validation", extra={"service": "task_store", "status": "unavailable", "error": str(e)})


def create_app(store: TaskStore | None = None) -> FastAPI:
    """Build the FastAPI application around an explicitly provided task store.

    Args:
        store: Task store to serve; built from settings when omitted

    Returns:
        Configured FastAPI application
    """
    task_store = store if store is not None else build_task_store(settings)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan context manager."""
        # Startup
        configure_logfire()
        await check_store_connectivity(task_store)
        yield
        # Shutdown
        await task_store.close()

    app = FastAPI(
        title=SERVICE_NAME,
        description="Task list API backed by a key-value table",
        version=SERVICE_VERSION,
        lifespan=lifespan,
    )
    app.state.task_store = task_store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Instrument FastAPI with Logfire
    instrument_fastapi(app)

    # Register routers
    app.include_router(task_router, prefix=settings.api_prefix)
    app.include_router(ui_router)

    @app.get(f"{settings.api_prefix}/health")
    async def health_check() -> JSONResponse:
        """Health check endpoint."""
        return JSONResponse(content={"status": "OK", "message": "Server is running"}, status_code=200)

    return app


app = create_app()


def run() -> None:
    """Run the standalone server with uvicorn."""
    logger.info("Starting server", extra={"host": settings.host, "port": settings.port})
    uvicorn.run("src.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
