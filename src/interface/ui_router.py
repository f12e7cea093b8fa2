"""Browser task sheet."""

import logging
from collections import Counter

from fastapi import APIRouter, Depends, Request, Response
from fastapi.templating import Jinja2Templates

from src.core.config import constants, settings
from src.core.errors import TaskStoreError
from src.core.task_store import TaskStore
from src.domain.task import TaskPriority, TaskStatus
from src.interface.task_router import get_task_store
from src.services import task_service


logger = logging.getLogger(__name__)

router = APIRouter(tags=["ui"])

templates = Jinja2Templates(directory=str(constants.TEMPLATES_DIR))

LOAD_ERROR = "Failed to load tasks. Make sure the server is running."


@router.get("/")
async def get_task_sheet(request: Request, store: TaskStore = Depends(get_task_store)) -> Response:
    """Render the task table with its add, edit and delete controls."""
    error = None
    try:
        tasks = await task_service.list_tasks(store=store)
    except TaskStoreError as e:
        logger.warning("task_sheet_load_failed", extra={"error": str(e)})
        tasks = []
        error = LOAD_ERROR

    tasks.sort(key=lambda t: t.get("createdAt", ""))
    status_counts = Counter(t.get("status") for t in tasks)

    return templates.TemplateResponse(
        request,
        name="tasks.html",
        context={
            "tasks": tasks,
            "stats": {
                "total": len(tasks),
                "completed": status_counts[TaskStatus.COMPLETED],
                "in_progress": status_counts[TaskStatus.IN_PROGRESS],
            },
            "error": error,
            "statuses": list(TaskStatus),
            "priorities": list(TaskPriority),
            "api_url": f"{settings.api_prefix}/tasks",
        },
    )
