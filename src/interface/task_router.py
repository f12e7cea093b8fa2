"""Task API endpoints for the standalone server."""

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from src.core.task_store import TaskStore
from src.interface.task_api import ApiResponse, handle_request


router = APIRouter(prefix="/tasks", tags=["tasks"])

# Every verb reaches the shared dispatcher so unsupported ones get its JSON 405.
ROUTE_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS", "HEAD"]


def get_task_store(request: Request) -> TaskStore:
    """Return the store injected into the app at construction time."""
    return request.app.state.task_store


def render(response: ApiResponse) -> Response:
    """Convert a dispatcher response into a Starlette response."""
    if response.body is None:
        return Response(status_code=response.status_code)
    return JSONResponse(content=response.body, status_code=response.status_code)


@router.api_route("", methods=ROUTE_METHODS)
async def tasks_collection(request: Request, store: TaskStore = Depends(get_task_store)) -> Response:
    """List tasks (GET) or create one (POST)."""
    body = await request.body()
    return render(await handle_request(store=store, method=request.method, body=body))


@router.api_route("/{task_id}", methods=ROUTE_METHODS)
async def task_item(task_id: str, request: Request, store: TaskStore = Depends(get_task_store)) -> Response:
    """Get (GET), replace (PUT) or delete (DELETE) a single task."""
    body = await request.body()
    return render(await handle_request(store=store, method=request.method, task_id=task_id, body=body))
