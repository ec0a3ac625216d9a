"""
HTTP transport for the task service.

FastAPI routes under /api/tasks. Each route calls TaskService and turns
its DomainResult into a response:

- success: 200 with the view(s), 201 with a Location header, or 204
- bad parameter: 400 with the message as plain text
- validation error: 400 with a validation-problem JSON body
- not found: 404 with an empty body

Unexpected exceptions are not caught here.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from task_manager_api import __version__
from task_manager_api.config import Settings, configure_logging, get_settings
from task_manager_api.domain.entities.result_types import DomainErrorType, DomainResult
from task_manager_api.server.schemas import CreateTaskRequest, TaskResponse, UpdateTaskRequest
from task_manager_api.services import DEFAULT_PAGE_SIZE, TaskService, get_service_factory

logger = logging.getLogger(__name__)

VALIDATION_PROBLEM_TITLE = "One or more validation errors occurred."


def get_task_service() -> TaskService:
    """FastAPI dependency resolving the shared task service."""
    return get_service_factory().get_task_service()


def _validation_problem(errors: Dict[str, List[str]]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "title": VALIDATION_PROBLEM_TITLE,
            "status": status.HTTP_400_BAD_REQUEST,
            "errors": errors,
        },
    )


def error_response(result: DomainResult[Any]) -> Response:
    """Render a failed DomainResult."""
    if result.error_type == DomainErrorType.NOT_FOUND:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    if result.error_type == DomainErrorType.VALIDATION_ERROR:
        field = result.error_details.get("field", "")
        return _validation_problem({field: [result.error_message or ""]})

    return PlainTextResponse(result.error_message or "", status_code=status.HTTP_400_BAD_REQUEST)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed bodies and query strings as 400 instead of FastAPI's 422."""
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ())]
        # drop the "body"/"query" prefix, keep the field path
        field = ".".join(location[1:]) if len(location) > 1 else "".join(location)
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))

    logger.warning("Rejected %s %s: %s", request.method, request.url.path, errors)
    return _validation_problem(errors)


router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=List[TaskResponse])
def list_tasks(
    title: Optional[str] = Query(None, description="Filter by title substring (case-sensitive)"),
    is_completed: Optional[bool] = Query(None, alias="isCompleted"),
    page: int = Query(1, description="Page number (default 1)"),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize", description="Page size (max 100)"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="Id, Title, DueDate or IsCompleted"),
    sort_order: Optional[str] = Query(None, alias="sortOrder", description="Ascending or Descending"),
    service: TaskService = Depends(get_task_service),
) -> Any:
    """Get a page of tasks, optionally filtered and sorted."""
    result = service.list_tasks(
        title=title,
        is_completed=is_completed,
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    if result.is_failure:
        return error_response(result)
    return [TaskResponse.from_view(task) for task in result.data or []]


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: int, service: TaskService = Depends(get_task_service)) -> Any:
    """Get a single task by its ID."""
    result = service.get_task(task_id)
    if result.is_failure:
        return error_response(result)
    return TaskResponse.from_view(result.get_data_or_raise())


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    body: CreateTaskRequest,
    request: Request,
    response: Response,
    service: TaskService = Depends(get_task_service),
) -> Any:
    """Create a new task."""
    result = service.create_task(body.to_input())
    if result.is_failure:
        return error_response(result)

    created = result.get_data_or_raise()
    response.headers["Location"] = str(request.url_for("get_task", task_id=created.id))
    return TaskResponse.from_view(created)


@router.put("/{task_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def update_task(
    task_id: int,
    body: UpdateTaskRequest,
    service: TaskService = Depends(get_task_service),
) -> Response:
    """Replace an existing task."""
    result = service.update_task(task_id, body.to_input())
    if result.is_failure:
        return error_response(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_task(task_id: int, service: TaskService = Depends(get_task_service)) -> Response:
    """Delete a task by its ID."""
    result = service.delete_task(task_id)
    if result.is_failure:
        return error_response(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def healthz() -> JSONResponse:
    """Report service and database health."""
    health = get_service_factory().orm_manager.perform_health_check()
    healthy = bool(health.get("healthy"))
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=jsonable_encoder(
            {"status": "ok" if healthy else "unavailable", "version": __version__, "database": health}
        ),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    health = get_service_factory().orm_manager.perform_health_check()
    if health.get("healthy"):
        logger.info("Database initialized: %s tables", health.get("table_count", 0))
    else:
        logger.warning("Database health check failed: %s", health.get("error"))
    yield
    logger.info("HTTP server shutting down")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to configure logging with. Uses environment settings if not provided.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Task Manager API",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.include_router(router)
    app.add_api_route("/healthz", healthz, methods=["GET"], tags=["health"])
    return app
