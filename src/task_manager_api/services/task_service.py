"""
Task Service - Request handling for task operations.

Normalizes and validates client parameters, delegates to the repository
and reports every outcome as a DomainResult. Bad-parameter messages are
part of the public contract and are shown to clients verbatim.
"""

import logging
from typing import List, Optional, Union

from task_manager_api.domain.entities.result_types import (
    DomainError,
    DomainResult,
    DomainSuccess,
)
from task_manager_api.domain.entities.sorting import (
    InvalidTokenError,
    SortOrder,
    TaskSortField,
    parse_enum_token,
)
from task_manager_api.domain.entities.task import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    CreateTaskInput,
    TaskView,
    UpdateTaskInput,
)
from task_manager_api.domain.interfaces.task_repository import ITaskRepository

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class TaskService:
    """
    Service for task request handling.

    The list operation carries the parameter rules; the other operations
    translate repository misses into not-found results.
    """

    def __init__(self, task_repo: ITaskRepository):
        """Initialize service with a task repository."""
        self.task_repo = task_repo

    # --- Helper Methods ---

    def _validate_fields(
        self, request: Union[CreateTaskInput, UpdateTaskInput]
    ) -> Optional[DomainResult[TaskView]]:
        """
        Check title and description limits.

        Returns:
            A validation error result, or None when the fields are valid.
        """
        if not request.title or not request.title.strip():
            return DomainError.validation_error(
                "The Title field is required.", details={"field": "title"}
            )

        if len(request.title) > TITLE_MAX_LENGTH:
            return DomainError.validation_error(
                f"The field Title must be a string with a maximum length of {TITLE_MAX_LENGTH}.",
                details={"field": "title"},
            )

        if request.description is not None and len(request.description) > DESCRIPTION_MAX_LENGTH:
            return DomainError.validation_error(
                "The field Description must be a string with a maximum length of "
                f"{DESCRIPTION_MAX_LENGTH}.",
                details={"field": "description"},
            )

        return None

    # --- Queries ---

    def list_tasks(
        self,
        title: Optional[str] = None,
        is_completed: Optional[bool] = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> DomainResult[List[TaskView]]:
        """
        List tasks, filtered, sorted and paged.

        Args:
            title: Title substring filter (case-sensitive).
            is_completed: Completion flag filter.
            page: Page number; values below 1 become 1.
            page_size: Page size; values below 1 become the default (10).
            sort_by: Id, Title, DueDate or IsCompleted, any case (default DueDate).
            sort_order: Ascending or Descending, any case (default Ascending).

        Returns:
            DomainResult with the page of task views, or a bad parameter error.
        """
        if page < 1:
            page = 1
        if page_size < 1:
            page_size = DEFAULT_PAGE_SIZE

        if page_size > MAX_PAGE_SIZE:
            logger.warning(
                "Requested page size %s exceeds maximum allowed %s", page_size, MAX_PAGE_SIZE
            )
            return DomainError.bad_parameter(
                f"Maximum page size is {MAX_PAGE_SIZE}.",
                details={"parameter": "pageSize", "value": page_size},
            )

        try:
            sort_field = parse_enum_token(TaskSortField, sort_by, TaskSortField.DUE_DATE)
        except InvalidTokenError as e:
            logger.warning("Invalid sortBy value: %s", sort_by)
            return DomainError.bad_parameter(
                f"Invalid sortBy value. Valid options are: {', '.join(e.valid_options)}.",
                details={"parameter": "sortBy", "value": sort_by},
            )

        try:
            direction = parse_enum_token(SortOrder, sort_order, SortOrder.ASCENDING)
        except InvalidTokenError as e:
            logger.warning("Invalid sortOrder value: %s", sort_order)
            return DomainError.bad_parameter(
                f"Invalid sortOrder value. Valid options are: {', '.join(e.valid_options)}.",
                details={"parameter": "sortOrder", "value": sort_order},
            )

        tasks = self.task_repo.list(
            title=title,
            is_completed=is_completed,
            page=page,
            page_size=page_size,
            sort_by=sort_field,
            sort_order=direction,
        )
        return DomainSuccess.create(data=tasks)

    def get_task(self, task_id: int) -> DomainResult[TaskView]:
        """Get a single task by ID."""
        task = self.task_repo.get(task_id)
        if task is None:
            logger.warning("Task with id %s not found", task_id)
            return DomainError.not_found("Task", task_id)
        return DomainSuccess.create(data=task)

    # --- Commands ---

    def create_task(self, request: CreateTaskInput) -> DomainResult[TaskView]:
        """
        Create a new task.

        Args:
            request: Fields of the new task.

        Returns:
            DomainResult with the created task view.
        """
        invalid = self._validate_fields(request)
        if invalid is not None:
            logger.warning("Rejected task creation: %s", invalid.error_message)
            return invalid

        created = self.task_repo.create(request)
        logger.info("Task with id %s created", created.id)
        return DomainSuccess.create(data=created)

    def update_task(self, task_id: int, request: UpdateTaskInput) -> DomainResult[None]:
        """
        Replace a task's fields.

        Args:
            task_id: ID from the request route; must equal ``request.id``.
            request: New field values.

        Returns:
            Empty success, a bad parameter error on ID mismatch, a validation
            error, or not found.
        """
        if task_id != request.id:
            logger.warning("Route id %s does not match request id %s", task_id, request.id)
            return DomainError.bad_parameter(
                "Route id and request id do not match.",
                details={"route_id": task_id, "request_id": request.id},
            )

        invalid = self._validate_fields(request)
        if invalid is not None:
            logger.warning("Rejected update of task %s: %s", task_id, invalid.error_message)
            return invalid

        if not self.task_repo.update(request):
            logger.warning("Task with id %s not found for update", task_id)
            return DomainError.not_found("Task", task_id)

        return DomainSuccess.create()

    def delete_task(self, task_id: int) -> DomainResult[None]:
        """Delete a task by ID."""
        if not self.task_repo.delete(task_id):
            logger.warning("Task with id %s not found for deletion", task_id)
            return DomainError.not_found("Task", task_id)

        logger.info("Task with id %s deleted successfully", task_id)
        return DomainSuccess.create()
