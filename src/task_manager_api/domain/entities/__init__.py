"""Domain entities - Data Transfer Objects."""

from task_manager_api.domain.entities.result_types import (
    DomainError,
    DomainErrorType,
    DomainResult,
    DomainSuccess,
)
from task_manager_api.domain.entities.sorting import (
    InvalidTokenError,
    SortOrder,
    TaskSortField,
    parse_enum_token,
    valid_names,
)
from task_manager_api.domain.entities.task import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    CreateTaskInput,
    TaskView,
    UpdateTaskInput,
)

__all__ = [
    "DomainError",
    "DomainErrorType",
    "DomainResult",
    "DomainSuccess",
    "InvalidTokenError",
    "SortOrder",
    "TaskSortField",
    "parse_enum_token",
    "valid_names",
    "DESCRIPTION_MAX_LENGTH",
    "TITLE_MAX_LENGTH",
    "CreateTaskInput",
    "TaskView",
    "UpdateTaskInput",
]
