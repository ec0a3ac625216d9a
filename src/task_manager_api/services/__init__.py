"""Service layer - Request handling and wiring."""

from task_manager_api.services.service_factory import ServiceFactory, get_service_factory
from task_manager_api.services.task_service import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, TaskService

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "TaskService",
    "ServiceFactory",
    "get_service_factory",
]
