"""Domain interfaces - Protocol-based repository contracts."""

from task_manager_api.domain.interfaces.task_repository import ITaskRepository

__all__ = [
    "ITaskRepository",
]
