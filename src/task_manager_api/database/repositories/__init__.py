"""Database repositories."""

from task_manager_api.database.repositories.task_repository import TaskRepository

__all__ = [
    "TaskRepository",
]
