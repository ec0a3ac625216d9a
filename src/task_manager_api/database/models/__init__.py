"""Database models."""

from task_manager_api.database.models.base import Base, UTCDateTime, to_naive_utc
from task_manager_api.database.models.task import TaskItem

__all__ = [
    "Base",
    "UTCDateTime",
    "to_naive_utc",
    "TaskItem",
]
