"""Database layer - SQLAlchemy ORM models and repositories."""

from task_manager_api.database.models.base import Base
from task_manager_api.database.orm_manager import ORMManager, get_orm_manager

__all__ = [
    "ORMManager",
    "get_orm_manager",
    "Base",
]
