"""
Service Factory - Dependency injection for services.

Provides a centralized factory for creating service instances that share
one ORM manager and repository.
"""

import threading
from typing import Optional

from task_manager_api.database.orm_manager import ORMManager, get_orm_manager
from task_manager_api.database.repositories import TaskRepository
from task_manager_api.services.task_service import TaskService

# Module-level singleton
_global_factory: Optional["ServiceFactory"] = None
_global_lock = threading.Lock()


def get_service_factory(orm_manager: Optional[ORMManager] = None) -> "ServiceFactory":
    """
    Get the singleton service factory instance.

    Args:
        orm_manager: Optional ORM manager instance. Uses singleton if not provided.

    Returns:
        ServiceFactory singleton instance.
    """
    global _global_factory

    with _global_lock:
        if _global_factory is None:
            _global_factory = ServiceFactory(orm_manager)
        return _global_factory


def reset_service_factory() -> None:
    """Reset the global service factory (for testing)."""
    global _global_factory

    with _global_lock:
        _global_factory = None


class ServiceFactory:
    """
    Factory for creating service instances with dependency injection.

    Creates and caches the repository and service.
    """

    def __init__(self, orm_manager: Optional[ORMManager] = None):
        """
        Initialize the service factory.

        Args:
            orm_manager: ORM manager instance. Uses singleton if not provided.
        """
        self._orm_manager = orm_manager or get_orm_manager()
        self._lock = threading.RLock()  # RLock allows reentrant locking

        self._task_repo: Optional[TaskRepository] = None
        self._task_service: Optional[TaskService] = None

    @property
    def orm_manager(self) -> ORMManager:
        """Get the ORM manager."""
        return self._orm_manager

    def get_task_repository(self) -> TaskRepository:
        """Get or create the task repository."""
        with self._lock:
            if self._task_repo is None:
                self._task_repo = TaskRepository(self._orm_manager)
            return self._task_repo

    def get_task_service(self) -> TaskService:
        """Get or create the task service."""
        with self._lock:
            if self._task_service is None:
                self._task_service = TaskService(task_repo=self.get_task_repository())
            return self._task_service
