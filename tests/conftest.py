"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta
from typing import Callable, Generator

import pytest

from task_manager_api.config import reset_settings
from task_manager_api.database.orm_manager import ORMManager, reset_orm_manager
from task_manager_api.domain.entities.task import CreateTaskInput, TaskView
from task_manager_api.services.service_factory import reset_service_factory


@pytest.fixture(scope="function", autouse=True)
def reset_singletons(monkeypatch: pytest.MonkeyPatch):
    """Give every test a fresh in-memory database and fresh singletons."""
    monkeypatch.setenv("TASK_MANAGER_DATABASE_URL", "sqlite://")
    monkeypatch.delenv("TASK_MANAGER_DEBUG", raising=False)

    reset_settings()
    reset_orm_manager()
    reset_service_factory()

    yield

    reset_orm_manager()
    reset_service_factory()
    reset_settings()


@pytest.fixture
def orm_manager() -> Generator[ORMManager, None, None]:
    """Create an ORM manager over a private in-memory database."""
    manager = ORMManager("sqlite://")
    yield manager
    manager.close()


@pytest.fixture
def task_repo(orm_manager: ORMManager):
    """Create a task repository."""
    from task_manager_api.database.repositories import TaskRepository

    return TaskRepository(orm_manager)


@pytest.fixture
def task_service(task_repo):
    """Create a task service over the test repository."""
    from task_manager_api.services import TaskService

    return TaskService(task_repo=task_repo)


@pytest.fixture
def base_time() -> datetime:
    """A fixed reference time so due dates compare exactly."""
    return datetime(2026, 3, 1, 9, 0, 0)


@pytest.fixture
def add_task(task_repo, base_time: datetime) -> Callable[..., TaskView]:
    """Insert a task straight through the repository."""

    def _add(
        title: str,
        days: int = 0,
        is_completed: bool = False,
        description: str = "Desc",
    ) -> TaskView:
        return task_repo.create(
            CreateTaskInput(
                title=title,
                description=description,
                due_date=base_time + timedelta(days=days),
                is_completed=is_completed,
            )
        )

    return _add
