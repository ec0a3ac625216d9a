"""Task Repository Interface."""

from typing import List, Optional, Protocol

from task_manager_api.domain.entities.sorting import SortOrder, TaskSortField
from task_manager_api.domain.entities.task import CreateTaskInput, TaskView, UpdateTaskInput


class ITaskRepository(Protocol):
    """Protocol for task repository operations."""

    def list(
        self,
        title: Optional[str] = None,
        is_completed: Optional[bool] = None,
        page: int = 1,
        page_size: int = 10,
        sort_by: TaskSortField = TaskSortField.DUE_DATE,
        sort_order: SortOrder = SortOrder.ASCENDING,
    ) -> List[TaskView]:
        """List tasks matching the filters, sorted and paged."""
        ...

    def get(self, task_id: int) -> Optional[TaskView]:
        """Get task by ID, or None when absent."""
        ...

    def create(self, request: CreateTaskInput) -> TaskView:
        """Create a new task."""
        ...

    def update(self, request: UpdateTaskInput) -> bool:
        """Overwrite a task; False when it does not exist."""
        ...

    def delete(self, task_id: int) -> bool:
        """Delete a task; False when it does not exist."""
        ...
