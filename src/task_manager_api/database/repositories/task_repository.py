"""
Task Repository.

SQLAlchemy ORM-based repository for task operations.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import Select, func, select
from sqlalchemy.orm.exc import StaleDataError

from task_manager_api.database.models.task import TaskItem
from task_manager_api.database.orm_manager import ORMManager, get_orm_manager
from task_manager_api.domain.entities.sorting import SortOrder, TaskSortField
from task_manager_api.domain.entities.task import CreateTaskInput, TaskView, UpdateTaskInput

logger = logging.getLogger(__name__)

SORT_COLUMNS: Dict[TaskSortField, Any] = {
    TaskSortField.ID: TaskItem.id,
    TaskSortField.TITLE: TaskItem.title,
    TaskSortField.DUE_DATE: TaskItem.due_date,
    TaskSortField.IS_COMPLETED: TaskItem.is_completed,
}


class TaskRepository:
    """
    Task repository using SQLAlchemy ORM.

    SQLite only: the title filter uses instr().

    Trusts its input: page bounds and sort tokens are validated by the
    service before they get here. Lookups that miss return None or False;
    storage failures propagate to the caller.
    """

    def __init__(self, orm_manager: Optional[ORMManager] = None):
        """
        Initialize repository with ORM manager.

        Args:
            orm_manager: ORM manager instance. Uses singleton if not provided.
        """
        self.orm_manager = orm_manager or get_orm_manager()

    def _to_view(self, task: TaskItem) -> TaskView:
        """Convert TaskItem model to TaskView."""
        return TaskView(
            id=task.id,
            title=task.title,
            description=task.description,
            due_date=task.due_date,
            is_completed=task.is_completed,
        )

    def _build_list_query(
        self,
        title: Optional[str],
        is_completed: Optional[bool],
        page: int,
        page_size: int,
        sort_by: TaskSortField,
        sort_order: SortOrder,
    ) -> Select:
        """Translate filter, sort and page parameters into a SELECT."""
        query = select(TaskItem)

        # instr() is case-sensitive and has no wildcards, unlike LIKE on SQLite
        if title is not None and title.strip():
            query = query.where(func.instr(TaskItem.title, title) > 0)

        if is_completed is not None:
            query = query.where(TaskItem.is_completed == is_completed)

        column = SORT_COLUMNS.get(sort_by)
        if column is None:
            query = query.order_by(TaskItem.due_date.asc())
        elif sort_order == SortOrder.DESCENDING:
            query = query.order_by(column.desc())
        else:
            query = query.order_by(column.asc())

        return query.offset((page - 1) * page_size).limit(page_size)

    def list(
        self,
        title: Optional[str] = None,
        is_completed: Optional[bool] = None,
        page: int = 1,
        page_size: int = 10,
        sort_by: TaskSortField = TaskSortField.DUE_DATE,
        sort_order: SortOrder = SortOrder.ASCENDING,
    ) -> List[TaskView]:
        """
        List tasks with optional filtering, sorting and paging.

        Args:
            title: Keep tasks whose title contains this text (case-sensitive).
                Blank means no title filter.
            is_completed: Keep tasks with this completion flag.
            page: 1-based page number.
            page_size: Maximum number of tasks per page.
            sort_by: Field to order by; unknown values order by due date ascending.
            sort_order: Direction of the ordering.

        Returns:
            Ordered list of task views, possibly empty.
        """
        query = self._build_list_query(title, is_completed, page, page_size, sort_by, sort_order)
        with self.orm_manager.get_session() as session:
            tasks = session.execute(query).scalars().all()
            return [self._to_view(t) for t in tasks]

    def get(self, task_id: int) -> Optional[TaskView]:
        """
        Get task by ID.

        Args:
            task_id: Task ID.

        Returns:
            The task view, or None when no task has that ID.
        """
        with self.orm_manager.get_session() as session:
            task = session.get(TaskItem, task_id)
            return self._to_view(task) if task else None

    def exists(self, task_id: int) -> bool:
        """Check whether a task with this ID is stored."""
        with self.orm_manager.get_session() as session:
            found = session.execute(
                select(TaskItem.id).where(TaskItem.id == task_id)
            ).scalar_one_or_none()
            return found is not None

    def create(self, request: CreateTaskInput) -> TaskView:
        """
        Create a new task.

        Args:
            request: Fields of the new task.

        Returns:
            View of the stored task, including its new ID.
        """
        with self.orm_manager.get_session() as session:
            task = TaskItem(
                title=request.title,
                description=request.description,
                due_date=request.due_date,
                is_completed=request.is_completed,
            )
            session.add(task)
            session.flush()
            # Reload so the view carries the stored (normalized) values
            session.refresh(task)

            logger.debug("Created task %s", task.id)
            return self._to_view(task)

    def update(self, request: UpdateTaskInput) -> bool:
        """
        Overwrite all mutable fields of a task.

        Args:
            request: New field values, addressed by ``request.id``.

        Returns:
            True when the task was updated, False when it does not exist.

        Raises:
            StaleDataError: The row changed underneath us but still exists.
        """
        try:
            with self.orm_manager.get_session() as session:
                task = session.get(TaskItem, request.id)
                if task is None:
                    return False

                task.title = request.title
                task.description = request.description
                task.due_date = request.due_date
                task.is_completed = request.is_completed

                session.flush()
        except StaleDataError:
            # A concurrent delete makes the UPDATE match no rows; any other
            # conflict on a row that still exists is left to the caller.
            if not self.exists(request.id):
                logger.warning("Task %s disappeared during update", request.id)
                return False
            raise

        return True

    def delete(self, task_id: int) -> bool:
        """
        Delete a task.

        Args:
            task_id: Task ID.

        Returns:
            True when the task was deleted, False when it does not exist.
        """
        with self.orm_manager.get_session() as session:
            task = session.get(TaskItem, task_id)
            if task is None:
                return False

            session.delete(task)
            session.flush()
            return True
