"""
Task SQLAlchemy Model.

Represents a stored task record.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from task_manager_api.database.models.base import Base, UTCDateTime
from task_manager_api.domain.entities.task import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH


class TaskItem(Base):
    """
    Task model.

    Ids come from SQLite AUTOINCREMENT so they only ever grow, even after
    the newest row is deleted.
    """

    __tablename__ = "tasks"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(
        String(DESCRIPTION_MAX_LENGTH), nullable=True
    )
    due_date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<TaskItem(id={self.id!r}, title={self.title!r}, is_completed={self.is_completed!r})>"
