"""
Task Domain Entities (DTOs).

Data Transfer Objects for the task resource, providing a clean interface
between the transports and the database layer.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


@dataclass(frozen=True)
class TaskView:
    """
    Read-only view of a stored task.

    Built only by the repository from a persisted row, so the storage shape
    can change without touching the wire contract.

    Attributes:
        id: Server-assigned task identifier
        title: Task title
        description: Optional longer description
        due_date: Due timestamp (naive UTC)
        is_completed: Completion flag
    """

    id: int
    title: str
    description: Optional[str]
    due_date: datetime
    is_completed: bool

    def to_dict(self) -> Dict[str, Any]:
        """Convert view to dictionary representation."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "is_completed": self.is_completed,
        }


@dataclass
class CreateTaskInput:
    """Fields accepted when creating a task. The id is assigned on insert."""

    title: str
    due_date: datetime
    description: Optional[str] = None
    is_completed: bool = False


@dataclass
class UpdateTaskInput:
    """Full replacement of a task's mutable fields, addressed by id."""

    id: int
    title: str
    due_date: datetime
    description: Optional[str] = None
    is_completed: bool = False

