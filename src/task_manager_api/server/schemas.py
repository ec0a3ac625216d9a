"""
Wire schemas shared by the HTTP and MCP transports.

Bodies use camelCase keys on the wire; snake_case names are accepted too.
Only the shape is checked here (types, required fields). Length and
blank-title rules live in TaskService so every transport applies them.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from task_manager_api.domain.entities.task import CreateTaskInput, TaskView, UpdateTaskInput


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateTaskRequest(_WireModel):
    title: str
    description: Optional[str] = None
    due_date: datetime
    is_completed: bool = False

    def to_input(self) -> CreateTaskInput:
        return CreateTaskInput(
            title=self.title,
            description=self.description,
            due_date=self.due_date,
            is_completed=self.is_completed,
        )


class UpdateTaskRequest(_WireModel):
    id: int
    title: str
    description: Optional[str] = None
    due_date: datetime
    is_completed: bool = False

    def to_input(self) -> UpdateTaskInput:
        return UpdateTaskInput(
            id=self.id,
            title=self.title,
            description=self.description,
            due_date=self.due_date,
            is_completed=self.is_completed,
        )


class TaskResponse(_WireModel):
    id: int
    title: str
    description: Optional[str] = None
    due_date: datetime
    is_completed: bool

    @classmethod
    def from_view(cls, view: TaskView) -> "TaskResponse":
        return cls(
            id=view.id,
            title=view.title,
            description=view.description,
            due_date=view.due_date,
            is_completed=view.is_completed,
        )
