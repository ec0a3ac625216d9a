"""Task MCP tool definitions."""

from typing import List

from mcp.types import Tool

from task_manager_api.domain.entities.sorting import SortOrder, TaskSortField, valid_names
from task_manager_api.services.task_service import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

_TASK_FIELDS = {
    "title": {"type": "string", "description": "Task title (1-100 characters)"},
    "description": {"type": "string", "description": "Task description (max 500 characters)"},
    "due_date": {
        "type": "string",
        "format": "date-time",
        "description": "Due date, ISO-8601 (e.g. 2026-05-01T09:00:00Z)",
    },
    "is_completed": {"type": "boolean", "description": "Completion flag (default false)"},
}


def get_task_tools() -> List[Tool]:
    """Get task management MCP tools."""
    return [
        Tool(
            name="task_list",
            description=f"""List tasks with optional filtering, sorting and paging.

Parameters:
- title (optional): Keep tasks whose title contains this text (case-sensitive)
- is_completed (optional): Keep tasks with this completion flag
- page (optional): Page number, default 1
- page_size (optional): Page size, default {DEFAULT_PAGE_SIZE}, maximum {MAX_PAGE_SIZE}
- sort_by (optional): {", ".join(valid_names(TaskSortField))} (default DueDate)
- sort_order (optional): {", ".join(valid_names(SortOrder))} (default Ascending)

Returns: List of tasks.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "title": {"type": "string", "description": "Title substring filter"},
                    "is_completed": {"type": "boolean", "description": "Completion filter"},
                    "page": {"type": "integer", "description": "Page number"},
                    "page_size": {"type": "integer", "description": "Tasks per page"},
                    "sort_by": {
                        "type": "string",
                        "description": "Sort field (case-insensitive)",
                    },
                    "sort_order": {
                        "type": "string",
                        "description": "Sort direction (case-insensitive)",
                    },
                },
            },
        ),
        Tool(
            name="task_show",
            description="""Show a single task.

Parameters:
- task_id (required): Task ID

Returns: The task, or an error when it does not exist.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "task_id": {"type": "integer", "description": "Task ID"},
                },
                "required": ["task_id"],
            },
        ),
        Tool(
            name="task_create",
            description="""Create a new task.

Parameters:
- title (required): Task title
- due_date (required): Due date, ISO-8601
- description (optional): Task description
- is_completed (optional): Completion flag, default false

Returns: Created task with ID.

RESPONSE FORMAT:
```yaml
success: true
data:
  id: 1               # use for task_show, task_update, task_delete
  title: Task title
  description: null
  due_date: '2026-05-01T09:00:00'
  is_completed: false
```""",
            inputSchema={
                "type": "object",
                "properties": dict(_TASK_FIELDS),
                "required": ["title", "due_date"],
            },
        ),
        Tool(
            name="task_update",
            description="""Replace all fields of an existing task.

Fields not supplied fall back to their defaults (no description,
not completed); this is not a partial update.

Parameters:
- task_id (required): Task ID
- title (required): Task title
- due_date (required): Due date, ISO-8601
- description (optional): Task description
- is_completed (optional): Completion flag

Returns: Confirmation, or an error when the task does not exist.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "task_id": {"type": "integer", "description": "Task ID"},
                    **_TASK_FIELDS,
                },
                "required": ["task_id", "title", "due_date"],
            },
        ),
        Tool(
            name="task_delete",
            description="""Delete a task permanently.

Parameters:
- task_id (required): Task ID

Returns: Confirmation, or an error when the task does not exist.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "task_id": {"type": "integer", "description": "Task ID"},
                },
                "required": ["task_id"],
            },
        ),
    ]
