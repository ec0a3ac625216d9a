"""
Service Executor - Direct service layer execution for MCP tools.

Maps MCP tool names to TaskService calls and renders each DomainResult
as YAML.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional

import yaml
from pydantic import ValidationError

from task_manager_api.domain.entities.result_types import DomainResult
from task_manager_api.server.schemas import CreateTaskRequest, UpdateTaskRequest
from task_manager_api.services import DEFAULT_PAGE_SIZE, get_service_factory

logger = logging.getLogger(__name__)


class ToolArgumentError(ValueError):
    """Raised when tool arguments cannot be converted to service inputs."""


def _require_int(args: Dict[str, Any], name: str, default: Optional[int] = None) -> int:
    value = args.get(name, default)
    if value is None:
        raise ToolArgumentError(f"Missing required argument: {name}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ToolArgumentError(f"Argument {name} must be an integer, got {value!r}") from e


def _optional_bool(args: Dict[str, Any], name: str) -> Optional[bool]:
    value = args.get(name)
    if value is None or isinstance(value, bool):
        return value
    raise ToolArgumentError(f"Argument {name} must be a boolean, got {value!r}")


def _optional_str(args: Dict[str, Any], name: str) -> Optional[str]:
    value = args.get(name)
    if value is None or isinstance(value, str):
        return value
    raise ToolArgumentError(f"Argument {name} must be a string, got {value!r}")


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        field = ".".join(str(p) for p in item.get("loc", ()))
        parts.append(f"{field}: {item.get('msg', 'Invalid value')}")
    return "; ".join(parts)


class ServiceExecutor:
    """
    Executes MCP tool calls directly via service layer.

    Service calls are synchronous, so they run on a small thread pool to
    keep the event loop free.
    """

    def __init__(self):
        """Initialize the service executor."""
        self._factory = get_service_factory()
        self._executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="mcp-service-")

        # Tool to service method mapping
        self._tool_handlers: Dict[str, Callable[[Dict[str, Any]], str]] = {
            "task_list": self._handle_task_list,
            "task_show": self._handle_task_show,
            "task_create": self._handle_task_create,
            "task_update": self._handle_task_update,
            "task_delete": self._handle_task_delete,
        }

    async def execute_tool(self, tool_name: str, arguments: Dict[str, Any]) -> str:
        """
        Execute a tool and return YAML-formatted result.

        Args:
            tool_name: Name of the tool to execute.
            arguments: Tool arguments dictionary.

        Returns:
            YAML-formatted result string.
        """
        handler = self._tool_handlers.get(tool_name)
        if not handler:
            return self._format_error(f"Unknown tool: {tool_name}")

        try:
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(self._executor, lambda: handler(arguments or {}))
        except ToolArgumentError as e:
            return self._format_error(str(e), error_type="validation_error")
        except ValidationError as e:
            return self._format_error(_describe_validation_error(e), error_type="validation_error")

    def _format_result(self, data: Any, success: bool = True) -> str:
        """Format result as YAML."""
        result = {
            "success": success,
            "data": data,
        }
        return yaml.dump(result, default_flow_style=False, allow_unicode=True, sort_keys=False)

    def _format_error(
        self,
        message: str,
        error_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Format error as YAML."""
        result = {
            "success": False,
            "error": message,
            "error_type": error_type,
            "details": details or {},
        }
        return yaml.dump(result, default_flow_style=False, allow_unicode=True, sort_keys=False)

    def _format_failure(self, result: DomainResult[Any]) -> str:
        return self._format_error(
            result.error_message or "Request failed",
            error_type=result.error_type.value if result.error_type else None,
            details=result.error_details,
        )

    # --- Task Handlers ---

    def _handle_task_list(self, args: Dict[str, Any]) -> str:
        """Handle task_list tool."""
        service = self._factory.get_task_service()
        result = service.list_tasks(
            title=_optional_str(args, "title"),
            is_completed=_optional_bool(args, "is_completed"),
            page=_require_int(args, "page", 1),
            page_size=_require_int(args, "page_size", DEFAULT_PAGE_SIZE),
            sort_by=_optional_str(args, "sort_by"),
            sort_order=_optional_str(args, "sort_order"),
        )

        if result.is_success:
            return self._format_result([t.to_dict() for t in result.data or []])
        return self._format_failure(result)

    def _handle_task_show(self, args: Dict[str, Any]) -> str:
        """Handle task_show tool."""
        service = self._factory.get_task_service()
        result = service.get_task(_require_int(args, "task_id"))

        if result.is_success:
            return self._format_result(result.get_data_or_raise().to_dict())
        return self._format_failure(result)

    def _handle_task_create(self, args: Dict[str, Any]) -> str:
        """Handle task_create tool."""
        service = self._factory.get_task_service()
        request = CreateTaskRequest.model_validate(args)
        result = service.create_task(request.to_input())

        if result.is_success:
            return self._format_result(result.get_data_or_raise().to_dict())
        return self._format_failure(result)

    def _handle_task_update(self, args: Dict[str, Any]) -> str:
        """Handle task_update tool."""
        service = self._factory.get_task_service()
        task_id = _require_int(args, "task_id")
        fields = {k: v for k, v in args.items() if k != "task_id"}
        request = UpdateTaskRequest.model_validate({**fields, "id": task_id})
        result = service.update_task(task_id, request.to_input())

        if result.is_success:
            return self._format_result(
                {"task_id": task_id, "message": f"Task '{task_id}' updated successfully"}
            )
        return self._format_failure(result)

    def _handle_task_delete(self, args: Dict[str, Any]) -> str:
        """Handle task_delete tool."""
        service = self._factory.get_task_service()
        task_id = _require_int(args, "task_id")
        result = service.delete_task(task_id)

        if result.is_success:
            return self._format_result(
                {"task_id": task_id, "message": f"Task '{task_id}' deleted successfully"}
            )
        return self._format_failure(result)

    def close(self) -> None:
        """Shutdown the executor."""
        self._executor.shutdown(wait=True)
