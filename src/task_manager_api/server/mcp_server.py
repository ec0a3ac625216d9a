"""
Task Manager MCP Server Implementation.

Exposes the task service as Model Context Protocol tools over stdio.
"""

import asyncio
import atexit
import logging
from typing import Any, Dict, List

from mcp.server import Server
from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, ErrorData, TextContent, Tool

from task_manager_api import __version__
from task_manager_api.config import configure_logging, get_settings
from task_manager_api.database.orm_manager import get_orm_manager
from task_manager_api.server.service_executor import ServiceExecutor
from task_manager_api.server.tools import get_all_tools

logger = logging.getLogger(__name__)

INSTRUCTIONS = """Task Manager - single-resource task tracking.

Tasks have an integer id, a title, an optional description, a due date and
a completion flag.

Basic workflow:
1. Create a task: task_create(title="Write report", due_date="2026-05-01T09:00:00Z")
2. Find tasks: task_list(title="report", is_completed=false, sort_by="DueDate")
3. Inspect one: task_show(task_id=1)
4. Replace it: task_update(task_id=1, title="Write report", due_date="...", is_completed=true)
5. Remove it: task_delete(task_id=1)

Tasks are kept in memory and are lost when the server stops.
"""


class TaskManagerMCPServer:
    """
    MCP server implementation for the task service.

    Tool calls go straight to the service layer through ServiceExecutor.
    """

    def __init__(self):
        """Initialize the MCP server."""
        self._server = Server(
            name="task-manager-api",
            version=__version__,
            instructions=INSTRUCTIONS,
        )
        self._debug = get_settings().debug

        self._service_executor = ServiceExecutor()

        logger.info("Initializing database...")
        try:
            self._orm_manager = get_orm_manager()
            health = self._orm_manager.perform_health_check()
            if health.get("healthy"):
                logger.info("Database initialized: %s tables", health.get("table_count", 0))
            else:
                logger.warning("Database health check failed: %s", health.get("error"))
        except Exception as e:
            logger.error("Failed to initialize database: %s", e, exc_info=True)
            raise RuntimeError(f"Database initialization failed: {e}") from e

        self._tools = get_all_tools()
        logger.info("Loaded %d tools", len(self._tools))

        self._register_handlers()
        atexit.register(self.cleanup)

        logger.info("TaskManagerMCPServer initialized")

    def _register_handlers(self) -> None:
        """Register MCP protocol handlers."""

        @self._server.list_tools()
        async def handle_list_tools() -> List[Tool]:
            """Handle list_tools request."""
            if self._debug:
                logger.debug("Handling list_tools request")
            return self._tools

        @self._server.call_tool()
        async def handle_call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
            """Handle call_tool request."""
            if self._debug:
                logger.debug("Handling call_tool: %s", name)

            try:
                result_text = await self._service_executor.execute_tool(name, arguments)

                if self._debug:
                    preview = result_text[:200] + "..." if len(result_text) > 200 else result_text
                    logger.debug("Tool result preview: %s", preview)

                return [TextContent(type="text", text=result_text)]

            except Exception as e:
                logger.error("Error executing tool '%s': %s", name, e, exc_info=True)

                error_data = ErrorData(
                    code=INTERNAL_ERROR,
                    message=f"{type(e).__name__}: {e}",
                    data={"tool_name": name},
                )
                raise McpError(error_data) from e

        logger.debug("MCP protocol handlers registered")

    async def run(self, read_stream: Any, write_stream: Any, initialization_options: Any) -> None:
        """Run the MCP server with the provided streams."""
        logger.info("Starting MCP server main loop")

        try:
            await self._server.run(read_stream, write_stream, initialization_options)
        except Exception as e:
            logger.error("Error in MCP server main loop: %s", e, exc_info=True)
            raise
        finally:
            logger.info("MCP server main loop ended")
            self.cleanup()

    def create_initialization_options(self) -> Any:
        """Create initialization options for the MCP server."""
        return self._server.create_initialization_options()

    def cleanup(self) -> None:
        """Cleanup resources on shutdown."""
        if self._service_executor is not None:
            self._service_executor.close()
            self._service_executor = None
        logger.info("Cleanup complete")


async def run_server() -> None:
    """Run the MCP server with stdio transport."""
    from mcp.server.stdio import stdio_server

    server = TaskManagerMCPServer()

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main() -> None:
    """Entry point for the MCP server."""
    configure_logging()
    try:
        asyncio.run(run_server())
    except KeyboardInterrupt:
        logger.info("Server stopped by user")


if __name__ == "__main__":
    main()
