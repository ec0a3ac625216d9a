"""Task Manager API - a small task-tracking service.

Create, read, update, delete and list tasks over HTTP or MCP.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("task-manager-api")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = ["__version__"]
