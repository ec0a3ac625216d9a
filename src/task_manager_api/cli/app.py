"""CLI application using Typer."""

try:
    import typer
    from rich.console import Console
    from rich.table import Table
except ImportError as e:
    raise ImportError(
        "CLI requires typer and rich. Install with: pip install task-manager-api"
    ) from e

from typing import Optional

from task_manager_api.config import configure_logging, get_settings

console = Console()
app = typer.Typer(
    name="task-manager",
    help="Task Manager API - run the HTTP or MCP server",
    no_args_is_help=True,
)


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind host (default from settings)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port (default from settings)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings)
    bind_host = host or settings.host
    bind_port = port or settings.port

    console.print(f"[green]Serving Task Manager API on[/green] http://{bind_host}:{bind_port}")
    uvicorn.run(
        "task_manager_api.server.http_app:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@app.command("mcp")
def mcp() -> None:
    """Run the MCP server on stdio."""
    from task_manager_api.server.mcp_server import main as run_mcp

    run_mcp()


@app.command("health")
def health() -> None:
    """Check that the configured database is reachable."""
    from task_manager_api.database.orm_manager import get_orm_manager

    result = get_orm_manager().perform_health_check()

    table = Table(title="Database Health")
    table.add_column("Check", style="cyan", no_wrap=True)
    table.add_column("Result")

    if result.get("healthy"):
        table.add_row("Status", "[green]healthy[/green]")
        table.add_row("Database", result.get("database_url", ""))
        table.add_row("Tables", ", ".join(result.get("tables", [])) or "-")
        console.print(table)
    else:
        table.add_row("Status", "[red]unhealthy[/red]")
        table.add_row("Error", str(result.get("error", "unknown error")))
        console.print(table)
        raise typer.Exit(1)


def create_app() -> typer.Typer:
    """Create and return the Typer app."""
    return app
