"""CLI interface for the Task Manager API."""

import sys


def main() -> None:
    """Entry point for the task-manager CLI."""
    try:
        from task_manager_api.cli.app import create_app

        app = create_app()
        app()
    except ImportError as e:
        if "typer" in str(e).lower() or "rich" in str(e).lower():
            print("CLI requires typer and rich. Install with: pip install task-manager-api")
            sys.exit(1)
        raise


if __name__ == "__main__":
    main()
