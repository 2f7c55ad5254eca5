"""CLI interface for taskdn using Typer.

Usage:
    taskdn show tasks.json              # Print every container's order
    taskdn show tasks.json -c inbox     # Print one container
    taskdn replay tasks.json drag.json  # Replay recorded drag gestures
    taskdn containers tasks.json        # List container keys
    taskdn config set-data tasks.json   # Default data file for later commands

The CLI is structured as:
- app: Main Typer application
- commands/: Individual command groups
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

from typing import Optional

import typer

from taskdn import __version__
from taskdn.interfaces.cli.commands import config, order
from taskdn.interfaces.cli.common import setup_logging

# Create the main Typer application
app = typer.Typer(
    name="taskdn",
    help="Manual task ordering across projects, areas, kanban and calendar",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"taskdn version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
) -> None:
    """taskdn - manual ordering of tasks and headings.

    Loads seed data into memory and applies drag gestures the way the
    list, kanban and calendar views dispatch them.
    """
    setup_logging(verbose)


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(order.app, name="order")
app.add_typer(config.app, name="config")


# =============================================================================
# Top-Level Shortcuts for Common Commands
# =============================================================================

app.command("show")(order.show)
app.command("replay")(order.replay)
app.command("containers")(order.containers)
app.command("sidebar")(order.sidebar)


__all__ = ["app"]
