"""Global configuration CLI commands.

View and change the preferences stored in ~/.taskdn/config.json.
"""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from taskdn.domain.entity import TaskStatus
from taskdn.domain.shared import is_ok
from taskdn.global_config import (
    OrderingConfig,
    get_config_file,
    get_global_config,
    save_global_config,
)
from taskdn.interfaces.cli.common import print_error, print_success

app = typer.Typer(help="Global configuration commands")

console = Console()

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _save(config: OrderingConfig, message: str) -> None:
    saved = save_global_config(config)
    if is_ok(saved):
        print_success(message)
        return
    print_error(saved.error)
    raise typer.Exit(1)


@app.command("show")
def show(as_json: bool = typer.Option(False, "--json", help="Print the config as JSON")) -> None:
    """Print the current configuration."""
    config = get_global_config()
    if as_json:
        typer.echo(json.dumps(config.model_dump(mode="json"), indent=2))
        return

    hidden = set(config.kanban_hidden_statuses)
    table = Table(title=str(get_config_file()), title_justify="left")
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("data_file", config.data_file or "[dim](not set)[/dim]")
    table.add_row("log_level", config.log_level)
    table.add_row(
        "columns",
        " ".join(f"[dim]{s.value}[/dim]" if s in hidden else s.value for s in config.column_order),
    )
    console.print(table)


@app.command("set-data")
def set_data(path: Path = typer.Argument(..., help="Seed data file used when DATA is omitted")) -> None:
    """Set the default data file.

    Example:
        taskdn config set-data ~/tasks.json
    """
    config = get_global_config()
    config.data_file = str(path.expanduser().resolve())
    _save(config, f"Default data file: {config.data_file}")


@app.command("set-log-level")
def set_log_level(level: str = typer.Argument(..., help="One of DEBUG, INFO, WARNING, ERROR, CRITICAL")) -> None:
    """Set the log level used when --verbose is not given."""
    level = level.upper()
    if level not in _LOG_LEVELS:
        print_error(f"Unknown log level: {level}")
        raise typer.Exit(1)
    config = get_global_config()
    config.log_level = level
    _save(config, f"Log level: {level}")


@app.command("set-columns")
def set_columns(
    order: Optional[list[TaskStatus]] = typer.Argument(
        None,
        help="Kanban columns in display order (default: keep current order)",
        show_default=False,
    ),
    hide: Optional[list[TaskStatus]] = typer.Option(
        None,
        "--hide",
        help="Status to hide from boards (repeatable)",
    ),
    show_all: bool = typer.Option(False, "--show-all", help="Hide no columns"),
) -> None:
    """Set the kanban column order and hidden columns.

    Example:
        taskdn config set-columns ready in-progress blocked --hide done
    """
    config = get_global_config()
    if order:
        config.column_order = list(dict.fromkeys(order))
    if show_all:
        config.kanban_hidden_statuses = []
    elif hide:
        config.kanban_hidden_statuses = list(dict.fromkeys(hide))
    visible = " ".join(status.value for status in config.visible_columns())
    _save(config, f"Board columns: {visible}")
