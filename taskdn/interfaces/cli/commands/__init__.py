"""CLI command groups for taskdn.

Command groups:
- order: Effective orders and gesture replay (show, replay, containers, sidebar)
- config: Global preferences (data file, log level, kanban columns)

Each command group is a Typer app that gets registered
with the main app using app.add_typer().
"""

from taskdn.interfaces.cli.commands import config, order

__all__ = ["config", "order"]
