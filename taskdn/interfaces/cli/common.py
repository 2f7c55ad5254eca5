"""Shared utilities for taskdn CLI commands.

This module provides common utilities used across CLI commands:
- Logging setup
- Data file resolution and store loading
- Container key parsing
- Formatted output helpers (error, success, info)
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from taskdn.domain.ordering import Container, ContainerRole, decode_container, parse_container_id
from taskdn.domain.shared import Err, map_result
from taskdn.global_config import get_global_config
from taskdn.infrastructure.storage import AppDataRepository, InMemoryEntityStore

_CODEC_KINDS = frozenset(role.value for role in ContainerRole)


def setup_logging(verbose: bool = False) -> None:
    """Route log records to stderr through rich.

    The level comes from the global config unless ``verbose`` forces DEBUG.
    """
    level = "DEBUG" if verbose else get_global_config().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def resolve_data_file(data: Optional[Path]) -> Path:
    """Return the data file to load.

    Resolution order:
    1. Explicit DATA argument
    2. ``data_file`` from the global config

    Raises:
        typer.Exit: If neither is set.
    """
    if data is not None:
        return data

    configured = get_global_config().data_file
    if configured:
        return Path(configured).expanduser()

    print_error("No data file specified.")
    typer.echo("Pass DATA or run: taskdn config set-data PATH")
    raise typer.Exit(1)


def load_store(data: Optional[Path]) -> InMemoryEntityStore:
    """Load seed data into an in-memory store.

    Raises:
        typer.Exit: If the file cannot be read or validated.
    """
    result = map_result(AppDataRepository().load(resolve_data_file(data)), InMemoryEntityStore)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)
    return result.value


def parse_container(key: str) -> Container:
    """Parse a container key given on the command line.

    Accepts codec keys (``project:p1``, ``day:2025-01-31`` ...) and the
    legacy ids (``__loose-tasks-<area>__``, ``__orphan__``, bare project ids).

    Raises:
        typer.BadParameter: If a codec key is malformed.
    """
    kind, sep, _ = key.partition(":")
    if sep and kind in _CODEC_KINDS:
        try:
            return decode_container(key)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid container key {key!r}: {e}") from e
    return parse_container_id(key)


def print_error(msg: str) -> None:
    """Print a formatted error message.

    Args:
        msg: Error message to display
    """
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.BLUE))


def print_warning(msg: str) -> None:
    """Print a formatted warning message.

    Args:
        msg: Warning message to display
    """
    typer.echo(typer.style(f"Warning: {msg}", fg=typer.colors.YELLOW), err=True)


__all__ = [
    "setup_logging",
    "resolve_data_file",
    "load_store",
    "parse_container",
    "print_error",
    "print_success",
    "print_info",
    "print_warning",
]
