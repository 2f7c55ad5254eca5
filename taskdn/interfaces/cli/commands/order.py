"""Task order CLI commands.

Load a seed data file into an in-memory store, then print effective
orders or replay recorded drag gestures against them. Order state lives
only for the duration of one command.
"""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from taskdn.application import (
    ColumnGesture,
    Gesture,
    MoveGesture,
    OrderCoordinator,
    SidebarCoordinator,
    apply_gesture,
)
from taskdn.domain.ordering import (
    AreaLooseContainer,
    CalendarDay,
    Container,
    HeadingRef,
    InboxContainer,
    OrphanContainer,
    ProjectContainer,
    SwimlaneColumn,
    encode_container,
    order_key,
    parse_container_id,
    placement_for,
)
from taskdn.domain.shared import Err, is_err
from taskdn.global_config import get_global_config
from taskdn.infrastructure.storage import AppDataRepository, GestureScriptRepository, InMemoryEntityStore
from taskdn.interfaces.cli.common import (
    load_store,
    parse_container,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(help="Task order commands")

console = Console()

data_argument = typer.Argument(
    None,
    help="Seed data file (default: data_file from config)",
    show_default=False,
)


# =============================================================================
# Helpers
# =============================================================================


def _list_containers(store: InMemoryEntityStore) -> list[Container]:
    """Every list container in sidebar order, then the inbox and calendar days."""
    sidebar = SidebarCoordinator(store)
    containers: list[Container] = []
    for area_id in sidebar.get_area_order():
        containers.extend(ProjectContainer(p) for p in sidebar.get_project_order(area_id))
        containers.append(AreaLooseContainer(area_id))
    containers.extend(ProjectContainer(p) for p in sidebar.get_project_order(None))
    containers.append(OrphanContainer())
    containers.append(InboxContainer())

    days = sorted({task.scheduled[:10] for task in store.list_tasks() if task.scheduled})
    for day in days:
        try:
            containers.append(CalendarDay(day))
        except ValueError:
            print_warning(f"Ignoring malformed scheduled date {day!r}")
    return containers


def _order_table(
    coordinator: OrderCoordinator,
    store: InMemoryEntityStore,
    container: Container,
) -> Table:
    table = Table(title=encode_container(container), title_justify="left")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Id")
    table.add_column("Title")
    table.add_column("Status")

    index = 0
    for item in coordinator.get_ordered_items(container):
        if isinstance(item, HeadingRef):
            heading = coordinator.get_heading(item.id)
            title = heading.title if heading else ""
            table.add_row("", f"[bold]{item.id}[/bold]", f"[bold]{title}[/bold]", "heading")
            continue
        index += 1
        task = store.get_task(item.id)
        table.add_row(
            str(index),
            item.id,
            task.title if task else "",
            task.status.value if task else "",
        )
    return table


def _board_table(coordinator: OrderCoordinator, container: Container) -> Table:
    """Kanban board of a swimlane: one column per visible status."""
    lane = order_key(container)
    columns = get_global_config().visible_columns()
    cells = [coordinator.get_ordered_ids(SwimlaneColumn(lane, status)) for status in columns]

    table = Table(title=f"{encode_container(lane)} (board)", title_justify="left")
    for status in columns:
        table.add_column(status.value)
    for row in range(max((len(cell) for cell in cells), default=0)):
        table.add_row(*(cell[row] if row < len(cell) else "" for cell in cells))
    return table


def _print_orders(
    coordinator: OrderCoordinator,
    store: InMemoryEntityStore,
    containers: list[Container],
    as_json: bool,
    board: bool = False,
) -> None:
    if as_json:
        orders = {encode_container(c): coordinator.get_encoded_order(c) for c in containers}
        typer.echo(json.dumps(orders, indent=2))
        return

    for container in containers:
        if board and placement_for(container) is not None:
            console.print(_board_table(coordinator, container))
        else:
            console.print(_order_table(coordinator, store, container))


def _touched(gesture: Gesture) -> list[Container]:
    """Containers whose order a gesture can change."""
    if isinstance(gesture, MoveGesture):
        keys = [gesture.source, gesture.target]
    elif isinstance(gesture, ColumnGesture):
        keys = [gesture.swimlane]
    else:
        keys = [gesture.container]
    return [order_key(parse_container_id(key)) for key in keys]


# =============================================================================
# Commands
# =============================================================================


@app.command("show")
def show(
    data: Optional[Path] = data_argument,
    container: Optional[list[str]] = typer.Option(
        None,
        "--container",
        "-c",
        help="Container key (repeatable, default: every list container)",
    ),
    board: bool = typer.Option(False, "--board", "-b", help="Show swimlanes as kanban boards"),
    as_json: bool = typer.Option(False, "--json", help="Print orders as JSON"),
) -> None:
    """Print the effective order of containers.

    Example:
        taskdn show tasks.json -c project:p1 -c day:2025-01-31
    """
    store = load_store(data)
    coordinator = OrderCoordinator(store)
    containers = [parse_container(key) for key in container] if container else _list_containers(store)
    _print_orders(coordinator, store, containers, as_json, board)


@app.command("replay")
def replay(
    data: Path = typer.Argument(..., help="Seed data file"),
    script: Path = typer.Argument(..., help="JSON list of gestures"),
    strict: bool = typer.Option(False, "--strict", help="Exit non-zero if any gesture is rejected"),
    events: bool = typer.Option(False, "--events", "-e", help="Print committed events as JSON lines"),
    as_json: bool = typer.Option(False, "--json", help="Print resulting orders as JSON"),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the resulting areas, projects and tasks to this file",
    ),
) -> None:
    """Replay recorded drag gestures and print the resulting orders.

    Moves change task references, days and statuses. Pass --output to keep
    those changes; manual orders are not written.

    Example:
        taskdn replay tasks.json session.json --strict
    """
    store = load_store(data)
    coordinator = OrderCoordinator(store)

    loaded = GestureScriptRepository().load(script)
    if isinstance(loaded, Err):
        print_error(loaded.error)
        raise typer.Exit(1)
    gestures = loaded.value

    if events:
        coordinator.subscribe(lambda event: typer.echo(event.model_dump_json()))

    touched: list[Container] = []
    rejected = 0
    for index, gesture in enumerate(gestures, start=1):
        result = apply_gesture(coordinator, gesture)
        if isinstance(result, Err):
            rejected += 1
            print_warning(f"Gesture {index} ({gesture.op}) rejected: {result.error.message}")
        for container in _touched(gesture):
            if container not in touched:
                touched.append(container)

    _print_orders(coordinator, store, touched, as_json)

    if output is not None:
        saved = AppDataRepository().save(output, store.to_app_data())
        if is_err(saved):
            print_error(saved.error)
            raise typer.Exit(1)

    if not as_json:
        if rejected:
            print_info(f"Replayed {len(gestures)} gesture(s), {rejected} rejected")
        else:
            print_success(f"Replayed {len(gestures)} gesture(s)")
    if rejected and strict:
        raise typer.Exit(1)


@app.command("containers")
def containers(data: Optional[Path] = data_argument) -> None:
    """List the container keys defined by a data file."""
    store = load_store(data)

    table = Table(title="Containers", title_justify="left")
    table.add_column("Key")
    table.add_column("Kind")
    table.add_column("Tasks", justify="right")
    table.add_column("Open", justify="right")
    for container in _list_containers(store):
        table.add_row(
            encode_container(container),
            container.role.value,
            str(len(store.list_membership(container))),
            str(store.open_task_count(container)),
        )
    console.print(table)


@app.command("sidebar")
def sidebar(data: Optional[Path] = data_argument) -> None:
    """Print areas and their projects in sidebar order."""
    store = load_store(data)
    coordinator = SidebarCoordinator(store)

    for area_id in coordinator.get_area_order():
        area = store.get_area(area_id)
        typer.echo(area.title if area else area_id)
        for project_id in coordinator.get_project_order(area_id):
            project = store.get_project(project_id)
            typer.echo(f"  {project.title if project else project_id}")

    orphans = coordinator.get_project_order(None)
    if orphans:
        typer.echo("(no area)")
        for project_id in orphans:
            project = store.get_project(project_id)
            typer.echo(f"  {project.title if project else project_id}")
