"""Container kinds and the classifier.

A container is an ordering scope. Each kind is its own value object, so
deciding what a move means is a type dispatch rather than string parsing:

    ProjectContainer("p1")                 tasks of project p1
    AreaLooseContainer("health")           tasks in area health with no project
    OrphanContainer()                      tasks with neither project nor area
    SwimlaneColumn(ProjectContainer("p1"), TaskStatus.READY)
                                           kanban column, a filtered view
                                           of its swimlane's order
    CalendarDay("2025-01-31")              tasks scheduled on that day
    InboxContainer()                       tasks in status inbox
    TodaySection(TodaySectionId.SCHEDULED_TODAY, "2025-01-31")

String ids are still needed at the edges (drag ids, CLI, seed data from
the sidebar), so this module also carries the codec between the two and
the legacy ``__loose-tasks-<area>__`` / ``__orphan__`` pseudo ids.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Union
from urllib.parse import quote, unquote

from taskdn.domain.entity.models import Task, TaskStatus

LOOSE_TASKS_PREFIX = "__loose-tasks-"
LOOSE_TASKS_SUFFIX = "__"
ORPHAN_CONTAINER_ID = "__orphan__"

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class ContainerRole(str, Enum):
    PROJECT = "project"
    AREA_LOOSE = "area-loose"
    ORPHAN = "orphan"
    SWIMLANE_COLUMN = "swimlane"
    CALENDAR_DAY = "day"
    INBOX = "inbox"
    TODAY_SECTION = "today"


class TodaySectionId(str, Enum):
    SCHEDULED_TODAY = "scheduled-today"
    OVERDUE_DUE_TODAY = "overdue-due-today"
    BECAME_AVAILABLE_TODAY = "became-available-today"


def _check_date(date: str) -> None:
    if not _ISO_DATE_RE.match(date):
        raise ValueError(f"Expected an ISO date (YYYY-MM-DD), got {date!r}")


@dataclass(frozen=True, slots=True)
class ProjectContainer:
    project_id: str

    role = ContainerRole.PROJECT


@dataclass(frozen=True, slots=True)
class AreaLooseContainer:
    area_id: str

    role = ContainerRole.AREA_LOOSE


@dataclass(frozen=True, slots=True)
class OrphanContainer:
    role = ContainerRole.ORPHAN


PlacementContainer = Union[ProjectContainer, AreaLooseContainer, OrphanContainer]  # noqa: UP007


@dataclass(frozen=True, slots=True)
class SwimlaneColumn:
    """One status column of one kanban swimlane.

    The column has no order of its own: it is the swimlane's order
    filtered by status.
    """

    swimlane: PlacementContainer
    status: TaskStatus

    role = ContainerRole.SWIMLANE_COLUMN


@dataclass(frozen=True, slots=True)
class CalendarDay:
    date: str

    role = ContainerRole.CALENDAR_DAY

    def __post_init__(self) -> None:
        _check_date(self.date)


@dataclass(frozen=True, slots=True)
class InboxContainer:
    role = ContainerRole.INBOX


@dataclass(frozen=True, slots=True)
class TodaySection:
    section: TodaySectionId
    date: str

    role = ContainerRole.TODAY_SECTION

    def __post_init__(self) -> None:
        _check_date(self.date)


Container = Union[  # noqa: UP007
    ProjectContainer,
    AreaLooseContainer,
    OrphanContainer,
    SwimlaneColumn,
    CalendarDay,
    InboxContainer,
    TodaySection,
]


@dataclass(frozen=True, slots=True)
class Placement:
    """Project/area references a task must carry to be in a container."""

    project_id: str | None
    area_id: str | None


# =============================================================================
# Classifier
# =============================================================================


def order_key(container: Container) -> Container:
    """Return the container whose order state backs ``container``.

    Kanban columns are projections of their swimlane; every other kind
    owns its order.
    """
    if isinstance(container, SwimlaneColumn):
        return container.swimlane
    return container


def placement_for(container: Container) -> Placement | None:
    """Return the references implied by moving a task into ``container``.

    - project: set project, clear the area override
    - area-loose: clear project, set area
    - orphan: clear both

    Returns None for kinds that are not defined by task references.
    """
    target = order_key(container)
    if isinstance(target, ProjectContainer):
        return Placement(project_id=target.project_id, area_id=None)
    if isinstance(target, AreaLooseContainer):
        return Placement(project_id=None, area_id=target.area_id)
    if isinstance(target, OrphanContainer):
        return Placement(project_id=None, area_id=None)
    return None


def placement_container_of(task: Task) -> PlacementContainer:
    """Return the list container a task currently belongs to."""
    if task.project_id:
        return ProjectContainer(task.project_id)
    if task.area_id:
        return AreaLooseContainer(task.area_id)
    return OrphanContainer()


def dimension(container: Container) -> str:
    """Name the axis a container partitions tasks along.

    A cross-container move is only meaningful between two containers of
    the same dimension: a task leaves one project for another, or one
    day for another.
    """
    if placement_for(container) is not None:
        return "placement"
    if isinstance(container, CalendarDay):
        return "calendar"
    return "view"


def accepts_moves(container: Container) -> bool:
    """Inbox and Today sections are derived views; they only reorder."""
    return dimension(container) != "view"


# =============================================================================
# Legacy pseudo ids
# =============================================================================


def loose_tasks_container_id(area_id: str) -> str:
    """Create the pseudo project id for the loose tasks of an area."""
    return f"{LOOSE_TASKS_PREFIX}{area_id}{LOOSE_TASKS_SUFFIX}"


def is_loose_tasks_container(container_id: str) -> bool:
    return (
        container_id.startswith(LOOSE_TASKS_PREFIX)
        and container_id.endswith(LOOSE_TASKS_SUFFIX)
        and len(container_id) >= len(LOOSE_TASKS_PREFIX) + len(LOOSE_TASKS_SUFFIX)
    )


def area_id_from_loose_tasks_container(container_id: str) -> str | None:
    """Extract the area id from a loose tasks pseudo id, or None."""
    if not is_loose_tasks_container(container_id):
        return None
    return container_id[len(LOOSE_TASKS_PREFIX):-len(LOOSE_TASKS_SUFFIX)]


def legacy_container_id(container: PlacementContainer) -> str:
    """Return the plain string id the sidebar and list views use."""
    if isinstance(container, ProjectContainer):
        return container.project_id
    if isinstance(container, AreaLooseContainer):
        return loose_tasks_container_id(container.area_id)
    return ORPHAN_CONTAINER_ID


# =============================================================================
# Codec
# =============================================================================


def _q(value: str) -> str:
    return quote(value, safe="")


def encode_container(container: Container) -> str:
    """Encode a container as a single string key.

    Ids are percent-encoded, so any id round-trips through
    ``decode_container``.
    """
    if isinstance(container, ProjectContainer):
        return f"project:{_q(container.project_id)}"
    if isinstance(container, AreaLooseContainer):
        return f"area-loose:{_q(container.area_id)}"
    if isinstance(container, OrphanContainer):
        return "orphan"
    if isinstance(container, InboxContainer):
        return "inbox"
    if isinstance(container, CalendarDay):
        return f"day:{container.date}"
    if isinstance(container, TodaySection):
        return f"today:{container.section.value}:{container.date}"
    if isinstance(container, SwimlaneColumn):
        return f"swimlane:{_q(encode_container(container.swimlane))}:{container.status.value}"
    raise TypeError(f"Not a container: {container!r}")


def decode_container(key: str) -> Container:
    """Decode a key produced by ``encode_container``.

    Raises:
        ValueError: If the key is malformed.
    """
    kind, sep, rest = key.partition(":")
    if not sep:
        if kind == "orphan":
            return OrphanContainer()
        if kind == "inbox":
            return InboxContainer()
        raise ValueError(f"Unknown container key: {key!r}")

    if kind == "project" and rest:
        return ProjectContainer(unquote(rest))
    if kind == "area-loose" and rest:
        return AreaLooseContainer(unquote(rest))
    if kind == "day":
        return CalendarDay(rest)
    if kind == "today":
        section, _, date = rest.partition(":")
        return TodaySection(TodaySectionId(section), date)
    if kind == "swimlane":
        swimlane_key, _, status = rest.rpartition(":")
        swimlane = decode_container(unquote(swimlane_key))
        if placement_for(swimlane) is None or isinstance(swimlane, SwimlaneColumn):
            raise ValueError(f"Not a swimlane: {swimlane_key!r}")
        return SwimlaneColumn(swimlane, TaskStatus(status))
    raise ValueError(f"Unknown container key: {key!r}")


def parse_container_id(value: str) -> Container:
    """Classify any container string.

    Accepts codec keys first, then the legacy pseudo ids, and finally
    treats anything else as a bare project id.
    """
    if value == ORPHAN_CONTAINER_ID:
        return OrphanContainer()
    area_id = area_id_from_loose_tasks_container(value)
    if area_id is not None:
        return AreaLooseContainer(area_id)
    try:
        return decode_container(value)
    except ValueError:
        return ProjectContainer(value)


def role_of(container: Container) -> ContainerRole:
    return container.role
