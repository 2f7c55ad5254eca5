"""Entity models for areas, projects, tasks and headings.

Pure data structures with no I/O. Seed files use camelCase keys
(``projectId``, ``deferUntil``), so every model accepts both the alias
and the field name.

Dates are kept as ISO strings; only their ``YYYY-MM-DD`` prefix is
compared by the ordering layer.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TaskStatus(str, Enum):
    """Status of a task. Also the kanban column a task is shown in."""

    INBOX = "inbox"
    ICEBOX = "icebox"
    READY = "ready"
    IN_PROGRESS = "in-progress"
    BLOCKED = "blocked"
    DROPPED = "dropped"
    DONE = "done"


class ProjectStatus(str, Enum):
    """Status of a project."""

    PLANNING = "planning"
    READY = "ready"
    BLOCKED = "blocked"
    IN_PROGRESS = "in-progress"
    PAUSED = "paused"
    DONE = "done"


class AreaStatus(str, Enum):
    ACTIVE = "active"
    ARCHIVED = "archived"


class HeadingColor(str, Enum):
    DEFAULT = "default"
    BLUE = "blue"
    TEAL = "teal"
    PURPLE = "purple"
    AMBER = "amber"
    PINK = "pink"
    GREEN = "green"
    RED = "red"


# Primary statuses first, secondary ones after the separator
TASK_PRIMARY_STATUSES: tuple[TaskStatus, ...] = (
    TaskStatus.INBOX,
    TaskStatus.READY,
    TaskStatus.IN_PROGRESS,
    TaskStatus.BLOCKED,
    TaskStatus.DONE,
)
TASK_SECONDARY_STATUSES: tuple[TaskStatus, ...] = (TaskStatus.ICEBOX, TaskStatus.DROPPED)

# Kanban boards show columns in workflow order
DEFAULT_COLUMN_ORDER: tuple[TaskStatus, ...] = (
    TaskStatus.INBOX,
    TaskStatus.ICEBOX,
    TaskStatus.READY,
    TaskStatus.IN_PROGRESS,
    TaskStatus.BLOCKED,
    TaskStatus.DONE,
    TaskStatus.DROPPED,
)

CLOSED_STATUSES: frozenset[TaskStatus] = frozenset({TaskStatus.DONE, TaskStatus.DROPPED})


class _Entity(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )


class Area(_Entity):
    """A long-lived area of responsibility (e.g. Health, Finance)."""

    id: str
    title: str
    status: AreaStatus = AreaStatus.ACTIVE
    type: str | None = None
    description: str | None = None
    notes: str | None = None


class Project(_Entity):
    """A finite project, optionally filed under an area."""

    id: str
    title: str
    area_id: str | None = None
    status: ProjectStatus | None = None
    description: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    blocked_by: list[str] = Field(default_factory=list)
    notes: str | None = None


class Task(_Entity):
    """A single task.

    ``area_id`` is a direct area reference and overrides the area of the
    task's project when set. A task with a project is listed under that
    project; a task with only an area is one of the area's loose tasks;
    a task with neither is an orphan.
    """

    id: str
    title: str
    status: TaskStatus = TaskStatus.INBOX
    created_at: str = ""
    updated_at: str = ""
    completed_at: str | None = None
    area_id: str | None = None
    project_id: str | None = None
    due: str | None = None
    scheduled: str | None = None
    defer_until: str | None = None
    notes: str | None = None

    @property
    def is_closed(self) -> bool:
        return self.status in CLOSED_STATUSES


class Heading(_Entity):
    """A display-only divider inside a task list.

    Headings have no store-side semantics; they exist only in order state.
    """

    id: str
    title: str
    color: HeadingColor = HeadingColor.DEFAULT


class AppData(_Entity):
    """Top-level entity snapshot: the shape of a seed data file."""

    areas: list[Area] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    tasks: list[Task] = Field(default_factory=list)
