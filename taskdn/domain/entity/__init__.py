"""Entity domain: areas, projects, tasks, headings and the store contract."""

from .models import (
    CLOSED_STATUSES,
    DEFAULT_COLUMN_ORDER,
    TASK_PRIMARY_STATUSES,
    TASK_SECONDARY_STATUSES,
    AppData,
    Area,
    AreaStatus,
    Heading,
    HeadingColor,
    Project,
    ProjectStatus,
    Task,
    TaskStatus,
)
from .store import EntityStore, NotFound, ProjectPlacementStore

__all__ = [
    # Models
    "Area",
    "AreaStatus",
    "Project",
    "ProjectStatus",
    "Task",
    "TaskStatus",
    "Heading",
    "HeadingColor",
    "AppData",
    # Status groupings
    "TASK_PRIMARY_STATUSES",
    "TASK_SECONDARY_STATUSES",
    "DEFAULT_COLUMN_ORDER",
    "CLOSED_STATUSES",
    # Store contract
    "EntityStore",
    "ProjectPlacementStore",
    "NotFound",
]
