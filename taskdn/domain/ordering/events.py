"""Ordering domain events.

Container fields hold encoded container keys and order fields hold
encoded item ids, so every event serializes to plain JSON.
"""

from taskdn.domain.shared.events import DomainEvent


class OrderChanged(DomainEvent):
    """The effective order of a container changed.

    ``reason`` is one of: reordered, moved, merged, reconciled,
    heading, rollback.
    """

    container: str
    order: list[str]
    reason: str


class TaskMoved(DomainEvent):
    """A task left one container for another."""

    task_id: str
    source: str
    target: str
    before_id: str | None = None
    anchor_stale: bool = False


class TaskStatusChanged(DomainEvent):
    """A kanban drop changed a task's status."""

    task_id: str
    from_status: str | None
    to_status: str


class HeadingAdded(DomainEvent):
    container: str
    heading_id: str
    title: str


class HeadingRemoved(DomainEvent):
    container: str
    heading_id: str


class ProjectMoved(DomainEvent):
    """A project was filed under a different area (None = no area)."""

    project_id: str
    from_area: str | None
    to_area: str | None
