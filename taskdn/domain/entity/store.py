"""Entity store contract consumed by the ordering layer.

The ordering layer never owns entities. It reads container membership
and requests reference/status changes through this protocol; the store
decides whether a change is accepted.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from taskdn.domain.entity.models import Task, TaskStatus
from taskdn.domain.shared.result import Result

if TYPE_CHECKING:
    from taskdn.domain.ordering.containers import Container


@dataclass(frozen=True)
class NotFound:
    """The entity a mutation targets no longer exists."""

    entity_id: str
    entity_type: str = "task"

    @property
    def message(self) -> str:
        return f"{self.entity_type.capitalize()} not found: {self.entity_id}"


class EntityStore(Protocol):
    """Store operations required by the order coordinator."""

    def list_membership(self, container: "Container") -> list[str]:
        """Return the ids of tasks currently in ``container``, in store order."""
        ...

    def get_task(self, task_id: str) -> Task | None: ...

    def set_task_project(self, task_id: str, project_id: str | None) -> Result[None, NotFound]: ...

    def set_task_area(self, task_id: str, area_id: str | None) -> Result[None, NotFound]: ...

    def set_task_status(self, task_id: str, status: TaskStatus) -> Result[None, NotFound]: ...

    def set_task_scheduled(self, task_id: str, date: str | None) -> Result[None, NotFound]: ...


class ProjectPlacementStore(Protocol):
    """Store operations required by the sidebar coordinator."""

    def list_areas(self) -> list[str]:
        """Return area ids in store order."""
        ...

    def list_projects(self, area_id: str | None) -> list[str]:
        """Return ids of projects filed under ``area_id`` (None = no area)."""
        ...

    def set_project_area(self, project_id: str, area_id: str | None) -> Result[None, NotFound]: ...
