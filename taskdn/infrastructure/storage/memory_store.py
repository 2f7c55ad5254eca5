"""In-memory entity store.

Holds an ``AppData`` snapshot and implements both store protocols the
application layer consumes (``EntityStore`` and
``ProjectPlacementStore``). Membership is always derived from the
current entity fields, so it changes as soon as a setter returns.

Setters return ``Err(NotFound)`` when the task, or the project/area it
should point to, does not exist. Every accepted mutation stamps
``updated_at``; status changes also maintain ``completed_at``.
"""

import logging
from datetime import UTC, datetime

from taskdn.domain.entity import (
    CLOSED_STATUSES,
    AppData,
    Area,
    NotFound,
    Project,
    Task,
    TaskStatus,
)
from taskdn.domain.ordering import (
    AreaLooseContainer,
    CalendarDay,
    Container,
    InboxContainer,
    OrphanContainer,
    ProjectContainer,
    SwimlaneColumn,
    TodaySection,
    TodaySectionId,
)
from taskdn.domain.shared.result import Err, Ok, Result

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(UTC).isoformat()


def _day(value: str | None) -> str:
    return (value or "")[:10]


class InMemoryEntityStore:
    """Entity store backed by dicts, in seed order.

    Example:
        store = InMemoryEntityStore(AppData(tasks=[Task(id="t1", title="A", project_id="p1")]))
        store.list_membership(ProjectContainer("p1"))  # ["t1"]
    """

    def __init__(self, data: AppData | None = None) -> None:
        data = data or AppData()
        self._areas: dict[str, Area] = {area.id: area for area in data.areas}
        self._projects: dict[str, Project] = {project.id: project for project in data.projects}
        self._tasks: dict[str, Task] = {task.id: task for task in data.tasks}

    # =========================================================================
    # Reads
    # =========================================================================

    def get_task(self, task_id: str) -> Task | None:
        return self._tasks.get(task_id)

    def get_project(self, project_id: str) -> Project | None:
        return self._projects.get(project_id)

    def get_area(self, area_id: str) -> Area | None:
        return self._areas.get(area_id)

    def list_tasks(self) -> list[Task]:
        return list(self._tasks.values())

    def list_areas(self) -> list[str]:
        return list(self._areas)

    def list_projects(self, area_id: str | None) -> list[str]:
        return [project.id for project in self._projects.values() if project.area_id == area_id]

    def to_app_data(self) -> AppData:
        return AppData(
            areas=list(self._areas.values()),
            projects=list(self._projects.values()),
            tasks=list(self._tasks.values()),
        )

    def list_membership(self, container: Container) -> list[str]:
        """Ids of the tasks in ``container``, in store order."""
        return [task.id for task in self._tasks.values() if self._is_member(task, container)]

    def _is_member(self, task: Task, container: Container) -> bool:
        if isinstance(container, ProjectContainer):
            return task.project_id == container.project_id
        if isinstance(container, AreaLooseContainer):
            return not task.project_id and task.area_id == container.area_id
        if isinstance(container, OrphanContainer):
            return not task.project_id and not task.area_id
        if isinstance(container, SwimlaneColumn):
            return task.status == container.status and self._is_member(task, container.swimlane)
        if isinstance(container, CalendarDay):
            return _day(task.scheduled) == container.date
        if isinstance(container, InboxContainer):
            return task.status == TaskStatus.INBOX
        if isinstance(container, TodaySection):
            return self._in_today_section(task, container)
        raise TypeError(f"Not a container: {container!r}")

    @staticmethod
    def _in_today_section(task: Task, section: TodaySection) -> bool:
        if section.section == TodaySectionId.SCHEDULED_TODAY:
            return _day(task.scheduled) == section.date
        if section.section == TodaySectionId.OVERDUE_DUE_TODAY:
            return bool(task.due) and _day(task.due) <= section.date and not task.is_closed
        return _day(task.defer_until) == section.date

    # =========================================================================
    # Task mutations
    # =========================================================================

    def add_task(self, task: Task) -> None:
        self._tasks[task.id] = task

    def delete_task(self, task_id: str) -> Result[None, NotFound]:
        if self._tasks.pop(task_id, None) is None:
            return Err(NotFound(task_id))
        return Ok(None)

    def set_task_project(self, task_id: str, project_id: str | None) -> Result[None, NotFound]:
        if project_id is not None and project_id not in self._projects:
            return Err(NotFound(project_id, "project"))
        return self._update_task(task_id, project_id=project_id)

    def set_task_area(self, task_id: str, area_id: str | None) -> Result[None, NotFound]:
        if area_id is not None and area_id not in self._areas:
            return Err(NotFound(area_id, "area"))
        return self._update_task(task_id, area_id=area_id)

    def set_task_status(self, task_id: str, status: TaskStatus) -> Result[None, NotFound]:
        task = self._tasks.get(task_id)
        if task is None:
            return Err(NotFound(task_id))

        completed_at = task.completed_at
        if status == TaskStatus.DONE and task.status != TaskStatus.DONE:
            completed_at = _now()
        elif status != TaskStatus.DONE:
            completed_at = None
        return self._update_task(task_id, status=status, completed_at=completed_at)

    def set_task_scheduled(self, task_id: str, date: str | None) -> Result[None, NotFound]:
        return self._update_task(task_id, scheduled=date)

    def _update_task(self, task_id: str, **changes: object) -> Result[None, NotFound]:
        task = self._tasks.get(task_id)
        if task is None:
            return Err(NotFound(task_id))
        self._tasks[task_id] = task.model_copy(update={**changes, "updated_at": _now()})
        logger.debug(f"Updated task {task_id}: {sorted(changes)}")
        return Ok(None)

    # =========================================================================
    # Project mutations
    # =========================================================================

    def set_project_area(self, project_id: str, area_id: str | None) -> Result[None, NotFound]:
        project = self._projects.get(project_id)
        if project is None:
            return Err(NotFound(project_id, "project"))
        if area_id is not None and area_id not in self._areas:
            return Err(NotFound(area_id, "area"))
        self._projects[project_id] = project.model_copy(update={"area_id": area_id})
        return Ok(None)

    def open_task_count(self, container: Container) -> int:
        """Number of tasks in ``container`` that are not done or dropped."""
        return sum(
            1
            for task_id in self.list_membership(container)
            if self._tasks[task_id].status not in CLOSED_STATUSES
        )
