import json

import pytest

from taskdn.application import OrderCoordinator, SidebarCoordinator
from taskdn.domain.entity import AppData, Area, Project, Task, TaskStatus
from taskdn.infrastructure.storage import InMemoryEntityStore


@pytest.fixture(autouse=True)
def taskdn_home(tmp_path, monkeypatch):
    """Keep config reads and writes out of the real home directory."""
    home = tmp_path / "taskdn-home"
    monkeypatch.setenv("TASKDN_HOME", str(home))
    return home


@pytest.fixture
def app_data() -> AppData:
    return AppData(
        areas=[
            Area(id="health", title="Health"),
            Area(id="work", title="Work"),
        ],
        projects=[
            Project(id="p1", title="Website", area_id="work"),
            Project(id="p2", title="Launch", area_id="work"),
            Project(id="p3", title="Side project"),
        ],
        tasks=[
            Task(id="t1", title="Draft copy", status=TaskStatus.READY, project_id="p1", scheduled="2025-01-31"),
            Task(id="t2", title="Pick fonts", status=TaskStatus.IN_PROGRESS, project_id="p1"),
            Task(id="t3", title="Build header", status=TaskStatus.READY, project_id="p1"),
            Task(id="t4", title="Announce", status=TaskStatus.READY, project_id="p2"),
            Task(id="t5", title="Book checkup", area_id="health"),
            Task(id="t6", title="Call bank", due="2025-01-30"),
            Task(id="t7", title="Ship v1", status=TaskStatus.DONE, project_id="p3"),
        ],
    )


@pytest.fixture
def store(app_data) -> InMemoryEntityStore:
    return InMemoryEntityStore(app_data)


@pytest.fixture
def coordinator(store) -> OrderCoordinator:
    return OrderCoordinator(store)


@pytest.fixture
def sidebar(store) -> SidebarCoordinator:
    return SidebarCoordinator(store)


@pytest.fixture
def data_file(tmp_path, app_data):
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps(app_data.model_dump(mode="json", by_alias=True, exclude_none=True)))
    return path
