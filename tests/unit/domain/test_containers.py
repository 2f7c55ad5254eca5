import pytest

from taskdn.domain.entity import Task, TaskStatus
from taskdn.domain.ordering import (
    AreaLooseContainer,
    CalendarDay,
    ContainerRole,
    InboxContainer,
    OrphanContainer,
    Placement,
    ProjectContainer,
    SwimlaneColumn,
    TodaySection,
    TodaySectionId,
    accepts_moves,
    area_id_from_loose_tasks_container,
    decode_container,
    dimension,
    encode_container,
    is_loose_tasks_container,
    legacy_container_id,
    loose_tasks_container_id,
    order_key,
    parse_container_id,
    placement_container_of,
    placement_for,
    role_of,
)


@pytest.mark.parametrize("area_id", ["health", "a", "with-dashes", "__odd__", "x y"])
def test_loose_tasks_id_round_trip(area_id):
    container_id = loose_tasks_container_id(area_id)
    assert is_loose_tasks_container(container_id)
    assert area_id_from_loose_tasks_container(container_id) == area_id


def test_plain_project_id_is_not_loose_tasks():
    assert not is_loose_tasks_container("p1")
    assert area_id_from_loose_tasks_container("p1") is None


def test_legacy_container_id():
    assert legacy_container_id(ProjectContainer("p1")) == "p1"
    assert legacy_container_id(AreaLooseContainer("health")) == "__loose-tasks-health__"
    assert legacy_container_id(OrphanContainer()) == "__orphan__"


def test_placement_for():
    assert placement_for(ProjectContainer("p1")) == Placement(project_id="p1", area_id=None)
    assert placement_for(AreaLooseContainer("health")) == Placement(project_id=None, area_id="health")
    assert placement_for(OrphanContainer()) == Placement(project_id=None, area_id=None)
    assert placement_for(SwimlaneColumn(ProjectContainer("p1"), TaskStatus.READY)) == Placement("p1", None)
    assert placement_for(CalendarDay("2025-01-31")) is None
    assert placement_for(InboxContainer()) is None


def test_placement_container_of():
    assert placement_container_of(Task(id="t", title="T", project_id="p1", area_id="a")) == ProjectContainer("p1")
    assert placement_container_of(Task(id="t", title="T", area_id="a")) == AreaLooseContainer("a")
    assert placement_container_of(Task(id="t", title="T")) == OrphanContainer()


def test_order_key_of_column_is_swimlane():
    lane = AreaLooseContainer("health")
    assert order_key(SwimlaneColumn(lane, TaskStatus.DONE)) == lane
    assert order_key(lane) == lane


def test_dimension_and_accepts_moves():
    assert dimension(ProjectContainer("p1")) == "placement"
    assert dimension(CalendarDay("2025-01-31")) == "calendar"
    assert dimension(InboxContainer()) == "view"
    assert accepts_moves(OrphanContainer())
    assert not accepts_moves(TodaySection(TodaySectionId.SCHEDULED_TODAY, "2025-01-31"))


def test_invalid_date_rejected():
    with pytest.raises(ValueError):
        CalendarDay("31/01/2025")


@pytest.mark.parametrize(
    "container",
    [
        ProjectContainer("p1"),
        ProjectContainer("has:colon/and space"),
        AreaLooseContainer("health"),
        OrphanContainer(),
        InboxContainer(),
        CalendarDay("2025-01-31"),
        TodaySection(TodaySectionId.OVERDUE_DUE_TODAY, "2025-01-31"),
        SwimlaneColumn(ProjectContainer("p:1"), TaskStatus.IN_PROGRESS),
        SwimlaneColumn(OrphanContainer(), TaskStatus.READY),
    ],
)
def test_codec_round_trip(container):
    assert decode_container(encode_container(container)) == container


def test_encoded_keys():
    assert encode_container(ProjectContainer("p1")) == "project:p1"
    assert encode_container(CalendarDay("2025-01-31")) == "day:2025-01-31"
    assert encode_container(SwimlaneColumn(ProjectContainer("p1"), TaskStatus.READY)) == "swimlane:project%3Ap1:ready"


@pytest.mark.parametrize("key", ["nope", "project:", "day:tomorrow", "swimlane:inbox:ready", "today:later:2025-01-31"])
def test_decode_rejects_malformed_keys(key):
    with pytest.raises(ValueError):
        decode_container(key)


def test_parse_container_id_accepts_legacy_ids():
    assert parse_container_id("__orphan__") == OrphanContainer()
    assert parse_container_id("__loose-tasks-health__") == AreaLooseContainer("health")
    assert parse_container_id("p1") == ProjectContainer("p1")
    assert parse_container_id("area-loose:health") == AreaLooseContainer("health")
    assert parse_container_id("inbox") == InboxContainer()


def test_role_of():
    assert role_of(ProjectContainer("p1")) is ContainerRole.PROJECT
    assert role_of(SwimlaneColumn(OrphanContainer(), TaskStatus.DONE)) is ContainerRole.SWIMLANE_COLUMN
