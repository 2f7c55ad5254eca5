import pytest

from taskdn.application import OrderCoordinator
from taskdn.domain.entity import AppData, Area, Heading, NotFound, Project, Task, TaskStatus
from taskdn.domain.ordering import (
    AreaLooseContainer,
    CalendarDay,
    HeadingRef,
    InboxContainer,
    InvalidMove,
    OrderChanged,
    OrphanContainer,
    ProjectContainer,
    StoreRejected,
    SwimlaneColumn,
    TaskMoved,
    TaskRef,
    TaskStatusChanged,
    TodaySection,
    TodaySectionId,
)
from taskdn.domain.shared import Err, Ok
from taskdn.infrastructure.storage import InMemoryEntityStore

P1, P2 = ProjectContainer("p1"), ProjectContainer("p2")


class RejectingStore(InMemoryEntityStore):
    """Store that refuses one kind of mutation."""

    def __init__(self, data, reject):
        super().__init__(data)
        self.reject = reject

    def _refuse(self, task_id):
        return Err(NotFound(task_id))

    def set_task_project(self, task_id, project_id):
        if self.reject == "project":
            return self._refuse(task_id)
        return super().set_task_project(task_id, project_id)

    def set_task_area(self, task_id, area_id):
        if self.reject == "area":
            return self._refuse(task_id)
        return super().set_task_area(task_id, area_id)

    def set_task_status(self, task_id, status):
        if self.reject == "status":
            return self._refuse(task_id)
        return super().set_task_status(task_id, status)


@pytest.fixture
def events(coordinator):
    received = []
    coordinator.subscribe(received.append)
    return received


@pytest.fixture
def board():
    """Swimlane k with t1, t3 ready and t2, t4 done."""
    data = AppData(
        projects=[Project(id="k", title="Board")],
        tasks=[
            Task(id="t1", title="One", status=TaskStatus.READY, project_id="k"),
            Task(id="t2", title="Two", status=TaskStatus.DONE, project_id="k"),
            Task(id="t3", title="Three", status=TaskStatus.READY, project_id="k"),
            Task(id="t4", title="Four", status=TaskStatus.DONE, project_id="k"),
        ],
    )
    store = InMemoryEntityStore(data)
    return store, OrderCoordinator(store)


LANE = ProjectContainer("k")
READY = SwimlaneColumn(LANE, TaskStatus.READY)
DONE = SwimlaneColumn(LANE, TaskStatus.DONE)


# =============================================================================
# Reads
# =============================================================================


def test_first_read_uses_store_order(coordinator):
    assert coordinator.get_ordered_ids(P1) == ("t1", "t2", "t3")
    assert coordinator.get_ordered_ids(InboxContainer()) == ("t5", "t6")
    assert coordinator.get_ordered_ids(CalendarDay("2025-01-31")) == ("t1",)


def test_first_read_does_not_publish(coordinator, events):
    coordinator.get_ordered_ids(P1)
    assert events == []


def test_drift_is_reconciled_once(coordinator, store, events):
    coordinator.reorder_within_container(P1, ["t3", "t1", "t2"])
    events.clear()

    store.delete_task("t1")
    store.add_task(Task(id="t8", title="New", project_id="p1"))

    assert coordinator.get_ordered_ids(P1) == ("t3", "t2", "t8")
    assert [e.reason for e in events] == ["reconciled"]

    assert coordinator.get_ordered_ids(P1) == ("t3", "t2", "t8")
    assert len(events) == 1


def test_insert_index(coordinator):
    assert coordinator.insert_index(P1, "t2") == 1
    assert coordinator.insert_index(P1, "missing") == 3


# =============================================================================
# Within-container reorder
# =============================================================================


def test_reorder_is_full_overwrite(coordinator, events):
    result = coordinator.reorder_within_container(P1, ["t3", "t1", "t2"])

    assert isinstance(result, Ok)
    assert coordinator.get_ordered_ids(P1) == ("t3", "t1", "t2")
    assert events == result.value
    assert isinstance(events[0], OrderChanged)
    assert events[0].container == "project:p1"
    assert events[0].order == ["t3", "t1", "t2"]


def test_reorder_to_same_order_is_noop(coordinator, events):
    result = coordinator.reorder_within_container(P1, ["t1", "t2", "t3"])
    assert result == Ok([])
    assert events == []


def test_view_containers_can_be_reordered(coordinator):
    today = TodaySection(TodaySectionId.OVERDUE_DUE_TODAY, "2025-01-31")
    assert coordinator.get_ordered_ids(today) == ("t6",)

    coordinator.reorder_within_container(InboxContainer(), ["t6", "t5"])
    assert coordinator.get_ordered_ids(InboxContainer()) == ("t6", "t5")


def test_reorder_by_drag(coordinator):
    coordinator.reorder_by_drag(P1, "t1", "t3")
    assert coordinator.get_ordered_ids(P1) == ("t2", "t3", "t1")


def test_reorder_by_drag_unknown_id_is_noop(coordinator):
    assert coordinator.reorder_by_drag(P1, "t1", "nope") == Ok([])
    assert coordinator.get_ordered_ids(P1) == ("t1", "t2", "t3")


# =============================================================================
# Cross-container move
# =============================================================================


def test_move_before_anchor(coordinator, store):
    result = coordinator.move_across_containers("t2", P1, P2, "t4")

    assert isinstance(result, Ok)
    assert coordinator.get_ordered_ids(P1) == ("t1", "t3")
    assert coordinator.get_ordered_ids(P2) == ("t2", "t4")
    assert store.get_task("t2").project_id == "p2"


def test_move_append_semantics(coordinator):
    before_src = coordinator.get_ordered_ids(P1)
    before_dst = coordinator.get_ordered_ids(P2)

    coordinator.move_across_containers("t1", P1, P2, None)

    after_src = coordinator.get_ordered_ids(P1)
    after_dst = coordinator.get_ordered_ids(P2)
    assert after_dst[-1] == "t1"
    assert len(after_dst) == len(before_dst) + 1
    assert len(after_src) == len(before_src) - 1


def test_move_events(coordinator, events):
    coordinator.move_across_containers("t2", P1, P2, "t4")

    moved = [e for e in events if isinstance(e, TaskMoved)]
    assert len(moved) == 1
    assert moved[0].source == "project:p1"
    assert moved[0].target == "project:p2"
    assert moved[0].before_id == "t4"
    assert {e.container for e in events if isinstance(e, OrderChanged)} == {"project:p1", "project:p2"}


def test_stale_anchor_appends(coordinator):
    result = coordinator.move_across_containers("t1", P1, P2, "deleted")

    assert isinstance(result, Ok)
    assert coordinator.get_ordered_ids(P2) == ("t4", "t1")
    assert [e.anchor_stale for e in result.value if isinstance(e, TaskMoved)] == [True]


def test_move_to_area_loose_sets_area_and_clears_project(coordinator, store):
    coordinator.move_across_containers("t1", P1, AreaLooseContainer("health"))

    task = store.get_task("t1")
    assert task.project_id is None
    assert task.area_id == "health"
    assert coordinator.get_ordered_ids(AreaLooseContainer("health")) == ("t5", "t1")


def test_move_to_orphan_clears_both(coordinator, store):
    coordinator.move_across_containers("t5", AreaLooseContainer("health"), OrphanContainer(), "t6")

    task = store.get_task("t5")
    assert task.project_id is None
    assert task.area_id is None
    assert coordinator.get_ordered_ids(OrphanContainer()) == ("t5", "t6")


def test_move_within_same_container_repositions(coordinator, events):
    result = coordinator.move_across_containers("t3", P1, P1, "t1")
    assert isinstance(result, Ok)
    assert coordinator.get_ordered_ids(P1) == ("t3", "t1", "t2")


def test_move_to_current_position_is_noop(coordinator, events):
    assert coordinator.move_across_containers("t2", P1, P1, "t3") == Ok([])
    assert events == []



@pytest.fixture
def overridden():
    """Project p1 holding t1, and t2 which also carries an area override."""
    data = AppData(
        areas=[Area(id="health", title="Health")],
        projects=[Project(id="p1", title="One")],
        tasks=[
            Task(id="t1", title="One", project_id="p1"),
            Task(id="t2", title="Two", project_id="p1", area_id="health"),
        ],
    )
    store = InMemoryEntityStore(data)
    coordinator = OrderCoordinator(store)
    received = []
    coordinator.subscribe(received.append)
    return store, coordinator, received


def test_move_in_place_keeps_area_override(overridden):
    store, coordinator, received = overridden
    before = store.get_task("t2")

    assert coordinator.move_across_containers("t2", P1, P1, None) == Ok([])

    assert store.get_task("t2") == before
    assert store.get_task("t2").area_id == "health"
    assert coordinator.get_ordered_ids(P1) == ("t1", "t2")
    assert received == []


def test_reposition_keeps_area_override(overridden):
    store, coordinator, received = overridden

    result = coordinator.move_across_containers("t2", P1, P1, "t1")

    assert isinstance(result, Ok)
    assert coordinator.get_ordered_ids(P1) == ("t2", "t1")
    assert store.get_task("t2").area_id == "health"
    assert not any(isinstance(event, TaskMoved) for event in received)


def test_move_between_calendar_days(coordinator, store):
    coordinator.move_across_containers("t1", CalendarDay("2025-01-31"), CalendarDay("2025-02-01"))

    assert store.get_task("t1").scheduled == "2025-02-01"
    assert coordinator.get_ordered_ids(CalendarDay("2025-01-31")) == ()
    assert coordinator.get_ordered_ids(CalendarDay("2025-02-01")) == ("t1",)


def test_move_of_missing_task_is_rejected(coordinator):
    result = coordinator.move_across_containers("ghost", P1, P2)
    assert isinstance(result, Err)
    assert isinstance(result.error, StoreRejected)


@pytest.mark.parametrize(
    "entity_id, source, target",
    [
        ("heading:h1", P1, P2),
        ("t5", InboxContainer(), P1),
        ("t1", P1, InboxContainer()),
        ("t1", P1, CalendarDay("2025-02-01")),
    ],
)
def test_invalid_moves_change_nothing(coordinator, entity_id, source, target):
    before = coordinator.get_ordered_ids(P1)
    result = coordinator.move_across_containers(entity_id, source, target)

    assert isinstance(result, Err)
    assert isinstance(result.error, InvalidMove)
    assert coordinator.get_ordered_ids(P1) == before


# =============================================================================
# Atomicity
# =============================================================================


def test_rejected_move_rolls_back_order(app_data):
    store = RejectingStore(app_data, reject="project")
    coordinator = OrderCoordinator(store)
    before = (coordinator.get_ordered_ids(P1), coordinator.get_ordered_ids(P2))
    received = []
    coordinator.subscribe(received.append)

    result = coordinator.move_across_containers("t2", P1, P2, "t4")

    assert isinstance(result, Err)
    assert isinstance(result.error, StoreRejected)
    assert result.error.operation == "set_task_project"
    assert (coordinator.get_ordered_ids(P1), coordinator.get_ordered_ids(P2)) == before
    assert store.get_task("t2").project_id == "p1"
    assert received == []


def test_rejected_second_step_undoes_first(app_data):
    store = RejectingStore(app_data, reject="area")
    coordinator = OrderCoordinator(store)
    loose = AreaLooseContainer("health")
    before = (coordinator.get_ordered_ids(loose), coordinator.get_ordered_ids(P1))

    result = coordinator.move_across_containers("t5", loose, P1)

    assert isinstance(result, Err)
    assert store.get_task("t5").project_id is None
    assert store.get_task("t5").area_id == "health"
    assert (coordinator.get_ordered_ids(loose), coordinator.get_ordered_ids(P1)) == before


def test_move_into_unknown_project_is_rejected(coordinator, store):
    result = coordinator.move_across_containers("t1", P1, ProjectContainer("gone"))

    assert isinstance(result, Err)
    assert result.error.cause.entity_type == "project"
    assert coordinator.get_ordered_ids(P1) == ("t1", "t2", "t3")


# =============================================================================
# Kanban
# =============================================================================


def test_column_reorder_preserves_other_columns(board):
    _, coordinator = board
    assert coordinator.get_ordered_ids(LANE) == ("t1", "t2", "t3", "t4")

    result = coordinator.move_within_swimlane_column(LANE, TaskStatus.READY, TaskStatus.READY, ["t3", "t1"])

    assert isinstance(result, Ok)
    assert coordinator.get_ordered_ids(LANE) == ("t3", "t1", "t2", "t4")
    assert not [e for e in result.value if isinstance(e, TaskStatusChanged)]


def test_column_view_is_filtered_swimlane(board):
    _, coordinator = board
    assert coordinator.get_ordered_ids(READY) == ("t1", "t3")
    assert coordinator.get_ordered_ids(DONE) == ("t2", "t4")


def test_reorder_of_column_routes_through_merge(board):
    _, coordinator = board
    coordinator.reorder_within_container(READY, ["t3", "t1"])
    assert coordinator.get_ordered_ids(LANE) == ("t3", "t1", "t2", "t4")


def test_card_moved_to_other_column_changes_status(board):
    store, coordinator = board

    result = coordinator.move_within_swimlane_column(LANE, TaskStatus.DONE, TaskStatus.READY, ["t1", "t2", "t3"])

    assert isinstance(result, Ok)
    assert store.get_task("t2").status == TaskStatus.READY
    assert coordinator.get_ordered_ids(READY) == ("t1", "t2", "t3")
    assert coordinator.get_ordered_ids(DONE) == ("t4",)
    changes = [e for e in result.value if isinstance(e, TaskStatusChanged)]
    assert [(e.task_id, e.from_status, e.to_status) for e in changes] == [("t2", "done", "ready")]


def test_move_across_columns_of_one_swimlane(board):
    store, coordinator = board

    coordinator.move_across_containers("t4", DONE, READY, "t1")

    assert store.get_task("t4").status == TaskStatus.READY
    assert coordinator.get_ordered_ids(READY) == ("t4", "t1", "t3")
    assert coordinator.get_ordered_ids(LANE) == ("t4", "t1", "t2", "t3")


def test_rejected_status_change_rolls_back(board):
    store, _ = board
    rejecting = RejectingStore(store.to_app_data(), reject="status")
    coordinator = OrderCoordinator(rejecting)
    before = coordinator.get_ordered_ids(LANE)

    result = coordinator.move_within_swimlane_column(LANE, TaskStatus.DONE, TaskStatus.READY, ["t2", "t1", "t3"])

    assert isinstance(result, Err)
    assert coordinator.get_ordered_ids(LANE) == before
    assert rejecting.get_task("t2").status == TaskStatus.DONE


def test_move_to_column_of_other_swimlane(coordinator, store):
    target = SwimlaneColumn(P2, TaskStatus.IN_PROGRESS)

    coordinator.move_across_containers("t1", SwimlaneColumn(P1, TaskStatus.READY), target)

    task = store.get_task("t1")
    assert task.project_id == "p2"
    assert task.status == TaskStatus.IN_PROGRESS
    assert coordinator.get_ordered_ids(target) == ("t1",)


def test_column_noop(board):
    _, coordinator = board
    assert coordinator.move_within_swimlane_column(LANE, TaskStatus.READY, TaskStatus.READY, ["t1", "t3"]) == Ok([])



def test_column_reorder_to_current_order_leaves_swimlane_alone(coordinator, store, events):
    # p1 is t1, t2, t3 with t2 in progress between the two ready cards
    column = SwimlaneColumn(P1, TaskStatus.READY)
    before = [store.get_task(task_id) for task_id in ("t1", "t2", "t3")]

    assert coordinator.reorder_within_container(column, ["t1", "t3"]) == Ok([])

    assert coordinator.get_ordered_ids(P1) == ("t1", "t2", "t3")
    assert coordinator.get_ordered_ids(column) == ("t1", "t3")
    assert [store.get_task(task_id) for task_id in ("t1", "t2", "t3")] == before
    assert events == []


def test_column_drag_does_not_move_other_columns(board):
    _, coordinator = board

    coordinator.reorder_within_container(READY, ["t3", "t1"])
    coordinator.reorder_within_container(DONE, ["t2", "t4"])

    assert coordinator.get_ordered_ids(LANE) == ("t3", "t1", "t2", "t4")


# =============================================================================
# Headings
# =============================================================================


def test_add_heading_after_task(coordinator):
    result = coordinator.add_heading(P1, Heading(id="h1", title="Later"), after_id="t1")

    assert isinstance(result, Ok)
    assert coordinator.get_ordered_items(P1) == (TaskRef("t1"), HeadingRef("h1"), TaskRef("t2"), TaskRef("t3"))
    assert coordinator.get_ordered_ids(P1) == ("t1", "t2", "t3")
    assert coordinator.get_encoded_order(P1) == ["t1", "heading:h1", "t2", "t3"]
    assert coordinator.get_heading("h1").title == "Later"


def test_headings_take_part_in_reorder(coordinator):
    coordinator.add_heading(P1, Heading(id="h1", title="Later"))
    coordinator.reorder_within_container(P1, ["heading:h1", "t2", "t1", "t3"])
    assert coordinator.get_encoded_order(P1) == ["heading:h1", "t2", "t1", "t3"]


def test_heading_survives_reconciliation(coordinator, store):
    coordinator.add_heading(P1, Heading(id="h1", title="Later"), after_id="t1")
    store.delete_task("t1")
    assert coordinator.get_encoded_order(P1) == ["heading:h1", "t2", "t3"]


def test_remove_heading_keeps_tasks(coordinator):
    coordinator.add_heading(P1, Heading(id="h1", title="Later"), after_id="t2")
    result = coordinator.remove_heading(P1, "h1")

    assert isinstance(result, Ok)
    assert coordinator.get_encoded_order(P1) == ["t1", "t2", "t3"]
    assert coordinator.get_heading("h1") is None


def test_heading_errors(coordinator):
    coordinator.add_heading(P1, Heading(id="h1", title="Later"))

    assert isinstance(coordinator.add_heading(P1, Heading(id="h1", title="Again")), Err)
    assert isinstance(coordinator.add_heading(SwimlaneColumn(P1, TaskStatus.READY), Heading(id="h2", title="X")), Err)
    assert isinstance(coordinator.remove_heading(P2, "h1"), Err)


# =============================================================================
# Subscribers
# =============================================================================


def test_unsubscribe(coordinator):
    received = []
    unsubscribe = coordinator.subscribe(received.append)
    unsubscribe()

    coordinator.reorder_within_container(P1, ["t2", "t1", "t3"])
    assert received == []
