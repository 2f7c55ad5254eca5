"""Order coordination service.

The single entry point that changes task order. Views read effective
orders through it and dispatch every drag gesture to it; they never touch
the order book directly.

Each mutating operation returns ``Ok(events)`` on success (an empty list
when the gesture was a no-op) or ``Err(StoreRejected | InvalidMove)``.
When a move needs a store mutation, the order change is committed first
and the store is called second, so a re-render triggered by the store
already sees the new order. If the store rejects, the order book is
restored from a snapshot and any store step already applied is undone.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from taskdn.domain.entity import EntityStore, Heading, NotFound, Task, TaskStatus
from taskdn.domain.ordering import (
    CalendarDay,
    Container,
    DanglingOrderEntry,
    HeadingAdded,
    HeadingRef,
    HeadingRemoved,
    InvalidMove,
    OrderBook,
    OrderChanged,
    OrderedItem,
    OrderError,
    PlacementContainer,
    SwimlaneColumn,
    StaleAnchor,
    StoreRejected,
    TaskMoved,
    TaskRef,
    TaskStatusChanged,
    accepts_moves,
    array_move,
    as_item,
    as_items,
    dimension,
    encode_container,
    encode_item,
    encode_items,
    insert_before,
    insert_index,
    merge_column_order,
    order_key,
    placement_container_of,
    placement_for,
    reconcile_items,
    task_ids,
    without,
)
from taskdn.domain.shared import DomainEvent, Err, Ok, Result

logger = logging.getLogger(__name__)

EventListener = Callable[[DomainEvent], None]


@dataclass(frozen=True)
class _StoreStep:
    """One store mutation of a move plus the call that reverts it."""

    entity_id: str
    operation: str
    apply: Callable[[], Result[None, NotFound]]
    undo: Callable[[], Result[None, NotFound]]
    status_change: tuple[TaskStatus, TaskStatus] | None = None


class OrderCoordinator:
    """Owns the order book and applies drag gestures to it.

    Example:
        coordinator = OrderCoordinator(store)
        coordinator.get_ordered_ids(ProjectContainer("p1"))
        coordinator.move_across_containers(
            "t2", ProjectContainer("p1"), ProjectContainer("p2"), "t4"
        )
    """

    def __init__(self, store: EntityStore, book: OrderBook | None = None) -> None:
        self._store = store
        self._book = book or OrderBook()
        self._listeners: list[EventListener] = []

    @property
    def book(self) -> OrderBook:
        return self._book

    def subscribe(self, listener: EventListener) -> Callable[[], None]:
        """Register a listener for committed events. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, events: Sequence[DomainEvent]) -> None:
        for event in events:
            for listener in list(self._listeners):
                listener(event)

    # =========================================================================
    # Reads
    # =========================================================================

    def get_ordered_items(self, container: Container) -> tuple[OrderedItem, ...]:
        """Effective display order of a container, headings included.

        Kanban columns return their swimlane order filtered to the column's
        tasks; headings are not shown in columns.
        """
        if isinstance(container, SwimlaneColumn):
            column = set(self._store.list_membership(container))
            return tuple(
                item
                for item in self._effective(container.swimlane)
                if isinstance(item, TaskRef) and item.id in column
            )
        return self._effective(container)

    def get_ordered_ids(self, container: Container) -> tuple[str, ...]:
        """Effective order of the container's task ids."""
        return task_ids(self.get_ordered_items(container))

    def get_encoded_order(self, container: Container) -> list[str]:
        """Effective order with headings in their prefixed string form."""
        return encode_items(self.get_ordered_items(container))

    def insert_index(self, container: Container, over_id: str) -> int:
        """Index an item dropped over ``over_id`` would take."""
        return insert_index(self.get_ordered_items(container), as_item(over_id))

    def get_heading(self, heading_id: str) -> Heading | None:
        return self._book.find_heading(heading_id)

    def _effective(self, key: Container) -> tuple[OrderedItem, ...]:
        """Reconcile the stored order of ``key`` with the store and save it.

        The first read of a container creates its entry from store order.
        Later reads only write (and publish) when membership drifted.
        """
        membership = self._store.list_membership(key)
        current = self._book.get(key)
        headings = list(self._book.headings_for(key))

        if current is None:
            initial = reconcile_items(membership, (), headings).items
            self._book.set(key, initial)
            return initial

        result = reconcile_items(membership, current, headings)
        if result.items == current:
            return current

        container_key = encode_container(key)
        if result.dangling:
            logger.debug(DanglingOrderEntry(container_key, result.dangling).message)
        if result.appended:
            logger.debug(f"Appended {len(result.appended)} new id(s) to {container_key}")
        self._book.set(key, result.items)
        self._publish([OrderChanged(container=container_key, order=encode_items(result.items), reason="reconciled")])
        return result.items

    # =========================================================================
    # Within-container reorder
    # =========================================================================

    def reorder_within_container(
        self,
        container: Container,
        new_order: Sequence[str | OrderedItem],
    ) -> Result[list[DomainEvent], OrderError]:
        """Replace a container's order with the post-drop order.

        The caller has computed the complete sequence, so this is a full
        overwrite with no merge. Kanban columns are routed through the
        column merge instead.

        Args:
            container: Container that was reordered.
            new_order: Complete new sequence, tasks and headings.

        Returns:
            Ok(events), with an empty list when nothing changed.
        """
        if isinstance(container, SwimlaneColumn):
            return self.move_within_swimlane_column(
                container.swimlane,
                container.status,
                container.status,
                new_order,
            )

        items = as_items(new_order)
        if self._effective(container) == items:
            return Ok([])

        self._book.set(container, items)
        events: list[DomainEvent] = [
            OrderChanged(container=encode_container(container), order=encode_items(items), reason="reordered")
        ]
        self._publish(events)
        return Ok(events)

    def reorder_by_drag(
        self,
        container: Container,
        active_id: str,
        over_id: str,
    ) -> Result[list[DomainEvent], OrderError]:
        """Move the dragged item to the index of the item it was dropped on.

        Unknown ids leave the order untouched.
        """
        items = self.get_ordered_items(container)
        active, over = as_item(active_id), as_item(over_id)
        if active == over or active not in items or over not in items:
            return Ok([])
        moved = array_move(items, items.index(active), items.index(over))
        return self.reorder_within_container(container, moved)

    # =========================================================================
    # Cross-container move
    # =========================================================================

    def move_across_containers(
        self,
        entity_id: str,
        source: Container,
        target: Container,
        before_id: str | None = None,
    ) -> Result[list[DomainEvent], OrderError]:
        """Move a task from ``source`` to ``target`` before ``before_id``.

        Removes the task from the source order, inserts it into the target
        order (appending when ``before_id`` is None or no longer in the
        target) and asks the store to change the task's references, day or
        status to match the target.

        Args:
            entity_id: Task id being dragged.
            source: Container the drag started in.
            target: Container the task was dropped in.
            before_id: Item the task was dropped on, or None to append.

        Returns:
            Ok(events) on success, Err(InvalidMove) for a request that is
            not a move, Err(StoreRejected) when the store refused (the
            order state is then unchanged).
        """
        item = as_item(entity_id)
        if isinstance(item, HeadingRef):
            return Err(InvalidMove(f"Heading {item.id} cannot leave its container"))
        if not accepts_moves(source) or not accepts_moves(target):
            return Err(InvalidMove(
                f"Cannot move between {encode_container(source)} and {encode_container(target)}"
            ))
        if dimension(source) != dimension(target):
            return Err(InvalidMove(
                f"{encode_container(source)} and {encode_container(target)} do not partition the same tasks"
            ))

        task = self._store.get_task(item.id)
        if task is None:
            return Err(StoreRejected(item.id, "move", NotFound(item.id)))

        anchor = as_item(before_id) if before_id is not None else None
        src_key, dst_key = order_key(source), order_key(target)

        if (
            isinstance(source, SwimlaneColumn)
            and isinstance(target, SwimlaneColumn)
            and src_key == dst_key
            and source.status != target.status
        ):
            column = self.get_ordered_items(target)
            new_column, _ = insert_before(column, item, anchor)
            return self.move_within_swimlane_column(
                target.swimlane, source.status, target.status, new_column
            )

        steps = self._steps_for(task, target)

        if src_key == dst_key and not steps:
            return self._reposition(dst_key, item, anchor)

        src_items = self._effective(src_key)
        dst_items = self._effective(dst_key)
        new_src = without(src_items, item)
        new_dst, stale = insert_before(dst_items, item, anchor)
        if src_key == dst_key:
            new_src = new_dst

        target_key = encode_container(dst_key)
        if stale and anchor is not None:
            logger.info(StaleAnchor(target_key, encode_item(anchor)).message)

        snapshot = self._book.snapshot([src_key, dst_key])
        self._book.set(src_key, new_src)
        self._book.set(dst_key, new_dst)

        rejected = self._apply_steps(steps)
        if rejected is not None:
            self._book.restore(snapshot)
            logger.warning(f"Move of {task.id} to {target_key} rolled back: {rejected.message}")
            return Err(rejected)

        events: list[DomainEvent] = [
            TaskMoved(
                task_id=task.id,
                source=encode_container(source),
                target=encode_container(target),
                before_id=encode_item(anchor) if anchor is not None else None,
                anchor_stale=stale,
            ),
        ]
        if src_key != dst_key and new_src != src_items:
            events.append(OrderChanged(container=encode_container(src_key), order=encode_items(new_src), reason="moved"))
        events.append(OrderChanged(container=target_key, order=encode_items(new_dst), reason="moved"))
        events.extend(self._status_events(steps))
        logger.debug(f"Moved {task.id} from {encode_container(source)} to {target_key}")
        self._publish(events)
        return Ok(events)

    def _reposition(
        self,
        key: Container,
        item: OrderedItem,
        anchor: OrderedItem | None,
    ) -> Result[list[DomainEvent], OrderError]:
        """Move inside one container with no store change."""
        current = self._effective(key)
        if anchor == item:
            return Ok([])
        new_items, stale = insert_before(current, item, anchor)
        if stale and anchor is not None:
            logger.info(StaleAnchor(encode_container(key), encode_item(anchor)).message)
        return self.reorder_within_container(key, new_items)

    # =========================================================================
    # Kanban column move
    # =========================================================================

    def move_within_swimlane_column(
        self,
        swimlane: PlacementContainer | SwimlaneColumn,
        from_status: TaskStatus,
        to_status: TaskStatus,
        new_column_order: Sequence[str | OrderedItem],
    ) -> Result[list[DomainEvent], OrderError]:
        """Apply a drop inside one kanban swimlane.

        ``new_column_order`` is the post-drop order of the ``to_status``
        column. Cards in it whose status differs from ``to_status`` moved
        in from ``from_status`` and get their status changed. The column is
        merged back into the swimlane order, leaving other columns' cards
        in their relative positions.

        Args:
            swimlane: The swimlane (a project, area-loose or orphan container).
            from_status: Column the drag started in.
            to_status: Column the card was dropped in.
            new_column_order: Complete new order of the target column.
        """
        lane = swimlane.swimlane if isinstance(swimlane, SwimlaneColumn) else swimlane
        if placement_for(lane) is None:
            return Err(InvalidMove(f"{encode_container(lane)} is not a swimlane"))

        lane_items = self._effective(lane)
        members = set(self._store.list_membership(lane))
        column_ids: list[str] = []
        for item in as_items(new_column_order):
            if isinstance(item, HeadingRef) or item.id not in members:
                logger.debug(f"Ignoring {encode_item(item)} in column {to_status.value} of {encode_container(lane)}")
                continue
            column_ids.append(item.id)

        prior = set(self._store.list_membership(SwimlaneColumn(lane, to_status)))
        steps: list[_StoreStep] = []
        for task_id in column_ids:
            if task_id in prior:
                continue
            task = self._store.get_task(task_id)
            if task is None:
                return Err(StoreRejected(task_id, "set_task_status", NotFound(task_id)))
            if task.status != from_status:
                logger.debug(f"{task_id} expected in {from_status.value}, found {task.status.value}")
            steps.append(self._status_step(task, to_status))

        merged = merge_column_order(lane_items, column_ids, prior)
        if merged == lane_items and not steps:
            return Ok([])

        snapshot = self._book.snapshot([lane])
        self._book.set(lane, merged)

        rejected = self._apply_steps(steps)
        if rejected is not None:
            self._book.restore(snapshot)
            logger.warning(f"Column drop in {encode_container(lane)} rolled back: {rejected.message}")
            return Err(rejected)

        events: list[DomainEvent] = []
        if merged != lane_items:
            events.append(OrderChanged(container=encode_container(lane), order=encode_items(merged), reason="merged"))
        events.extend(self._status_events(steps))
        self._publish(events)
        return Ok(events)

    # =========================================================================
    # Headings
    # =========================================================================

    def add_heading(
        self,
        container: Container,
        heading: Heading,
        after_id: str | None = None,
    ) -> Result[list[DomainEvent], OrderError]:
        """Add a heading to a container, after ``after_id`` or at the end."""
        if isinstance(container, SwimlaneColumn):
            return Err(InvalidMove("Kanban columns do not show headings"))
        if heading.id in self._book.headings_for(container):
            return Err(InvalidMove(f"Heading {heading.id} already exists in {encode_container(container)}"))

        items = list(self._effective(container))
        ref = HeadingRef(heading.id)
        anchor = as_item(after_id) if after_id is not None else None
        if anchor is not None and anchor in items:
            items.insert(items.index(anchor) + 1, ref)
        else:
            items.append(ref)

        self._book.add_heading(container, heading)
        self._book.set(container, items)
        container_key = encode_container(container)
        events: list[DomainEvent] = [
            HeadingAdded(container=container_key, heading_id=heading.id, title=heading.title),
            OrderChanged(container=container_key, order=encode_items(items), reason="heading"),
        ]
        self._publish(events)
        return Ok(events)

    def remove_heading(self, container: Container, heading_id: str) -> Result[list[DomainEvent], OrderError]:
        """Remove a heading; the tasks below it stay where they are."""
        if self._book.remove_heading(container, heading_id) is None:
            return Err(InvalidMove(f"No heading {heading_id} in {encode_container(container)}"))

        items = without(self._book.get(container) or (), HeadingRef(heading_id))
        self._book.set(container, items)
        container_key = encode_container(container)
        events: list[DomainEvent] = [
            HeadingRemoved(container=container_key, heading_id=heading_id),
            OrderChanged(container=container_key, order=encode_items(items), reason="heading"),
        ]
        self._publish(events)
        return Ok(events)

    # =========================================================================
    # Store steps
    # =========================================================================

    def _steps_for(self, task: Task, target: Container) -> list[_StoreStep]:
        """Store mutations needed for ``task`` to be a member of ``target``."""
        store = self._store
        steps: list[_StoreStep] = []
        placement = placement_for(target)
        task_id = task.id

        # A task already in the target list keeps its references, area override included
        if placement is not None and placement_container_of(task) != order_key(target):
            old_project, old_area = task.project_id, task.area_id
            if old_project != placement.project_id:
                steps.append(_StoreStep(
                    task_id,
                    "set_task_project",
                    lambda: store.set_task_project(task_id, placement.project_id),
                    lambda: store.set_task_project(task_id, old_project),
                ))
            if old_area != placement.area_id:
                steps.append(_StoreStep(
                    task_id,
                    "set_task_area",
                    lambda: store.set_task_area(task_id, placement.area_id),
                    lambda: store.set_task_area(task_id, old_area),
                ))

        if isinstance(target, SwimlaneColumn) and task.status != target.status:
            steps.append(self._status_step(task, target.status))

        if isinstance(target, CalendarDay):
            old_scheduled = task.scheduled
            if (old_scheduled or "")[:10] != target.date:
                steps.append(_StoreStep(
                    task_id,
                    "set_task_scheduled",
                    lambda: store.set_task_scheduled(task_id, target.date),
                    lambda: store.set_task_scheduled(task_id, old_scheduled),
                ))
        return steps

    def _status_step(self, task: Task, status: TaskStatus) -> _StoreStep:
        store, task_id, old_status = self._store, task.id, task.status
        return _StoreStep(
            task_id,
            "set_task_status",
            lambda: store.set_task_status(task_id, status),
            lambda: store.set_task_status(task_id, old_status),
            status_change=(old_status, status),
        )

    @staticmethod
    def _status_events(steps: Sequence[_StoreStep]) -> list[DomainEvent]:
        return [
            TaskStatusChanged(
                task_id=step.entity_id,
                from_status=step.status_change[0].value,
                to_status=step.status_change[1].value,
            )
            for step in steps
            if step.status_change is not None
        ]

    @staticmethod
    def _apply_steps(steps: Sequence[_StoreStep]) -> StoreRejected | None:
        """Run store steps in order; on the first rejection undo the applied ones."""
        applied: list[_StoreStep] = []
        for step in steps:
            result = step.apply()
            if isinstance(result, Err):
                for done in reversed(applied):
                    undo = done.undo()
                    if isinstance(undo, Err):
                        logger.error(f"Could not undo {done.operation} for {done.entity_id}: {undo.error.message}")
                return StoreRejected(step.entity_id, step.operation, result.error)
            applied.append(step)
        return None
