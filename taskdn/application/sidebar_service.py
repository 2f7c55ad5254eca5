"""Sidebar ordering service.

Keeps the display order of areas and of the projects filed under each
area. Projects without an area live in the ``__orphan__`` bucket. Same
rules as task ordering: manual order reconciled against the store,
full overwrite on reorder, rollback when the store rejects a move.
"""

import logging
from collections.abc import Callable, Sequence

from taskdn.domain.entity import ProjectPlacementStore
from taskdn.domain.ordering import (
    ORPHAN_CONTAINER_ID,
    InvalidMove,
    OrderChanged,
    OrderError,
    ProjectMoved,
    SequenceBook,
    StaleAnchor,
    StoreRejected,
    insert_before,
    reconcile,
    without,
)
from taskdn.domain.shared import DomainEvent, Err, Ok, Result

logger = logging.getLogger(__name__)

AREAS_KEY = "__areas__"


def _bucket(area_id: str | None) -> str:
    return area_id or ORPHAN_CONTAINER_ID


class SidebarCoordinator:
    """Order of areas and of projects per area."""

    def __init__(
        self,
        store: ProjectPlacementStore,
        book: SequenceBook[str, str] | None = None,
    ) -> None:
        self._store = store
        self._book: SequenceBook[str, str] = book or SequenceBook()
        self._listeners: list[Callable[[DomainEvent], None]] = []

    def subscribe(self, listener: Callable[[DomainEvent], None]) -> Callable[[], None]:
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

    def _effective(self, key: str, membership: Sequence[str]) -> tuple[str, ...]:
        current = self._book.get(key)
        order = reconcile(membership, current or ())
        if current != order:
            self._book.set(key, order)
        return order

    # =========================================================================
    # Reads
    # =========================================================================

    def get_area_order(self) -> tuple[str, ...]:
        return self._effective(AREAS_KEY, self._store.list_areas())

    def get_project_order(self, area_id: str | None) -> tuple[str, ...]:
        """Projects of an area in display order (None = projects with no area)."""
        return self._effective(_bucket(area_id), self._store.list_projects(area_id))

    # =========================================================================
    # Mutations
    # =========================================================================

    def reorder_areas(self, area_ids: Sequence[str]) -> Result[list[DomainEvent], OrderError]:
        if self.get_area_order() == tuple(area_ids):
            return Ok([])
        self._book.set(AREAS_KEY, area_ids)
        events: list[DomainEvent] = [OrderChanged(container=AREAS_KEY, order=list(area_ids), reason="reordered")]
        self._publish(events)
        return Ok(events)

    def reorder_projects(
        self,
        area_id: str | None,
        project_ids: Sequence[str],
    ) -> Result[list[DomainEvent], OrderError]:
        if self.get_project_order(area_id) == tuple(project_ids):
            return Ok([])
        key = _bucket(area_id)
        self._book.set(key, project_ids)
        events: list[DomainEvent] = [OrderChanged(container=key, order=list(project_ids), reason="reordered")]
        self._publish(events)
        return Ok(events)

    def move_project_to_area(
        self,
        project_id: str,
        from_area: str | None,
        to_area: str | None,
        before_id: str | None = None,
    ) -> Result[list[DomainEvent], OrderError]:
        """File a project under another area, inserting it before ``before_id``.

        Moving within the same area only repositions the project.
        """
        src_key, dst_key = _bucket(from_area), _bucket(to_area)
        if src_key == dst_key:
            current = self.get_project_order(to_area)
            if before_id == project_id:
                return Ok([])
            new_order, _ = insert_before(current, project_id, before_id)
            return self.reorder_projects(to_area, new_order)

        if to_area is not None and to_area not in self._store.list_areas():
            return Err(InvalidMove(f"Unknown area: {to_area}"))

        src = self.get_project_order(from_area)
        dst = self.get_project_order(to_area)
        new_src = without(src, project_id)
        new_dst, stale = insert_before(dst, project_id, before_id)
        if stale and before_id is not None:
            logger.info(StaleAnchor(dst_key, before_id).message)

        snapshot = self._book.snapshot([src_key, dst_key])
        self._book.set(src_key, new_src)
        self._book.set(dst_key, new_dst)

        result = self._store.set_project_area(project_id, to_area)
        if isinstance(result, Err):
            self._book.restore(snapshot)
            rejected = StoreRejected(project_id, "set_project_area", result.error)
            logger.warning(f"Project move rolled back: {rejected.message}")
            return Err(rejected)

        events: list[DomainEvent] = [
            ProjectMoved(project_id=project_id, from_area=from_area, to_area=to_area),
            OrderChanged(container=src_key, order=list(new_src), reason="moved"),
            OrderChanged(container=dst_key, order=list(new_dst), reason="moved"),
        ]
        self._publish(events)
        return Ok(events)
