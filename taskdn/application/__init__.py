"""Application service layer for taskdn.

Services own order state and orchestrate domain functions with the
entity store.

Services:
    order_service - Task/heading order per container (reorder, move, kanban)
    sidebar_service - Area and project order in the sidebar
    gestures - Recorded drops replayed against the order service

Example usage:
    >>> from taskdn.application import OrderCoordinator
    >>> from taskdn.domain.ordering import ProjectContainer
    >>>
    >>> coordinator = OrderCoordinator(store)
    >>> coordinator.get_ordered_ids(ProjectContainer("p1"))
    ('t1', 't2', 't3')
"""

from taskdn.application.gestures import (
    AddHeadingGesture,
    ColumnGesture,
    Gesture,
    MoveGesture,
    RemoveHeadingGesture,
    ReorderGesture,
    apply_gesture,
)
from taskdn.application.order_service import EventListener, OrderCoordinator
from taskdn.application.sidebar_service import AREAS_KEY, SidebarCoordinator

__all__ = [
    # Order service
    "OrderCoordinator",
    "EventListener",
    # Sidebar service
    "SidebarCoordinator",
    "AREAS_KEY",
    # Gestures
    "Gesture",
    "ReorderGesture",
    "MoveGesture",
    "ColumnGesture",
    "AddHeadingGesture",
    "RemoveHeadingGesture",
    "apply_gesture",
]
