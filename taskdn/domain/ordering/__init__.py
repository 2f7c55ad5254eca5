"""Ordering domain - display order of tasks and headings per container.

All exports are pure (no I/O, no side effects).

Key Types:
    TaskRef, HeadingRef - Items of an order sequence
    ProjectContainer, AreaLooseContainer, OrphanContainer,
    SwimlaneColumn, CalendarDay, InboxContainer, TodaySection - Containers
    OrderBook - Order state per container
    DragId - Decomposed drag identifier

Reconciliation Functions:
    reconcile - Merge manual order with store membership
    reconcile_items - Same, for sequences interleaving headings
    merge_column_order - Write a kanban column back into its swimlane

Classifier Functions:
    order_key - Container whose order backs a container
    placement_for - References implied by a container
    is_loose_tasks_container / loose_tasks_container_id - Legacy pseudo ids

Errors:
    StaleAnchor, DanglingOrderEntry - Healed locally
    StoreRejected, InvalidMove - Abort the operation
"""

from .book import OrderBook, SequenceBook, Snapshot
from .containers import (
    LOOSE_TASKS_PREFIX,
    ORPHAN_CONTAINER_ID,
    AreaLooseContainer,
    CalendarDay,
    Container,
    ContainerRole,
    InboxContainer,
    OrphanContainer,
    Placement,
    PlacementContainer,
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
from .drag import DragId, calendar_task_drag_id, decode_drag_id, make_drag_id, parse_drag_id
from .errors import DanglingOrderEntry, InvalidMove, OrderError, StaleAnchor, StoreRejected
from .events import (
    HeadingAdded,
    HeadingRemoved,
    OrderChanged,
    ProjectMoved,
    TaskMoved,
    TaskStatusChanged,
)
from .items import (
    HEADING_ID_PREFIX,
    HeadingRef,
    OrderedItem,
    TaskRef,
    as_item,
    as_items,
    decode_item,
    encode_item,
    encode_items,
    is_heading_id,
    parse_heading_id,
    task_ids,
    to_heading_id,
)
from .merge import merge_column_order
from .reconcile import (
    Reconciled,
    array_move,
    insert_before,
    insert_index,
    reconcile,
    reconcile_items,
    without,
)

__all__ = [
    # Items
    "TaskRef",
    "HeadingRef",
    "OrderedItem",
    "HEADING_ID_PREFIX",
    "is_heading_id",
    "to_heading_id",
    "parse_heading_id",
    "decode_item",
    "encode_item",
    "encode_items",
    "as_item",
    "as_items",
    "task_ids",
    # Containers
    "Container",
    "ContainerRole",
    "PlacementContainer",
    "Placement",
    "ProjectContainer",
    "AreaLooseContainer",
    "OrphanContainer",
    "SwimlaneColumn",
    "CalendarDay",
    "InboxContainer",
    "TodaySection",
    "TodaySectionId",
    "LOOSE_TASKS_PREFIX",
    "ORPHAN_CONTAINER_ID",
    "order_key",
    "placement_for",
    "placement_container_of",
    "dimension",
    "accepts_moves",
    "role_of",
    "loose_tasks_container_id",
    "is_loose_tasks_container",
    "area_id_from_loose_tasks_container",
    "legacy_container_id",
    "encode_container",
    "decode_container",
    "parse_container_id",
    # Drag ids
    "DragId",
    "make_drag_id",
    "calendar_task_drag_id",
    "parse_drag_id",
    "decode_drag_id",
    # Reconciliation
    "reconcile",
    "reconcile_items",
    "Reconciled",
    "merge_column_order",
    "array_move",
    "insert_before",
    "insert_index",
    "without",
    # State
    "OrderBook",
    "SequenceBook",
    "Snapshot",
    # Errors
    "StaleAnchor",
    "DanglingOrderEntry",
    "StoreRejected",
    "InvalidMove",
    "OrderError",
    # Events
    "OrderChanged",
    "TaskMoved",
    "TaskStatusChanged",
    "HeadingAdded",
    "HeadingRemoved",
    "ProjectMoved",
]
