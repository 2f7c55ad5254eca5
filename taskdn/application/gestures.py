"""Recorded drag gestures.

A gesture is the JSON form of one drop a view would dispatch to the
order coordinator. Scripts of gestures let the CLI (and tests) replay a
drag session against seed data without any UI.

Example script:
    [
        {"op": "reorder", "container": "project:p1", "order": ["t3", "t1", "t2"]},
        {"op": "move", "task": "t2", "source": "project:p1",
         "target": "project:p2", "before": "t4"},
        {"op": "column", "swimlane": "project:p1", "from": "ready",
         "to": "in-progress", "order": ["t3", "t1"]},
        {"op": "add-heading", "container": "project:p1",
         "heading": {"id": "h1", "title": "Later"}, "after": "t1"},
        {"op": "remove-heading", "container": "project:p1", "heading": "h1"}
    ]

Container fields accept codec keys and legacy ids alike.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from taskdn.application.order_service import OrderCoordinator
from taskdn.domain.entity import Heading, TaskStatus
from taskdn.domain.ordering import InvalidMove, OrderError, parse_container_id
from taskdn.domain.shared import DomainEvent, Err, Result


class _Gesture(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ReorderGesture(_Gesture):
    op: Literal["reorder"] = "reorder"
    container: str
    order: list[str]


class MoveGesture(_Gesture):
    op: Literal["move"] = "move"
    task: str
    source: str
    target: str
    before: str | None = None


class ColumnGesture(_Gesture):
    op: Literal["column"] = "column"
    swimlane: str
    from_status: TaskStatus = Field(alias="from")
    to_status: TaskStatus = Field(alias="to")
    order: list[str]


class AddHeadingGesture(_Gesture):
    op: Literal["add-heading"] = "add-heading"
    container: str
    heading: Heading
    after: str | None = None


class RemoveHeadingGesture(_Gesture):
    op: Literal["remove-heading"] = "remove-heading"
    container: str
    heading: str


Gesture = Annotated[
    Union[  # noqa: UP007
        ReorderGesture,
        MoveGesture,
        ColumnGesture,
        AddHeadingGesture,
        RemoveHeadingGesture,
    ],
    Field(discriminator="op"),
]


def apply_gesture(
    coordinator: OrderCoordinator,
    gesture: ReorderGesture | MoveGesture | ColumnGesture | AddHeadingGesture | RemoveHeadingGesture,
) -> Result[list[DomainEvent], OrderError]:
    """Dispatch one gesture to the coordinator operation it stands for."""
    if isinstance(gesture, ReorderGesture):
        return coordinator.reorder_within_container(parse_container_id(gesture.container), gesture.order)

    if isinstance(gesture, MoveGesture):
        return coordinator.move_across_containers(
            gesture.task,
            parse_container_id(gesture.source),
            parse_container_id(gesture.target),
            gesture.before,
        )

    if isinstance(gesture, ColumnGesture):
        return coordinator.move_within_swimlane_column(
            parse_container_id(gesture.swimlane),
            gesture.from_status,
            gesture.to_status,
            gesture.order,
        )

    if isinstance(gesture, AddHeadingGesture):
        return coordinator.add_heading(parse_container_id(gesture.container), gesture.heading, gesture.after)

    if isinstance(gesture, RemoveHeadingGesture):
        return coordinator.remove_heading(parse_container_id(gesture.container), gesture.heading)

    return Err(InvalidMove(f"Unknown gesture: {gesture!r}"))
