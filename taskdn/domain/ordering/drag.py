"""Drag identifiers.

The pointer-drag layer needs one key per rendered card that is unique
across every container on screen. The same task can be rendered in a
project list and on a calendar day at once, so the key combines the
container and the item. Keys are presentation-only: they are always
decomposed back to (item, container) before reaching the coordinator.
"""

import re
from dataclasses import dataclass
from urllib.parse import quote, unquote

from taskdn.domain.ordering.containers import CalendarDay, Container, decode_container, encode_container
from taskdn.domain.ordering.items import OrderedItem, TaskRef, decode_item, encode_item

DRAG_ID_PREFIX = "drag:"

_CALENDAR_DRAG_RE = re.compile(r"^calendar-task-(\d{4}-\d{2}-\d{2})-(.+)$")


@dataclass(frozen=True, slots=True)
class DragId:
    item: OrderedItem
    container: Container

    def __str__(self) -> str:
        return make_drag_id(self.container, self.item)


def make_drag_id(container: Container, item: OrderedItem) -> str:
    return (
        f"{DRAG_ID_PREFIX}{quote(encode_container(container), safe='')}"
        f":{quote(encode_item(item), safe='')}"
    )


def calendar_task_drag_id(date: str, task_id: str) -> str:
    """Short form used by calendar cards."""
    return f"calendar-task-{date}-{task_id}"


def parse_drag_id(drag_id: str) -> DragId | None:
    """Decompose a drag id, or return None if it is not one."""
    match = _CALENDAR_DRAG_RE.match(drag_id)
    if match:
        return DragId(item=TaskRef(match.group(2)), container=CalendarDay(match.group(1)))

    if not drag_id.startswith(DRAG_ID_PREFIX):
        return None
    container_part, sep, item_part = drag_id[len(DRAG_ID_PREFIX):].partition(":")
    if not sep or not container_part or not item_part:
        return None
    try:
        container = decode_container(unquote(container_part))
    except ValueError:
        return None
    return DragId(item=decode_item(unquote(item_part)), container=container)


def decode_drag_id(drag_id: str) -> DragId:
    """Like ``parse_drag_id`` but raises ValueError on malformed input."""
    parsed = parse_drag_id(drag_id)
    if parsed is None:
        raise ValueError(f"Not a drag id: {drag_id!r}")
    return parsed
