"""Items held in an order sequence.

An order sequence mixes tasks and headings. Inside the domain each entry
is a tagged value (``TaskRef`` or ``HeadingRef``); outside of it (drag ids,
CLI arguments, scripts) an entry is a plain string where headings carry
the ``heading:`` prefix. Decoding a string is total: every string is
exactly one of the two.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Union

HEADING_ID_PREFIX = "heading:"


@dataclass(frozen=True, slots=True)
class TaskRef:
    id: str

    def __str__(self) -> str:
        return encode_item(self)


@dataclass(frozen=True, slots=True)
class HeadingRef:
    id: str

    def __str__(self) -> str:
        return encode_item(self)


OrderedItem = Union[TaskRef, HeadingRef]  # noqa: UP007


def is_heading_id(value: str) -> bool:
    """Check if an encoded id represents a heading."""
    return value.startswith(HEADING_ID_PREFIX)


def to_heading_id(heading_id: str) -> str:
    """Create the prefixed form of a heading id."""
    return f"{HEADING_ID_PREFIX}{heading_id}"


def parse_heading_id(value: str) -> str:
    """Strip the heading prefix from an encoded heading id."""
    return value[len(HEADING_ID_PREFIX):]


def decode_item(value: str) -> OrderedItem:
    """Decode an external id into a task or heading reference."""
    if is_heading_id(value):
        return HeadingRef(parse_heading_id(value))
    return TaskRef(value)


def encode_item(item: OrderedItem) -> str:
    """Encode a reference into its external string form.

    Raises:
        ValueError: If a task id itself starts with the heading prefix,
            which would not decode back to a task.
    """
    if isinstance(item, HeadingRef):
        return to_heading_id(item.id)
    if is_heading_id(item.id):
        raise ValueError(f"Task id collides with heading prefix: {item.id!r}")
    return item.id


def as_item(value: "str | OrderedItem") -> OrderedItem:
    """Accept either an encoded string or a reference."""
    if isinstance(value, (TaskRef, HeadingRef)):
        return value
    return decode_item(value)


def as_items(values: Iterable["str | OrderedItem"]) -> tuple[OrderedItem, ...]:
    return tuple(as_item(v) for v in values)


def task_ids(items: Sequence[OrderedItem]) -> tuple[str, ...]:
    """Return the task ids of a mixed sequence, in order."""
    return tuple(item.id for item in items if isinstance(item, TaskRef))


def encode_items(items: Sequence[OrderedItem]) -> list[str]:
    return [encode_item(item) for item in items]
