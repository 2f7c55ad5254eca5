"""Pure order reconciliation combinators.

All functions in this module are pure - no I/O, no side effects.
They take sequences in and return new tuples.
"""

from collections.abc import Collection, Hashable, Iterable, Sequence
from typing import NamedTuple, TypeVar

from .items import HeadingRef, OrderedItem, TaskRef

T = TypeVar("T", bound=Hashable)


def _unique(values: Iterable[T]) -> list[T]:
    seen: set[T] = set()
    result: list[T] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


# =============================================================================
# Reconciliation
# =============================================================================


def reconcile(membership: Sequence[str], manual_order: Sequence[str]) -> tuple[str, ...]:
    """Derive the display order of a container.

    Keeps the relative order of ids present in both inputs, drops ids the
    store no longer reports, and appends ids the manual order has never
    seen, in store order. With an empty manual order the membership is
    returned as is.

    Args:
        membership: Ids the store currently reports for the container.
        manual_order: Last known user-arranged order.

    Returns:
        The effective order. Equal inputs always give an equal tuple.
    """
    members = _unique(membership)
    if not manual_order:
        return tuple(members)

    member_set = set(members)
    preserved = [i for i in _unique(manual_order) if i in member_set]
    seen = set(preserved)
    appended = [i for i in members if i not in seen]
    return tuple(preserved + appended)


class Reconciled(NamedTuple):
    """Outcome of reconciling a mixed task/heading sequence."""

    items: tuple[OrderedItem, ...]
    dangling: tuple[str, ...]
    appended: tuple[str, ...]

    @property
    def drifted(self) -> bool:
        return bool(self.dangling or self.appended)


def reconcile_items(
    membership: Sequence[str],
    items: Sequence[OrderedItem],
    heading_ids: Collection[str] = (),
) -> Reconciled:
    """Reconcile a sequence that may interleave headings with tasks.

    Tasks follow ``reconcile``. Headings are not store members: a heading
    is kept at its position as long as the container still owns it, and
    an owned heading missing from the sequence is appended.

    Args:
        membership: Task ids the store reports for the container.
        items: Current manual sequence.
        heading_ids: Ids of headings the container owns.

    Returns:
        Reconciled items plus the dangling and appended task ids.
    """
    task_order = [item.id for item in items if isinstance(item, TaskRef)]
    effective_tasks = reconcile(membership, task_order)
    keep = set(effective_tasks)

    result: list[OrderedItem] = []
    seen: set[OrderedItem] = set()
    dangling: list[str] = []
    for item in items:
        if item in seen:
            continue
        if isinstance(item, TaskRef):
            if item.id not in keep:
                dangling.append(item.id)
                continue
        elif item.id not in heading_ids:
            continue
        seen.add(item)
        result.append(item)

    appended = tuple(i for i in effective_tasks if TaskRef(i) not in seen)
    result.extend(TaskRef(i) for i in appended)
    result.extend(
        HeadingRef(h) for h in heading_ids if HeadingRef(h) not in seen
    )
    return Reconciled(items=tuple(result), dangling=tuple(dangling), appended=appended)


# =============================================================================
# Sequence edits
# =============================================================================


def array_move(items: Sequence[T], old_index: int, new_index: int) -> tuple[T, ...]:
    """Move the element at ``old_index`` so it ends up at ``new_index``."""
    result = list(items)
    result.insert(new_index, result.pop(old_index))
    return tuple(result)


def without(items: Sequence[T], value: T) -> tuple[T, ...]:
    return tuple(i for i in items if i != value)


def insert_before(
    items: Sequence[T],
    value: T,
    anchor: T | None,
) -> tuple[tuple[T, ...], bool]:
    """Insert ``value`` before ``anchor``, or append it.

    Any existing occurrence of ``value`` is removed first, so the result
    never holds it twice.

    Returns:
        The new sequence and whether a given anchor was missing (stale).
    """
    base = list(without(items, value))
    if anchor is None:
        base.append(value)
        return tuple(base), False
    if anchor not in base:
        base.append(value)
        return tuple(base), True
    base.insert(base.index(anchor), value)
    return tuple(base), False


def insert_index(items: Sequence[T], anchor: T) -> int:
    """Index of ``anchor``, or the length of ``items`` when absent."""
    try:
        return list(items).index(anchor)
    except ValueError:
        return len(items)
