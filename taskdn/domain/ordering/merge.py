"""Kanban column merge.

A kanban column is the swimlane order filtered by status. When the user
reorders a column the new column order has to be written back into the
swimlane order without disturbing cards of other columns.

The merge keeps the slots of as many cards as it can. The cards that stay
put are the longest run of the column's previous cards that the new
column order still lists in swimlane order. Every other card of the new
column (a card dragged within the column, or one moving in from another
column) is lifted out and dropped right before the card that follows it
in the new column order, or right after the card before it when it ends
the column. Cards of other columns never move.

    swimlane  [t1 t2 t3 t4]   ready = {t1, t3}, done = {t2, t4}
    ready     [t3 t1]         t1 stays, t3 goes before it
    result    [t3 t1 t2 t4]

    ready     [t1 t3]         both stay
    result    [t1 t2 t3 t4]   unchanged

When no previous card of the column is left to hold a slot (an empty
column receiving a card), the column goes in as one block where its first
card sits in the swimlane, or at the end.

This assumes each task sits in exactly one column at a time.
"""

from collections.abc import Collection, Sequence

from .items import OrderedItem, TaskRef


def _stable_cards(
    column: Sequence[str],
    positions: dict[str, int],
    column_members: Collection[str],
) -> set[str]:
    """Longest subsequence of ``column`` already in swimlane order.

    Only previous column members take part. Ties go to the run ending
    latest in the new column order.
    """
    candidates = [task_id for task_id in column if task_id in column_members and task_id in positions]
    lengths: list[int] = []
    previous: list[int | None] = []
    for k, task_id in enumerate(candidates):
        best, link = 1, None
        for j in range(k):
            if positions[candidates[j]] < positions[task_id] and lengths[j] + 1 >= best:
                best, link = lengths[j] + 1, j
        lengths.append(best)
        previous.append(link)

    if not candidates:
        return set()
    longest = max(lengths)
    index: int | None = max(k for k, length in enumerate(lengths) if length == longest)
    stable: set[str] = set()
    while index is not None:
        stable.add(candidates[index])
        index = previous[index]
    return stable


def _insert_block(swimlane: Sequence[OrderedItem], column: Sequence[str]) -> tuple[OrderedItem, ...]:
    new_ids = set(column)

    def in_column(item: OrderedItem) -> bool:
        return isinstance(item, TaskRef) and item.id in new_ids

    anchor = next((i for i, item in enumerate(swimlane) if in_column(item)), None)
    others = [item for item in swimlane if not in_column(item)]
    if anchor is None:
        position = len(others)
    else:
        position = sum(1 for item in swimlane[:anchor] if not in_column(item))

    block = [TaskRef(task_id) for task_id in column]
    return tuple(others[:position] + block + others[position:])


def merge_column_order(
    swimlane: Sequence[OrderedItem],
    column_order: Sequence[str],
    column_members: Collection[str] = (),
) -> tuple[OrderedItem, ...]:
    """Write a reordered column back into its swimlane order.

    Args:
        swimlane: Current swimlane order (may contain headings).
        column_order: New order of the column's task ids. Ids moving in
            from another column are included here.
        column_members: Task ids that were in the column before the drop.
            Only these can keep their slot; ids moving in are always placed
            next to their new neighbours.

    Returns:
        The new swimlane order. Equal to ``swimlane`` when the column order
        did not change.
    """
    column = list(dict.fromkeys(column_order))
    positions = {item.id: i for i, item in enumerate(swimlane) if isinstance(item, TaskRef)}
    stable = _stable_cards(column, positions, column_members)
    if not stable:
        return _insert_block(swimlane, column)

    moving = set(column) - stable
    result = [item for item in swimlane if not (isinstance(item, TaskRef) and item.id in moving)]
    last_stable = max(i for i, task_id in enumerate(column) if task_id in stable)

    # Tail of the column: each card follows the one before it
    for index in range(last_stable + 1, len(column)):
        after = result.index(TaskRef(column[index - 1]))
        result.insert(after + 1, TaskRef(column[index]))

    # Everything else precedes the card after it, placed back to front
    for index in range(last_stable - 1, -1, -1):
        if column[index] in stable:
            continue
        before = result.index(TaskRef(column[index + 1]))
        result.insert(before, TaskRef(column[index]))

    return tuple(result)
