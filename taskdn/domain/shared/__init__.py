"""Shared domain building blocks.

- Result monad for explicit error handling
- Base domain event

Example usage:
    >>> from taskdn.domain.shared import Ok, Err, is_ok
    >>> result = coordinator.reorder_within_container(key, ["t2", "t1"])
    >>> if is_ok(result):
    ...     events = result.value
"""

from taskdn.domain.shared.events import DomainEvent
from taskdn.domain.shared.result import (
    Err,
    Ok,
    Result,
    flat_map,
    is_err,
    is_ok,
    map_result,
    unwrap_or,
)

__all__ = [
    # Result monad
    "Ok",
    "Err",
    "Result",
    "is_ok",
    "is_err",
    "map_result",
    "flat_map",
    "unwrap_or",
    # Domain events
    "DomainEvent",
]
