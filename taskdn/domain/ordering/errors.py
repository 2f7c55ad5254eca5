"""Ordering error values.

Only ``StoreRejected`` and ``InvalidMove`` abort an operation. The other
two describe drift that the coordinator heals on its own; they are
logged, never returned as failures.
"""

from dataclasses import dataclass
from typing import Union

from taskdn.domain.entity.store import NotFound


@dataclass(frozen=True)
class StaleAnchor:
    """The insertion anchor vanished from the target; the item was appended."""

    container: str
    anchor_id: str

    @property
    def message(self) -> str:
        return f"Anchor {self.anchor_id} not in {self.container}, appended instead"


@dataclass(frozen=True)
class DanglingOrderEntry:
    """Order state referenced entities the store no longer reports."""

    container: str
    entity_ids: tuple[str, ...]

    @property
    def message(self) -> str:
        return f"Dropped {len(self.entity_ids)} dangling id(s) from {self.container}: {', '.join(self.entity_ids)}"


@dataclass(frozen=True)
class StoreRejected:
    """The store refused a mutation; staged order changes were rolled back."""

    entity_id: str
    operation: str
    cause: NotFound

    @property
    def message(self) -> str:
        return f"{self.operation} rejected for {self.entity_id}: {self.cause.message}"


@dataclass(frozen=True)
class InvalidMove:
    """The request cannot be expressed as a move (nothing was changed)."""

    reason: str

    @property
    def message(self) -> str:
        return self.reason


OrderError = Union[StoreRejected, InvalidMove]  # noqa: UP007
