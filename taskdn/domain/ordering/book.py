"""Order book: the in-memory order state.

Maps an order key (see ``containers.order_key``) to the manual sequence
of items and to the headings the container owns. The book is a plain
state holder; the rules for changing it live in the coordinator.
"""

from collections.abc import Hashable, Iterable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from taskdn.domain.entity.models import Heading

from .containers import Container
from .items import OrderedItem

K = TypeVar("K", bound=Hashable)
V = TypeVar("V", bound=Hashable)


@dataclass(frozen=True)
class Snapshot(Generic[K, V]):
    """Saved sequences for a set of keys. ``None`` means no entry yet."""

    entries: dict[K, tuple[V, ...] | None]


@dataclass
class SequenceBook(Generic[K, V]):
    """Keyed ordered sequences with snapshot/restore for rollback."""

    sequences: dict[K, tuple[V, ...]] = field(default_factory=dict)

    def get(self, key: K) -> tuple[V, ...] | None:
        return self.sequences.get(key)

    def has(self, key: K) -> bool:
        return key in self.sequences

    def set(self, key: K, values: Iterable[V]) -> bool:
        """Store a sequence. Returns False if it was already equal."""
        new = tuple(values)
        if self.sequences.get(key) == new:
            return False
        self.sequences[key] = new
        return True

    def snapshot(self, keys: Iterable[K]) -> Snapshot[K, V]:
        return Snapshot({key: self.sequences.get(key) for key in keys})

    def restore(self, snapshot: Snapshot[K, V]) -> None:
        for key, values in snapshot.entries.items():
            if values is None:
                self.sequences.pop(key, None)
            else:
                self.sequences[key] = values

    def keys(self) -> list[K]:
        return list(self.sequences)


@dataclass
class OrderBook(SequenceBook[Container, OrderedItem]):
    """Task/heading sequences per container plus each container's headings."""

    headings: dict[Container, dict[str, Heading]] = field(default_factory=dict)

    def headings_for(self, key: Container) -> dict[str, Heading]:
        return self.headings.get(key, {})

    def add_heading(self, key: Container, heading: Heading) -> None:
        self.headings.setdefault(key, {})[heading.id] = heading

    def remove_heading(self, key: Container, heading_id: str) -> Heading | None:
        return self.headings.get(key, {}).pop(heading_id, None)

    def find_heading(self, heading_id: str) -> Heading | None:
        for owned in self.headings.values():
            if heading_id in owned:
                return owned[heading_id]
        return None
