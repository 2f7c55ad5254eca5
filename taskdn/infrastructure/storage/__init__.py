"""Storage infrastructure for taskdn.

Provides the in-memory entity store and JSON loaders for seed data and
gesture scripts, using Result monads for explicit error handling.
"""

from taskdn.infrastructure.storage.json_storage import JsonStorage
from taskdn.infrastructure.storage.memory_store import InMemoryEntityStore
from taskdn.infrastructure.storage.repositories import (
    AppDataRepository,
    GestureScriptRepository,
)

__all__ = [
    "JsonStorage",
    "InMemoryEntityStore",
    "AppDataRepository",
    "GestureScriptRepository",
]
