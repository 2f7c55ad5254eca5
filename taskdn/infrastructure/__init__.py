"""Infrastructure layer for taskdn.

Concrete implementations of the store protocols the application layer
consumes, plus file I/O wrapped in Result monads.

Exports:
    Storage:
        - JsonStorage: Low-level JSON file I/O
        - InMemoryEntityStore: Entity store over an AppData snapshot
        - AppDataRepository: Seed data loading
        - GestureScriptRepository: Gesture script loading
"""

from taskdn.infrastructure.storage import (
    AppDataRepository,
    GestureScriptRepository,
    InMemoryEntityStore,
    JsonStorage,
)

__all__ = [
    # Storage
    "JsonStorage",
    "InMemoryEntityStore",
    "AppDataRepository",
    "GestureScriptRepository",
]
