"""Repositories for seed data and gesture scripts.

Both wrap ``JsonStorage`` and validate with pydantic, returning Result
types. Order state is never written: it lives only in memory. Entity data
can be written back after a replay changed task references or statuses.
"""

from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from taskdn.application.gestures import Gesture
from taskdn.domain.entity import AppData
from taskdn.domain.shared import Err, Ok, Result, flat_map
from taskdn.infrastructure.storage.json_storage import JsonStorage

_GESTURES = TypeAdapter(list[Gesture])


class AppDataRepository:
    """Reads and writes ``AppData`` snapshots (areas, projects, tasks)."""

    def __init__(self, storage: JsonStorage | None = None) -> None:
        self._storage = storage or JsonStorage()

    def load(self, path: Path) -> Result[AppData, str]:
        """Load and validate a seed data file.

        Args:
            path: JSON file with ``areas``, ``projects`` and ``tasks`` lists.

        Returns:
            Ok(AppData) if valid, Err(str) otherwise.
        """

        def validate(raw: object) -> Result[AppData, str]:
            try:
                return Ok(AppData.model_validate(raw))
            except ValidationError as e:
                return Err(f"Invalid data in {path}: {e}")

        return flat_map(self._storage.load_json(path), validate)

    def save(self, path: Path, data: AppData) -> Result[None, str]:
        """Write entities with the same camelCase keys ``load`` accepts."""
        return self._storage.save_json(path, data.model_dump(mode="json", by_alias=True, exclude_none=True))


class GestureScriptRepository:
    """Loads a list of recorded drag gestures from JSON."""

    def __init__(self, storage: JsonStorage | None = None) -> None:
        self._storage = storage or JsonStorage()

    def load(self, path: Path) -> Result[list[Gesture], str]:
        def validate(raw: object) -> Result[list[Gesture], str]:
            try:
                return Ok(_GESTURES.validate_python(raw))
            except ValidationError as e:
                return Err(f"Invalid gesture script {path}: {e}")

        return flat_map(self._storage.load_json(path), validate)
