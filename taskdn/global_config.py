"""Global configuration storage for taskdn.

Stores user preferences (default data file, log level, kanban columns)
in ~/.taskdn/config.json. Set TASKDN_HOME to use another directory.
"""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from taskdn.domain.entity import DEFAULT_COLUMN_ORDER, TaskStatus
from taskdn.domain.shared import Result, unwrap_or
from taskdn.infrastructure.storage.json_storage import JsonStorage


class OrderingConfig(BaseModel):
    """User preferences for the ordering CLI."""

    data_file: Optional[str] = None
    log_level: str = "WARNING"
    kanban_hidden_statuses: list[TaskStatus] = Field(
        default_factory=lambda: [TaskStatus.DONE, TaskStatus.DROPPED]
    )
    column_order: list[TaskStatus] = Field(default_factory=lambda: list(DEFAULT_COLUMN_ORDER))

    def visible_columns(self) -> list[TaskStatus]:
        """Kanban columns to show, in configured order."""
        hidden = set(self.kanban_hidden_statuses)
        return [status for status in self.column_order if status not in hidden]


def get_config_dir() -> Path:
    """Get the taskdn config directory."""
    override = os.environ.get("TASKDN_HOME")
    config_dir = Path(override) if override else Path.home() / ".taskdn"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_file() -> Path:
    return get_config_dir() / "config.json"


def get_global_config() -> OrderingConfig:
    """Load global configuration, falling back to defaults."""
    data = unwrap_or(JsonStorage().load_json(get_config_file()), None)
    if data is not None:
        try:
            return OrderingConfig.model_validate(data)
        except ValidationError:
            pass
    return OrderingConfig()  # defaults


def save_global_config(config: OrderingConfig) -> Result[None, str]:
    """Save global configuration."""
    return JsonStorage().save_json(get_config_file(), config.model_dump(mode="json"))
