"""Base domain event.

Events are immutable records of an order or entity change that already
happened. The coordinators return them from every mutating operation and
hand them to subscribers, which is how views learn that they have to
re-render.
"""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, Field


class DomainEvent(BaseModel):
    """Base class for all domain events.

    Each event has a unique ID and the UTC time it was raised.
    """

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = {"frozen": True}

    @property
    def kind(self) -> str:
        """Short event name used in logs and CLI output."""
        return type(self).__name__
