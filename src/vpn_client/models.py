"""Core data models for the VPN client.

Uses Pydantic v2 for validation and JSON encoding of the event log.
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .timeutil import MAX_TIMESTAMP_MS, datetime_to_ms, ms_to_datetime


def utc_now_ms() -> int:
    """Get current UTC time as epoch milliseconds."""
    return datetime_to_ms(datetime.now(timezone.utc))


class Status(str, Enum):
    """Lifecycle status of the tunnel."""

    STARTING = "STARTING"
    UP = "UP"
    STOPPING = "STOPPING"
    DOWN = "DOWN"
    FAILED = "FAILED"


TERMINAL_STATUSES = frozenset({Status.UP, Status.DOWN})
TRANSITIONAL_STATUSES = frozenset({Status.STARTING, Status.STOPPING})


def is_terminal(status: Status) -> bool:
    """True for a stable, successfully reached state (UP or DOWN)."""
    return status in TERMINAL_STATUSES


def is_transitional(status: Status) -> bool:
    """True for an in-progress attempt (STARTING or STOPPING)."""
    return status in TRANSITIONAL_STATUSES


class Event(BaseModel):
    """A single timestamped status record in the event log.

    Events carry no identifier: their position in the log and their
    timestamp are all there is.
    """

    model_config = ConfigDict(frozen=True)

    status: Status
    timestamp: int = Field(strict=True, ge=0, le=MAX_TIMESTAMP_MS)  # epoch milliseconds

    @classmethod
    def now(cls, status: Status) -> "Event":
        """Create an event stamped with the current UTC time."""
        return cls(status=status, timestamp=utc_now_ms())

    @property
    def occurred_at(self) -> datetime:
        """Timestamp as a timezone-aware UTC datetime."""
        return ms_to_datetime(self.timestamp)
