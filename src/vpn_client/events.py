"""Append-only event store backed by a single JSON file.

The event log is the source of truth. Status is derived by replaying events.

The whole array is rewritten on every append. There is no locking and no
atomic rename, so two concurrent invocations can lose an update.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from .exceptions import EventLogError
from .models import Event

logger = logging.getLogger(__name__)

_EVENT_LIST = TypeAdapter(list[Event])


class EventStore:
    """Append-only event log backed by a JSON array file."""

    def __init__(self, path: Path):
        """Initialize event store.

        Args:
            path: Path to the events file. Created on first append.
        """
        self.path = Path(path)

    def load(self) -> list[Event]:
        """Read all events from the log, in insertion order.

        Returns:
            List of events; empty if the file is missing or blank.

        Raises:
            EventLogError: If the file exists but cannot be decoded.
        """
        if not self.path.exists():
            logger.debug(f"No event log at {self.path}")
            return []

        try:
            raw = self.path.read_bytes()
        except OSError as e:
            raise EventLogError(self.path, str(e)) from e

        if not raw.strip():
            return []

        try:
            events = _EVENT_LIST.validate_json(raw)
        except ValidationError as e:
            raise EventLogError(self.path, str(e)) from e

        logger.debug(f"Loaded {len(events)} events from {self.path}")
        return events

    def append(self, event: Event) -> Event:
        """Append event to log. Returns the event."""
        events = self.load()
        events.append(event)
        self._write(events)
        logger.info(f"Appended {event.status.value} at {event.timestamp}")
        return event

    def count(self) -> int:
        """Count events."""
        return len(self.load())

    def _write(self, events: list[Event]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(_EVENT_LIST.dump_json(events, indent=2))
