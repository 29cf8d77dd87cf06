"""Connection controller - orchestrates event store, status and connector."""

import logging
from collections.abc import Callable

from .connectors import Connector
from .constants import NO_EVENTS_MESSAGE
from .events import EventStore
from .exceptions import ConfigurationError, ConnectorError
from .models import Event, Status, utc_now_ms
from .query import HistoryFilter, history_as_json, render_history, run_history
from .state import resolve_status

logger = logging.getLogger(__name__)


class ConnectionController:
    """Runs the status, up, down and history commands against one log.

    Each command is a single pass. up/down short-circuit when the resolved
    status already matches; otherwise they record the transitional event,
    call the connector, and record the outcome. status and history never
    touch the connector, so it may be omitted for read-only use.
    """

    def __init__(
        self,
        event_store: EventStore,
        connector: Connector | None = None,
        echo: Callable[[str], None] = print,
        now_ms: Callable[[], int] = utc_now_ms,
    ):
        self.event_store = event_store
        self.connector = connector
        self.echo = echo
        self.now_ms = now_ms

    def current_status(self) -> Status | None:
        """Resolve status from the full log."""
        return resolve_status(self.event_store.load())

    def status(self) -> Status | None:
        """Print the current status."""
        current = self.current_status()
        if current is None:
            self.echo(NO_EVENTS_MESSAGE)
        else:
            self.echo(f"Status: {current.value}")
        return current

    def up(self) -> Status:
        """Bring the tunnel up unless it already is."""
        return self._transition(
            target=Status.UP,
            transitional=Status.STARTING,
            progress="Starting...",
            action="start",
        )

    def down(self) -> Status:
        """Bring the tunnel down unless it already is."""
        return self._transition(
            target=Status.DOWN,
            transitional=Status.STOPPING,
            progress="Stopping...",
            action="stop",
        )

    def history(self, history_filter: HistoryFilter | None = None, as_json: bool = False) -> list[Event]:
        """Print filtered history, one line per event or as a JSON array."""
        events = run_history(self.event_store.load(), history_filter)
        if as_json:
            self.echo(history_as_json(events))
        else:
            for line in render_history(events):
                self.echo(line)
        return events

    def _transition(
        self,
        target: Status,
        transitional: Status,
        progress: str,
        action: str,
    ) -> Status:
        if self.connector is None:
            raise ConfigurationError(f"No connector available to {action} the tunnel")

        current = self.current_status()
        if current is target:
            self.echo(f"Already {target.value}")
            return target

        logger.info(f"Transition {current.value if current else 'unknown'} -> {target.value}")
        self.echo(progress)
        self.event_store.append(Event(status=transitional, timestamp=self.now_ms()))

        try:
            success = getattr(self.connector, action)()
        except ConnectorError as e:
            logger.error(f"Connector error: {e}")
            success = False

        outcome = target if success else Status.FAILED
        self.event_store.append(Event(status=outcome, timestamp=self.now_ms()))
        self.echo(f"Status: {outcome.value}")
        return outcome
