"""Read-only history queries over the event log.

Filtering and sorting are pure functions of the event sequence; the stored
log is never touched.
"""

import logging
from collections.abc import Sequence
from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, TypeAdapter

from .constants import NO_EVENTS_MESSAGE
from .models import Event
from .timeutil import ms_to_date

logger = logging.getLogger(__name__)

SortOrder = Literal["asc", "desc"]

_EVENT_LIST = TypeAdapter(list[Event])


class HistoryFilter(BaseModel):
    """Filter and sort options for the history command.

    - status: exact match against the status name; unknown names match nothing
    - date_from / date_to: inclusive UTC calendar-date bounds, either optional
    - sort: order of the filtered result by timestamp
    """

    model_config = ConfigDict(frozen=True)

    status: str | None = None
    date_from: date | None = None
    date_to: date | None = None
    sort: SortOrder = "asc"


def run_history(events: Sequence[Event], history_filter: HistoryFilter | None = None) -> list[Event]:
    """Select and order the events to display.

    Args:
        events: Full event log
        history_filter: Filter/sort options (default: everything, ascending)

    Returns:
        New list of matching events ordered by timestamp.
    """
    if history_filter is None:
        history_filter = HistoryFilter()

    result = list(events)

    if history_filter.status is not None:
        result = [e for e in result if e.status.value == history_filter.status]

    if history_filter.date_from is not None:
        result = [e for e in result if ms_to_date(e.timestamp) >= history_filter.date_from]

    if history_filter.date_to is not None:
        result = [e for e in result if ms_to_date(e.timestamp) <= history_filter.date_to]

    result.sort(key=lambda e: e.timestamp, reverse=history_filter.sort == "desc")

    logger.debug(f"History: {len(result)} of {len(events)} events match {history_filter!r}")
    return result


def render_history(events: Sequence[Event]) -> list[str]:
    """One "Status: X" line per event, or the no-events message."""
    if not events:
        return [NO_EVENTS_MESSAGE]
    return [f"Status: {e.status.value}" for e in events]


def history_as_json(events: Sequence[Event]) -> str:
    """Render events in the persisted JSON shape."""
    return _EVENT_LIST.dump_json(list(events), indent=2).decode()
