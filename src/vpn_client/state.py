"""Status resolution from events.

Replays the event log to derive the current tunnel status. Pure: takes the
event sequence as a value and never touches storage.
"""

from collections.abc import Sequence

from .models import Event, Status, is_terminal


def resolve_status(events: Sequence[Event]) -> Status | None:
    """Derive the current status from the log.

    Evaluated in log order (last element = most recently appended), not by
    timestamp. A trailing FAILED rolls back to the event right before it when
    that event is terminal; anything else behind a FAILED leaves the status
    unknown. The lookback is one step only.

    Args:
        events: Full event log

    Returns:
        The current status, or None when it cannot be determined.
    """
    if not events:
        return None

    last = events[-1]
    if last.status is not Status.FAILED:
        return last.status

    if len(events) >= 2 and is_terminal(events[-2].status):
        return events[-2].status

    return None
