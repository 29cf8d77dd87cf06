"""Time parsing utilities for history date bounds.

Supports:
- ISO format: "2025-01-15"
- Relative: "7 days ago", "2 weeks ago", "1 month ago"
- Named: "today", "yesterday", "last week", "last month"
"""

import re
from datetime import date, datetime, timedelta, timezone

from dateutil import parser as dateparser
from dateutil.relativedelta import relativedelta


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)

# Last millisecond a datetime can hold (9999-12-31T23:59:59.999Z)
MAX_TIMESTAMP_MS = (datetime.max.replace(tzinfo=timezone.utc) - EPOCH) // _ONE_MS


def ms_to_datetime(ms: int) -> datetime:
    """Convert epoch milliseconds to a UTC datetime."""
    return EPOCH + ms * _ONE_MS


def datetime_to_ms(dt: datetime) -> int:
    """Convert a datetime to epoch milliseconds (naive values are taken as UTC)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (dt - EPOCH) // _ONE_MS


def ms_to_date(ms: int) -> date:
    """Calendar date (UTC) an epoch-millisecond timestamp falls on."""
    return ms_to_datetime(ms).date()


def parse_date_reference(ref: str, now: datetime | None = None) -> date:
    """Parse a human-friendly date reference into a calendar date.

    Args:
        ref: Date reference string
        now: Reference point for relative dates (default: utcnow)

    Returns:
        The UTC calendar date the reference points at

    Raises:
        ValueError: If the reference cannot be parsed

    Examples:
        >>> parse_date_reference("2023-04-30")
        datetime.date(2023, 4, 30)

        >>> parse_date_reference("yesterday")  # relative to now
        datetime.date(...)
    """
    if now is None:
        now = datetime.now(timezone.utc)

    ref = ref.strip()
    key = ref.lower()

    if key == "today":
        return now.date()
    if key == "yesterday":
        return (now - timedelta(days=1)).date()
    if key == "last week":
        return (now - timedelta(weeks=1)).date()
    if key == "last month":
        return (now - relativedelta(months=1)).date()
    if key == "last year":
        return (now - relativedelta(years=1)).date()

    ago_match = re.fullmatch(r"(\d+)\s*(day|week|month|year)s?\s*ago", key)
    if ago_match:
        amount = int(ago_match.group(1))
        unit = ago_match.group(2)

        try:
            if unit == "day":
                return (now - timedelta(days=amount)).date()
            elif unit == "week":
                return (now - timedelta(weeks=amount)).date()
            elif unit == "month":
                return (now - relativedelta(months=amount)).date()
            else:
                return (now - relativedelta(years=amount)).date()
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Date out of range: {ref}") from e

    # Fall back to dateutil for ISO dates
    try:
        parsed = dateparser.isoparse(ref)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Cannot parse date: {ref}") from e

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()
