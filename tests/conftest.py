"""Shared test fixtures and helpers for vpn_client tests."""

import json
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from vpn_client.events import EventStore
from vpn_client.models import Event, Status


# --- Fixtures ---


@pytest.fixture
def temp_dir():
    """Provide a temporary directory cleaned up after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def events_file(temp_dir):
    """Path to a not-yet-created events file."""
    return temp_dir / "events.json"


@pytest.fixture
def store(events_file):
    """Provide an EventStore over an empty log."""
    return EventStore(events_file)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep the developer's own configuration out of tests."""
    for name in (
        "VPN_CLIENT_EVENTS_FILE",
        "VPN_CLIENT_UP_CMD",
        "VPN_CLIENT_DOWN_CMD",
        "VPN_CLIENT_COMMAND_TIMEOUT",
        "VPN_CLIENT_FAILURE_RATE",
    ):
        monkeypatch.delenv(name, raising=False)


# --- Helper Functions (not fixtures) ---


def to_ms(dt: datetime) -> int:
    """Epoch milliseconds for a datetime (naive values are UTC)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def minutes_ago(minutes: int) -> int:
    """Epoch milliseconds for N minutes before now."""
    return to_ms(datetime.now(timezone.utc) - timedelta(minutes=minutes))


def make_event(status: Status, ts: int | datetime) -> Event:
    """Helper to create test events from a status and ms or datetime."""
    if isinstance(ts, datetime):
        ts = to_ms(ts)
    return Event(status=status, timestamp=ts)


def make_log(*statuses: Status, start: int = 1_700_000_000_000, step: int = 60_000) -> list[Event]:
    """Events with the given statuses, one minute apart."""
    return [make_event(s, start + i * step) for i, s in enumerate(statuses)]


def write_events(path: Path, events: list[Event]) -> None:
    """Write events the way an external writer would: a plain JSON array."""
    path.write_text(json.dumps([{"status": e.status.value, "timestamp": e.timestamp} for e in events]))
