"""Shared test fixtures."""

import itertools
import sys
from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from exocortex.domain.models import Event  # noqa: E402
from exocortex.localtime import to_ms  # noqa: E402

UTC_TZ = ZoneInfo("UTC")
NEW_YORK = ZoneInfo("America/New_York")

_ids = itertools.count(1)


def at(day: str | date, hour: int = 0, minute: int = 0, tz=UTC_TZ) -> int:
    """Epoch ms of a local wall-clock time."""
    d = date.fromisoformat(day) if isinstance(day, str) else day
    return to_ms(datetime(d.year, d.month, d.day, hour, minute, tzinfo=tz))


def make_event(
    end_time: int,
    category: str = "Work",
    happiness: float = 0.5,
    wakefulness: float = 0.5,
    health: float = 0.5,
    notes: str | None = None,
    event_id: str | None = None,
) -> Event:
    return Event(
        id=event_id or f"evt-{next(_ids)}",
        end_time=end_time,
        category=category,
        happiness=happiness,
        wakefulness=wakefulness,
        health=health,
        notes=notes,
    )


class FakeEventStore:
    """In-memory EventStore returning events in insertion order."""

    def __init__(self, events: list[Event]):
        self.events = list(events)

    def get_all_events(self) -> list[Event]:
        return list(self.events)

    def get_events_in_range(self, start_ms: int, end_ms: int) -> list[Event]:
        return [e for e in self.events if start_ms <= e.end_time <= end_ms]


@pytest.fixture
def utc():
    return UTC_TZ


@pytest.fixture
def sleep_then_work():
    """Day1: Sleep ending 09:00, Work ending 17:00."""
    return [
        make_event(at("2024-03-14", 9), "Sleep", happiness=0.4, wakefulness=0.1, health=0.6),
        make_event(at("2024-03-14", 17), "Work", happiness=0.8, wakefulness=0.9, health=0.7),
    ]


@pytest.fixture
def valid_event_record():
    """A fully valid raw event record for validation testing."""
    return {
        "id": "evt-123",
        "end_time": at("2024-03-14", 9),
        "category": "Sleep",
        "happiness": 0.6,
        "wakefulness": 0.2,
        "health": 0.8,
        "notes": "  slept well  ",
    }
