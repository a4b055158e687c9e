"""Read-only views over events: day grouping, per-day category summaries,
search, and the category hours histogram."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, tzinfo

from exocortex.domain.models import Event
from exocortex.intervals import Interval, group_by_day
from exocortex.localtime import DATE_KEY_FORMAT, iter_days
from shared.exceptions import InvalidDateRangeError


@dataclass(frozen=True)
class DayEvents:
    date_key: str
    events: list[Event] = field(default_factory=list)


@dataclass
class CategorySummary:
    category: str
    with_notes: list[Interval] = field(default_factory=list)
    without_notes: list[Interval] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.with_notes) + len(self.without_notes)


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    hours: float
    count: int


def group_days(
    events: Sequence[Event],
    start: date,
    end: date,
    tz: tzinfo,
    include_empty: bool = True,
) -> list[DayEvents]:
    """One DayEvents per local date in [start, end], ascending.

    Events outside the range are ignored. With include_empty=False, only
    dates that have events are returned.
    """
    if start > end:
        raise InvalidDateRangeError(start.isoformat(), end.isoformat())
    by_day = group_by_day(events, tz)
    days = []
    for day in iter_days(start, end):
        key = day.strftime(DATE_KEY_FORMAT)
        day_events = by_day.get(key, [])
        if day_events or include_empty:
            days.append(DayEvents(date_key=key, events=list(day_events)))
    return days


def summarize_categories(intervals: Iterable[Interval]) -> list[CategorySummary]:
    """Group one day's intervals by trimmed category, in first-seen order."""
    summaries: dict[str, CategorySummary] = {}
    for interval in intervals:
        name = interval.event.category_label
        summary = summaries.setdefault(name, CategorySummary(category=name))
        if interval.event.notes:
            summary.with_notes.append(interval)
        else:
            summary.without_notes.append(interval)
    return list(summaries.values())


def search_events(events: Iterable[Event], query: str) -> list[Event]:
    """Events whose notes or category contain `query` (case-insensitive), newest first."""
    needle = query.strip().casefold()
    if not needle:
        return []
    matches = [
        e
        for e in events
        if needle in e.category.casefold() or (e.notes and needle in e.notes.casefold())
    ]
    matches.sort(key=lambda e: e.end_time, reverse=True)
    return matches


def category_histogram(intervals: Iterable[Interval], limit: int = 10) -> list[CategoryTotal]:
    """Total resolved hours and event count per trimmed category, largest first."""
    totals: dict[str, list[float]] = {}
    for interval in intervals:
        entry = totals.setdefault(interval.event.category_label, [0.0, 0])
        entry[0] += interval.duration_hours
        entry[1] += 1
    ranked = sorted(totals.items(), key=lambda item: (-item[1][0], item[0]))
    return [
        CategoryTotal(category=name, hours=hours, count=int(count))
        for name, (hours, count) in ranked[:limit]
    ]
