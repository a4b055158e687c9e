"""Interval resolver: end-time-only events -> explicit [start, end) intervals.

Only end times are recorded, so each event is taken to cover the stretch from
the previous event's end up to its own end. The first event of a run starts at
a known predecessor end when the caller has one, otherwise at local midnight
of its own day.

Input must already be sorted ascending by end_time. The resolver checks this
and raises UnsortedEventsError; it never re-sorts, since a silent re-sort would
hide the caller's bug behind plausible-looking aggregates.
"""

from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import tzinfo

import structlog

from exocortex.domain.models import Event
from exocortex.domain.validation import validate_event_order
from exocortex.localtime import MS_PER_HOUR, MS_PER_MINUTE, date_key, local_date, start_of_day
from shared.exceptions import UnsortedEventsError
from shared.metrics import intervals_resolved_total

logger = structlog.get_logger()

# Duration given to a degenerate (non-positive) interval
MIN_DEGENERATE_MS = MS_PER_HOUR


@dataclass(frozen=True)
class Interval:
    """Derived [start_time, end_time) span attributed to one event."""

    start_time: int
    end_time: int
    event: Event

    @property
    def duration_ms(self) -> int:
        return self.end_time - self.start_time

    @property
    def duration_minutes(self) -> float:
        return self.duration_ms / MS_PER_MINUTE

    @property
    def duration_hours(self) -> float:
        return self.duration_ms / MS_PER_HOUR

    @property
    def category(self) -> str:
        return self.event.category

    def overlap_ms(self, start: int, end: int) -> int:
        """Length of the intersection with [start, end); 0 if disjoint."""
        return max(0, min(self.end_time, end) - max(self.start_time, start))

    def contains(self, instant: int) -> bool:
        """Backward persistence: the event's state holds over (start, end]."""
        return self.start_time < instant <= self.end_time


def ensure_sorted(events: Sequence[Event]) -> None:
    """Raise UnsortedEventsError at the first event that ends before its predecessor."""
    issues = validate_event_order([e.end_time for e in events])
    if issues:
        first = issues[0]
        raise UnsortedEventsError(first.index, first.value["previous"], first.value["current"])


def resolve_intervals(
    events: Sequence[Event],
    tz: tzinfo,
    predecessor_end: int | None = None,
) -> list[Interval]:
    """Resolve a sorted run of events into contiguous intervals.

    Args:
        events: Events sorted ascending by end_time (ties keep caller order).
        tz: Zone whose local midnight starts the first interval.
        predecessor_end: End of the last interval before this run, if known.

    Returns:
        One Interval per event, in input order. Empty input gives [].
    """
    if not events:
        return []
    ensure_sorted(events)

    intervals: list[Interval] = []
    previous_end = predecessor_end
    for event in events:
        end = event.end_time
        if previous_end is None:
            start = start_of_day(local_date(end, tz), tz)
        else:
            start = previous_end

        if end <= start:
            # Only reachable through tied end times, a predecessor past this
            # event, or an event logged exactly at midnight.
            logger.debug(
                "degenerate_interval_clamped",
                event_id=event.id,
                start=start,
                end=end,
            )
            start = end - MIN_DEGENERATE_MS

        intervals.append(Interval(start_time=start, end_time=end, event=event))
        previous_end = end

    intervals_resolved_total.inc(len(intervals))
    return intervals


def group_by_day(events: Sequence[Event], tz: tzinfo) -> dict[str, list[Event]]:
    """Group sorted events by the local date key of their end_time, preserving order."""
    ensure_sorted(events)
    by_day: dict[str, list[Event]] = defaultdict(list)
    for event in events:
        by_day[date_key(event.end_time, tz)].append(event)
    return dict(by_day)


def resolve_day_intervals(events: Sequence[Event], tz: tzinfo) -> dict[str, list[Interval]]:
    """Resolve each calendar day on its own, the first interval reaching back to midnight.

    This is the resolution day statistics are defined over: an early-morning
    sleep event owns the whole stretch from midnight, not time from yesterday.
    """
    return {
        key: resolve_intervals(day_events, tz)
        for key, day_events in group_by_day(events, tz).items()
    }
