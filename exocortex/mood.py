"""Mood trend sampling and the stats window.

The mood series is the fixed-width variant of the bucket builder: a constant
cadence of sample instants across a date range, each taking the mood of the
interval that covers it under backward persistence (an event's mood holds
from the previous event's end up to its own end).

A sample no interval covers gets None for every mood value. That includes the
stretch before the first event's inferred start and everything after the last
event's end. Consumers skip such samples; nothing is interpolated.
"""

from bisect import bisect_left
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, tzinfo
from typing import Literal

from exocortex.intervals import Interval
from exocortex.localtime import (
    MS_PER_MINUTE,
    add_days,
    add_months,
    date_key,
    start_of_day,
    to_datetime,
)
from shared.config import settings
from shared.exceptions import InvalidDateRangeError, InvalidWindowError

Window = int | Literal["month"]

WINDOW_OPTIONS: tuple[Window, ...] = (1, 2, 3, 4, 5, 6, 7, 14, 28, "month")


@dataclass(frozen=True)
class MoodSample:
    """One fixed-width bin; mood taken at the bin's end instant."""

    bin_start: int
    sample_time: int
    date_key: str
    label: str
    happiness: float | None
    wakefulness: float | None
    health: float | None

    @property
    def has_data(self) -> bool:
        return self.happiness is not None


def covering_interval(
    intervals: Sequence[Interval], ends: Sequence[int], instant: int
) -> Interval | None:
    """The interval whose (start, end] contains `instant`, if any.

    `ends` must be the intervals' end times, ascending.
    """
    idx = bisect_left(ends, instant)
    if idx < len(intervals) and intervals[idx].contains(instant):
        return intervals[idx]
    return None


def mood_series(
    intervals: Sequence[Interval],
    start: date,
    end: date,
    tz: tzinfo,
    sample_minutes: int | None = None,
) -> list[MoodSample]:
    """Sample mood every `sample_minutes` from local midnight of `start` to the end of `end`."""
    if start > end:
        raise InvalidDateRangeError(start.isoformat(), end.isoformat())
    if sample_minutes is None:
        sample_minutes = settings.sample_minutes
    if sample_minutes <= 0:
        raise ValueError("sample_minutes must be positive")

    range_start = start_of_day(start, tz)
    range_end = start_of_day(add_days(end, 1), tz)
    step = sample_minutes * MS_PER_MINUTE
    ends = [iv.end_time for iv in intervals]

    samples: list[MoodSample] = []
    t = range_start
    while t < range_end:
        sample_time = t + step
        current = covering_interval(intervals, ends, sample_time)
        bin_dt = to_datetime(t, tz)
        samples.append(
            MoodSample(
                bin_start=t,
                sample_time=sample_time,
                date_key=date_key(t, tz),
                label=f"{bin_dt:%b %d %H:%M}",
                happiness=current.event.happiness if current else None,
                wakefulness=current.event.wakefulness if current else None,
                health=current.event.health if current else None,
            )
        )
        t = sample_time
    return samples


def parse_window(value: object) -> Window:
    if value == "month":
        return "month"
    days = value
    if isinstance(days, str) and days.strip().isdigit():
        days = int(days)
    if isinstance(days, int) and not isinstance(days, bool) and days in WINDOW_OPTIONS:
        return days
    raise InvalidWindowError(value, [str(w) for w in WINDOW_OPTIONS])


def window_end(start: date, window: Window) -> date:
    """Last calendar date covered by a window starting at `start` (inclusive)."""
    window = parse_window(window)
    if window == "month":
        return add_days(add_months(start, 1), -1)
    return add_days(start, window - 1)


def shift_window(start: date, window: Window, direction: int) -> date:
    """Start of the previous (-1) or next (+1) window."""
    window = parse_window(window)
    if window == "month":
        return add_months(start, direction)
    return add_days(start, direction * window)
