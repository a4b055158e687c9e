"""Day boundary splitter for the multi-day grid.

A resolved interval may run across midnight. For rendering it is cut into one
portion per calendar day it touches, classified as full/start/middle/end.
Rendering only: mood and duration math always uses the unsplit interval.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, tzinfo
from enum import StrEnum

from exocortex.intervals import Interval
from exocortex.localtime import DATE_KEY_FORMAT, date_key, day_bounds, iter_days, local_date


class PortionKind(StrEnum):
    FULL = "full"
    START = "start"
    MIDDLE = "middle"
    END = "end"


@dataclass(frozen=True)
class DayPortion:
    """The slice of one interval that falls on one calendar day."""

    start_time: int
    end_time: int
    kind: PortionKind
    interval: Interval

    @property
    def duration_ms(self) -> int:
        return self.end_time - self.start_time


def split_for_day(interval: Interval, day: date, tz: tzinfo) -> DayPortion | None:
    """Return the portion of `interval` on `day`, or None when they do not overlap.

    Day ends are exclusive (next local midnight), so the portions of one
    interval tile it exactly. An interval ending exactly at midnight has an
    empty end portion on the following day, reported as None.
    """
    start_date = local_date(interval.start_time, tz)
    end_date = local_date(interval.end_time, tz)
    if day < start_date or day > end_date:
        return None

    day_start, day_end = day_bounds(day, tz)
    if start_date == end_date:
        kind = PortionKind.FULL
        sub_start, sub_end = interval.start_time, interval.end_time
    elif day == start_date:
        kind = PortionKind.START
        sub_start, sub_end = interval.start_time, day_end
    elif day == end_date:
        kind = PortionKind.END
        sub_start, sub_end = day_start, interval.end_time
    else:
        kind = PortionKind.MIDDLE
        sub_start, sub_end = day_start, day_end

    if sub_end <= sub_start:
        return None
    return DayPortion(start_time=sub_start, end_time=sub_end, kind=kind, interval=interval)


def split_across_days(interval: Interval, tz: tzinfo) -> list[DayPortion]:
    """All non-empty day portions of one interval, in calendar order."""
    portions = []
    for day in iter_days(local_date(interval.start_time, tz), local_date(interval.end_time, tz)):
        portion = split_for_day(interval, day, tz)
        if portion is not None:
            portions.append(portion)
    return portions


def grid_rows(
    intervals: Sequence[Interval], days: Sequence[date], tz: tzinfo
) -> dict[str, list[DayPortion]]:
    """Portions per requested day, keyed by date key, each row in time order.

    Every requested day gets a row, empty when nothing overlaps it.
    """
    rows: dict[str, list[DayPortion]] = {day.strftime(DATE_KEY_FORMAT): [] for day in days}
    wanted = set(days)
    for interval in intervals:
        for portion in split_across_days(interval, tz):
            day = local_date(portion.start_time, tz)
            if day in wanted:
                rows[date_key(portion.start_time, tz)].append(portion)
    for row in rows.values():
        row.sort(key=lambda p: (p.start_time, p.end_time))
    return rows
