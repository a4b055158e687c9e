"""Bucket series builder: category hours per calendar bucket.

Buckets are half-open [start, end) calendar spans generated forward from an
anchor date. Every bucket start is computed from the anchor directly (anchor +
i widths), so monthly buckets anchored on the 31st clamp to shorter months
without drifting.

Attribution walks each resolved interval once and binary-searches the first
bucket it can touch, so cost is O(intervals · log buckets + overlaps) rather
than the naive O(intervals · buckets).
"""

from bisect import bisect_right
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, tzinfo
from enum import StrEnum

import structlog

from exocortex.domain.models import Event
from exocortex.intervals import Interval, resolve_intervals
from exocortex.localtime import (
    MS_PER_HOUR,
    add_days,
    add_months,
    add_years,
    start_of_day,
)
from shared.config import settings
from shared.exceptions import InvalidBucketCountError, UnsupportedGranularityError

logger = structlog.get_logger()

# Reserved key for hours of unselected categories
OTHER_KEY = "__other__"

ProgressCallback = Callable[[int, int], None]


class Granularity(StrEnum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class Bucket:
    start: int
    end: int
    label: str
    start_date: date

    @property
    def hours(self) -> float:
        return (self.end - self.start) / MS_PER_HOUR


@dataclass
class BucketPoint:
    """One bucket with its category -> hours totals."""

    bucket: Bucket
    hours: dict[str, float] = field(default_factory=dict)

    @property
    def label(self) -> str:
        return self.bucket.label

    @property
    def other_hours(self) -> float | None:
        return self.hours.get(OTHER_KEY)


def parse_granularity(value: str | Granularity) -> Granularity:
    try:
        return Granularity(value)
    except ValueError:
        raise UnsupportedGranularityError(str(value)) from None


def bucket_start_date(anchor: date, granularity: Granularity, index: int) -> date:
    """Start date of bucket `index` (may be negative) relative to the anchor."""
    if granularity is Granularity.DAILY:
        return add_days(anchor, index)
    if granularity is Granularity.WEEKLY:
        return add_days(anchor, 7 * index)
    if granularity is Granularity.MONTHLY:
        return add_months(anchor, index)
    return add_years(anchor, index)


def _label(start: date, granularity: Granularity) -> str:
    if granularity is Granularity.DAILY:
        return f"{start:%b} {start.day}"
    if granularity is Granularity.WEEKLY:
        return start.isoformat()
    if granularity is Granularity.MONTHLY:
        return f"{start:%b %Y}"
    return f"{start:%Y}"


def compute_buckets(
    anchor: date,
    granularity: str | Granularity,
    count: int,
    tz: tzinfo,
    max_count: int | None = None,
) -> list[Bucket]:
    """Generate `count` contiguous ascending buckets starting at the anchor's local midnight."""
    granularity = parse_granularity(granularity)
    if max_count is None:
        max_count = settings.max_bucket_count
    if count <= 0 or count > max_count:
        raise InvalidBucketCountError(count, max_count)

    starts = [bucket_start_date(anchor, granularity, i) for i in range(count + 1)]
    return [
        Bucket(
            start=start_of_day(starts[i], tz),
            end=start_of_day(starts[i + 1], tz),
            label=_label(starts[i], granularity),
            start_date=starts[i],
        )
        for i in range(count)
    ]


def shift_anchor(
    anchor: date, granularity: str | Granularity, count: int, direction: int
) -> date:
    """Move the anchor one page (count bucket widths) backward (-1) or forward (+1)."""
    return bucket_start_date(anchor, parse_granularity(granularity), direction * count)


def category_series(
    buckets: Sequence[Bucket],
    intervals: Iterable[Interval],
    selected: Iterable[str],
    include_other: bool = False,
    progress: ProgressCallback | None = None,
    progress_every: int | None = None,
) -> list[BucketPoint]:
    """Attribute interval hours to the buckets they overlap.

    Selected categories (matched on the trimmed name) get their own key, each
    starting at 0 in every bucket. Unselected categories go to OTHER_KEY when
    include_other is set and are dropped otherwise.
    """
    selected_names = {name.strip() for name in selected}
    points = [BucketPoint(bucket=b, hours=dict.fromkeys(selected_names, 0.0)) for b in buckets]
    if include_other:
        for point in points:
            point.hours[OTHER_KEY] = 0.0
    if not buckets:
        return points

    if progress_every is None:
        progress_every = settings.progress_every
    ends = [b.end for b in buckets]
    intervals = list(intervals)
    total = len(intervals)
    for n, interval in enumerate(intervals, start=1):
        name = interval.event.category_label
        if name in selected_names:
            key = name
        elif include_other:
            key = OTHER_KEY
        else:
            key = None

        if key is not None:
            # First bucket whose end lies after the interval start
            b = bisect_right(ends, interval.start_time)
            while b < len(buckets) and buckets[b].start < interval.end_time:
                overlap = interval.overlap_ms(buckets[b].start, buckets[b].end)
                if overlap > 0:
                    points[b].hours[key] += overlap / MS_PER_HOUR
                b += 1

        if progress is not None and (n % progress_every == 0 or n == total):
            progress(n, total)

    return points


def build_category_series(
    events: Sequence[Event],
    anchor: date,
    granularity: str | Granularity,
    count: int,
    selected: Iterable[str],
    tz: tzinfo,
    include_other: bool = False,
    progress: ProgressCallback | None = None,
    progress_every: int | None = None,
    max_count: int | None = None,
) -> list[BucketPoint]:
    """Resolve the full sorted event timeline and bucket it.

    The whole history is resolved, not just events inside the window, so an
    interval that starts before the first bucket is clipped rather than lost.
    """
    buckets = compute_buckets(anchor, granularity, count, tz, max_count=max_count)
    intervals = resolve_intervals(events, tz)
    points = category_series(
        buckets, intervals, selected, include_other, progress, progress_every
    )
    logger.debug(
        "category_series_built",
        granularity=str(granularity),
        buckets=len(points),
        intervals=len(intervals),
        include_other=include_other,
    )
    return points
