"""TimelineEngine: the call-site facade over the pure engine functions.

The engine functions themselves take every parameter explicitly, timezone
included. This class is where defaults are resolved, once, at construction:
the configured zone (or the process-local one), the sample cadence, bucket
limits and category conventions from Settings.

Each method checks event ordering, times itself into
aggregation_duration_seconds and logs a one-line summary.
"""

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import date, tzinfo

import structlog

from exocortex.buckets import BucketPoint, Granularity, ProgressCallback, build_category_series
from exocortex.categories import CategoryGroup, category_frequencies, merge_candidates
from exocortex.day_split import DayPortion, grid_rows
from exocortex.day_stats import DayStats, build_day_stats
from exocortex.domain.models import Event
from exocortex.intervals import Interval, ensure_sorted, resolve_intervals
from exocortex.localtime import DATE_KEY_FORMAT
from exocortex.mood import MoodSample, mood_series
from exocortex.summary import (
    CategoryTotal,
    DayEvents,
    category_histogram,
    group_days,
    search_events,
)
from shared.config import Settings, settings
from shared.logging import configure_logging
from shared.metrics import aggregation_duration_seconds

logger = structlog.get_logger()


class TimelineEngine:
    def __init__(self, tz: tzinfo | None = None, config: Settings | None = None):
        self.settings = config or settings
        self.tz = tz or self.settings.resolve_timezone()

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> "TimelineEngine":
        """Engine for an application entry point: configures logging first."""
        config = config or settings
        configure_logging(json_output=config.log_json, level=config.log_level)
        engine = cls(config=config)
        logger.info(
            "engine_started", timezone=str(engine.tz), sample_minutes=config.sample_minutes
        )
        return engine

    @contextmanager
    def _timed(self, operation: str, events: Sequence[Event]) -> Iterator[None]:
        ensure_sorted(events)
        with aggregation_duration_seconds.labels(operation=operation).time():
            yield

    def resolve(
        self, events: Sequence[Event], predecessor_end: int | None = None
    ) -> list[Interval]:
        with self._timed("resolve", events):
            return resolve_intervals(events, self.tz, predecessor_end)

    def grid(self, events: Sequence[Event], days: Sequence[date]) -> dict[str, list[DayPortion]]:
        """Day rows for the grid renderer over the contiguous event timeline."""
        with self._timed("grid", events):
            rows = grid_rows(resolve_intervals(events, self.tz), days, self.tz)
        logger.info("grid_built", days=len(days), events=len(events))
        return rows

    def day_stats(self, events: Sequence[Event]) -> dict[str, DayStats]:
        with self._timed("day_stats", events):
            stats = build_day_stats(events, self.tz, self.settings.sleep_category)
        logger.info("day_stats_computed", days=len(stats), events=len(events))
        return stats

    def day_stats_for(self, events: Sequence[Event], day: date) -> DayStats | None:
        """Stats for one day; None when the day has no events."""
        return self.day_stats(events).get(day.strftime(DATE_KEY_FORMAT))

    def category_series(
        self,
        events: Sequence[Event],
        anchor: date,
        granularity: str | Granularity,
        count: int | None = None,
        selected: Sequence[str] = (),
        include_other: bool = False,
        progress: ProgressCallback | None = None,
    ) -> list[BucketPoint]:
        count = count if count is not None else self.settings.default_bucket_count
        with self._timed("category_series", events):
            points = build_category_series(
                events,
                anchor,
                granularity,
                count,
                selected,
                self.tz,
                include_other=include_other,
                progress=progress,
                progress_every=self.settings.progress_every,
                max_count=self.settings.max_bucket_count,
            )
        logger.info(
            "category_series_computed",
            anchor=anchor.isoformat(),
            granularity=str(granularity),
            buckets=len(points),
            selected=len(selected),
            include_other=include_other,
        )
        return points

    def mood_series(self, events: Sequence[Event], start: date, end: date) -> list[MoodSample]:
        with self._timed("mood_series", events):
            intervals = resolve_intervals(events, self.tz)
            samples = mood_series(intervals, start, end, self.tz, self.settings.sample_minutes)
        covered = sum(1 for s in samples if s.has_data)
        logger.info(
            "mood_series_computed",
            start=start.isoformat(),
            end=end.isoformat(),
            samples=len(samples),
            covered=covered,
        )
        return samples

    def histogram(self, events: Sequence[Event]) -> list[CategoryTotal]:
        with self._timed("histogram", events):
            intervals = resolve_intervals(events, self.tz)
            return category_histogram(intervals, self.settings.category_histogram_limit)

    def merge_candidates(self, events: Sequence[Event]) -> list[CategoryGroup]:
        with aggregation_duration_seconds.labels(operation="merge_candidates").time():
            return merge_candidates(events, self.settings.blank_category_name)

    def category_frequencies(self, events: Sequence[Event]) -> list[tuple[str, int]]:
        return category_frequencies(events)

    def group_days(
        self, events: Sequence[Event], start: date, end: date, include_empty: bool = True
    ) -> list[DayEvents]:
        with self._timed("group_days", events):
            return group_days(events, start, end, self.tz, include_empty)

    def search(self, events: Sequence[Event], query: str) -> list[Event]:
        return search_events(events, query)
