"""Day statistic aggregator: duration-weighted mood rollups per calendar day.

Each interval is weighted by its actual resolved duration in minutes. Display
floors used elsewhere (a 15-minute minimum bar, say) never enter these sums.

Nullable fields: None = "no contributing interval", not zero. A day with no
events has no DayStats at all from build_day_stats.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import tzinfo

import structlog

from exocortex.domain.models import Event
from exocortex.intervals import Interval, resolve_day_intervals
from shared.config import settings

logger = structlog.get_logger()


@dataclass(frozen=True)
class DayStats:
    """Rollup of one calendar day, keyed by its YYYY-MM-DD date key."""

    date_key: str
    avg_happiness: float | None
    avg_health: float | None
    avg_wakefulness_awake: float | None
    sleep_hours: float | None
    notes: list[str] = field(default_factory=list)
    event_count: int = 0
    total_hours: float = 0.0


def weighted_mean(pairs: Iterable[tuple[float, float]]) -> float | None:
    """Σ(value·weight)/Σ(weight) over (value, weight) pairs; None when Σweight is 0."""
    total = 0.0
    weight_sum = 0.0
    for value, weight in pairs:
        total += value * weight
        weight_sum += weight
    if weight_sum <= 0:
        return None
    return total / weight_sum


def summarize_day(
    day_key: str,
    intervals: Sequence[Interval],
    sleep_category: str | None = None,
) -> DayStats:
    """Aggregate one day's resolved intervals (ascending by end_time) into DayStats."""
    if sleep_category is None:
        sleep_category = settings.sleep_category
    weighted = [(iv, iv.duration_minutes) for iv in intervals]
    awake = [(iv, w) for iv, w in weighted if not iv.event.is_category(sleep_category)]
    asleep = [(iv, w) for iv, w in weighted if iv.event.is_category(sleep_category)]

    sleep_hours = sum(w for _, w in asleep) / 60 if intervals else None

    return DayStats(
        date_key=day_key,
        avg_happiness=weighted_mean((iv.event.happiness, w) for iv, w in weighted),
        avg_health=weighted_mean((iv.event.health, w) for iv, w in weighted),
        avg_wakefulness_awake=weighted_mean((iv.event.wakefulness, w) for iv, w in awake),
        sleep_hours=sleep_hours,
        notes=[iv.event.notes for iv in intervals if iv.event.notes],
        event_count=len(intervals),
        total_hours=sum(w for _, w in weighted) / 60,
    )


def build_day_stats(
    events: Sequence[Event],
    tz: tzinfo,
    sleep_category: str | None = None,
) -> dict[str, DayStats]:
    """DayStats for every local day that has at least one event.

    Each day is resolved independently: its first interval reaches back to
    local midnight, so an early-morning sleep event owns the whole night-side
    stretch of that day.
    """
    by_day = resolve_day_intervals(events, tz)
    stats = {
        key: summarize_day(key, intervals, sleep_category)
        for key, intervals in by_day.items()
    }
    logger.debug("day_stats_built", days=len(stats), events=len(events))
    return stats
