"""Ingestion boundary: raw records -> validate -> Event models.

Everything downstream assumes validated, sorted events. This module is where
that is established:
- Records with any rule violation are rejected as a batch, listing every issue
- Notes are trimmed here (via the Event model), not during aggregation
- Sorting is an explicit caller step (sort_events); the engine only checks it
"""

from collections.abc import Iterable
from typing import Any

import structlog

from exocortex.domain.models import Event
from exocortex.domain.validation import ValidationIssue, validate_event_record
from exocortex.store import EventStore
from shared.exceptions import InvalidDateRangeError, ValidationError
from shared.metrics import events_ingested_total, validation_failures_total

logger = structlog.get_logger()


def ingest_records(records: Iterable[Any]) -> list[Event]:
    """Validate raw event records and build Event models in input order.

    Raises ValidationError listing every violation when any record is invalid.
    """
    records = list(records)
    issues: list[ValidationIssue] = []
    for index, record in enumerate(records):
        issues.extend(validate_event_record(record, index))

    if issues:
        rejected = len({issue.index for issue in issues})
        events_ingested_total.labels(status="rejected").inc(rejected)
        for issue in issues:
            validation_failures_total.labels(rule=issue.reason).inc()
        logger.warning(
            "events_rejected",
            records=len(records),
            rejected=rejected,
            reasons=sorted({issue.reason for issue in issues}),
        )
        raise ValidationError([issue.as_dict() for issue in issues])

    events = [Event.model_validate(record) for record in records]
    events_ingested_total.labels(status="accepted").inc(len(events))
    logger.info("events_ingested", count=len(events))
    return events


def sort_events(events: Iterable[Event]) -> list[Event]:
    """Stable sort by end_time: ties keep the order the store returned them in."""
    return sorted(events, key=lambda e: e.end_time)


def fetch_events(
    store: EventStore, start_ms: int | None = None, end_ms: int | None = None
) -> list[Event]:
    """Read events from the store and return them sorted for the engine.

    With both bounds, only events whose end_time lies in [start_ms, end_ms].
    """
    if (start_ms is None) != (end_ms is None):
        raise ValueError("start_ms and end_ms must be given together")
    if start_ms is None:
        raw = store.get_all_events()
    else:
        if start_ms > end_ms:
            raise InvalidDateRangeError(str(start_ms), str(end_ms))
        raw = store.get_events_in_range(start_ms, end_ms)

    events = sort_events(raw)
    logger.info("events_fetched", count=len(events), start_ms=start_ms, end_ms=end_ms)
    return events

