"""Validation rules for raw event records.

Field rules run per record; order rules run across the whole sequence.
Each returns a list of ValidationIssue; empty list means valid.
Nothing here repairs data: the ingestion boundary rejects on any issue.
"""

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any


@dataclass
class ValidationIssue:
    field: str
    rule: str
    reason: str
    value: Any
    index: int | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "rule": self.rule,
            "reason": self.reason,
            "value": str(self.value),
            "index": self.index,
        }


MOOD_FIELDS = ("happiness", "wakefulness", "health")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_event_record(record: Any, index: int | None = None) -> list[ValidationIssue]:
    """Validate one raw event record before it becomes an Event.

    Returns an empty list if valid; otherwise returns all violations.
    """
    if not isinstance(record, Mapping):
        return [ValidationIssue("(root)", "type", "record_not_mapping", record, index)]

    errors: list[ValidationIssue] = []

    # Rule 1: Required id
    event_id = record.get("id")
    if event_id is None or (isinstance(event_id, str) and not event_id):
        errors.append(ValidationIssue("id", "required", "missing_id", event_id, index))
    elif not isinstance(event_id, str):
        errors.append(ValidationIssue("id", "type", "id_not_string", event_id, index))

    # Rule 2: Integer epoch-millisecond end_time
    end_time = record.get("end_time")
    if end_time is None:
        errors.append(ValidationIssue("end_time", "required", "missing_end_time", None, index))
    elif not isinstance(end_time, int) or isinstance(end_time, bool):
        errors.append(
            ValidationIssue("end_time", "type", "end_time_not_integer", end_time, index)
        )

    # Rule 3: Non-empty category string
    category = record.get("category")
    if not isinstance(category, str) or not category:
        errors.append(
            ValidationIssue("category", "required", "missing_category", category, index)
        )

    # Rule 4: Mood scalars in [0, 1]
    for mood_field in MOOD_FIELDS:
        val = record.get(mood_field)
        if not _is_number(val):
            errors.append(ValidationIssue(mood_field, "type", "mood_not_numeric", val, index))
        elif not math.isfinite(val) or val < 0.0 or val > 1.0:
            errors.append(ValidationIssue(mood_field, "range", "mood_out_of_range", val, index))

    # Rule 5: Optional notes string
    notes = record.get("notes")
    if notes is not None and not isinstance(notes, str):
        errors.append(ValidationIssue("notes", "type", "notes_not_string", notes, index))

    return errors


def validate_event_order(end_times: Sequence[int]) -> list[ValidationIssue]:
    """Order rule: end times ascending. Ties are allowed (caller keeps sequence order)."""
    errors: list[ValidationIssue] = []
    for i in range(1, len(end_times)):
        if end_times[i] < end_times[i - 1]:
            errors.append(
                ValidationIssue(
                    "end_time",
                    "ordering",
                    "end_time_not_ascending",
                    {"previous": end_times[i - 1], "current": end_times[i]},
                    i,
                )
            )
    return errors
