"""Canonical Event domain model.

One logged life activity, recorded only by the moment it ended. Start times
are never stored; they are inferred downstream by the interval resolver.

Design principles:
- Raw category kept as stored: the canonicalizer needs every spelling
- Comparisons use `category_key` (trimmed, case-folded), never the raw string
- Notes normalized once at ingestion: trimmed, blank = None
- Mood scalars validated to [0, 1]; out-of-range values are rejected, not clamped
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Event(BaseModel):
    """One logged activity, identified by its end timestamp."""

    model_config = ConfigDict(frozen=True)

    # Identity
    id: str = Field(..., min_length=1)

    # Temporal: epoch milliseconds
    end_time: int

    # Classification (raw, not pre-normalized)
    category: str = Field(..., min_length=1)

    # Mood scalars
    happiness: float = Field(..., ge=0.0, le=1.0)
    wakefulness: float = Field(..., ge=0.0, le=1.0)
    health: float = Field(..., ge=0.0, le=1.0)

    # Diary
    notes: str | None = None

    @field_validator("end_time", mode="before")
    @classmethod
    def reject_bool_timestamp(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("end_time must be epoch milliseconds, not a boolean")
        return v

    @field_validator("notes", mode="before")
    @classmethod
    def normalize_notes(cls, v: Any) -> str | None:
        """Trim notes; whitespace-only notes become None."""
        if v is None:
            return None
        if not isinstance(v, str):
            raise ValueError("notes must be a string")
        trimmed = v.strip()
        return trimmed or None

    @property
    def category_key(self) -> str:
        return self.category.strip().casefold()

    @property
    def category_label(self) -> str:
        return self.category.strip()

    def is_category(self, name: str) -> bool:
        return self.category_key == name.strip().casefold()
