"""Engine configuration with startup validation.

All config is validated at import time via pydantic-settings.
Bad values cause an immediate, clear error instead of a subtly wrong chart.
Timezone is resolved here only for the facade; engine functions take `tz`
explicitly.
"""

from datetime import tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import tz
from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "EXO_", "env_file": ".env"}

    # Calendar: IANA zone name, empty = the process-local zone
    timezone: str = ""

    # Mood trend sampling
    sample_minutes: int = 60

    # Category trend buckets
    default_bucket_count: int = 60
    max_bucket_count: int = 1000

    # Category conventions
    sleep_category: str = "sleep"
    blank_category_name: str = "Slack"
    category_histogram_limit: int = 10

    # Progress callback cadence (intervals processed between calls)
    progress_every: int = 1000

    # Logging
    log_json: bool = False
    log_level: str = "INFO"

    @model_validator(mode="after")
    def validate_engine_settings(self) -> "Settings":
        """Fail fast at startup on values no aggregation could honour."""
        problems = []
        if self.timezone:
            try:
                ZoneInfo(self.timezone)
            except (ZoneInfoNotFoundError, ValueError):
                problems.append(f"EXO_TIMEZONE={self.timezone!r} is not a known IANA zone")
        if self.sample_minutes <= 0:
            problems.append("EXO_SAMPLE_MINUTES must be positive")
        if self.default_bucket_count <= 0 or self.max_bucket_count <= 0:
            problems.append("bucket counts must be positive")
        elif self.default_bucket_count > self.max_bucket_count:
            problems.append("EXO_DEFAULT_BUCKET_COUNT exceeds EXO_MAX_BUCKET_COUNT")
        if self.progress_every <= 0:
            problems.append("EXO_PROGRESS_EVERY must be positive")
        if problems:
            raise ValueError("Invalid engine configuration: " + "; ".join(problems))
        return self

    def resolve_timezone(self) -> tzinfo:
        """Configured zone, else the process-local zone with its DST rules."""
        if self.timezone:
            return ZoneInfo(self.timezone)
        return tz.tzlocal()


settings = Settings()
