"""Engine exception hierarchy.

Every contract violation the engine detects extends ExocortexError, so callers
can catch one type and still show a specific title and detail. Nothing here is
retried: a failure is deterministic and must be fixed at the input.
"""


class ExocortexError(Exception):
    def __init__(
        self,
        code: str,
        title: str,
        detail: str,
        violations: list[dict] | None = None,
    ):
        self.code = code
        self.title = title
        self.detail = detail
        self.violations = violations
        super().__init__(detail)


class ValidationError(ExocortexError):
    def __init__(self, violations: list[dict]):
        super().__init__(
            code="validation-error",
            title="Validation Error",
            detail=f"Event data contains {len(violations)} validation error(s)",
            violations=violations,
        )


class UnsortedEventsError(ExocortexError):
    def __init__(self, index: int, previous_end: int, end: int):
        self.index = index
        super().__init__(
            code="unsorted-events",
            title="Unsorted Events",
            detail=(
                f"Event at position {index} ends at {end}, before the preceding event "
                f"({previous_end}). Events must be sorted ascending by end_time."
            ),
        )


class InvalidDateRangeError(ExocortexError):
    def __init__(self, start: str, end: str):
        super().__init__(
            code="invalid-date-range",
            title="Invalid Date Range",
            detail=f"Range start ({start}) must not be after range end ({end})",
        )


class InvalidBucketCountError(ExocortexError):
    def __init__(self, count: int, maximum: int):
        super().__init__(
            code="invalid-bucket-count",
            title="Invalid Bucket Count",
            detail=f"Bucket count {count} is not supported. Must be between 1 and {maximum}",
        )


class UnsupportedGranularityError(ExocortexError):
    def __init__(self, granularity: str):
        super().__init__(
            code="unsupported-granularity",
            title="Unsupported Granularity",
            detail=(
                f"Granularity '{granularity}' is not supported. "
                "Must be one of: daily, weekly, monthly, yearly"
            ),
        )


class InvalidWindowError(ExocortexError):
    def __init__(self, window: object, allowed: list[str]):
        allowed_str = ", ".join(allowed)
        super().__init__(
            code="invalid-window",
            title="Invalid Stats Window",
            detail=f"Window {window!r} is not supported. Must be one of: {allowed_str}",
        )
