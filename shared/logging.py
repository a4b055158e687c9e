"""structlog configuration shared by the engine and its callers."""

import logging

import structlog


def configure_logging(json_output: bool = False, level: str = "INFO") -> None:
    """Configure structlog once per process.

    JSON output for machine consumption, console output for local work.
    Context bound with structlog.contextvars is merged into every event.
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        cache_logger_on_first_use=True,
    )
