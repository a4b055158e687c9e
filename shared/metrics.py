"""Prometheus metrics for engine observability.

Counters and histograms at each stage: ingestion, resolution, aggregation.
In-process only; the embedding application decides whether to expose them.
"""

from prometheus_client import Counter, Histogram

# Ingestion counters
events_ingested_total = Counter(
    "events_ingested_total",
    "Total raw event records seen at the ingestion boundary",
    ["status"],  # status: accepted, rejected
)

validation_failures_total = Counter(
    "validation_failures_total",
    "Total validation failures by rule",
    ["rule"],
)

# Resolver counters
intervals_resolved_total = Counter(
    "intervals_resolved_total",
    "Total intervals produced by the interval resolver",
)

# Histograms
aggregation_duration_seconds = Histogram(
    "aggregation_duration_seconds",
    "Duration of engine aggregations",
    ["operation"],
)
