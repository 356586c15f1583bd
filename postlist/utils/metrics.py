"""
Prometheus metrics for the listing engine.

Helpers retrieve an already registered collector instead of failing, which
keeps module reloads (``uvicorn --reload``, repeated test imports) working.
"""

from prometheus_client import REGISTRY, Counter, Histogram


def _get_or_create_counter(
    name: str, doc: str, labels: list[str] | None = None
) -> Counter:
    try:
        return Counter(name, doc, labels or [])
    except ValueError:
        return REGISTRY._names_to_collectors[name]


def _get_or_create_histogram(
    name: str,
    doc: str,
    labels: list[str] | None = None,
    buckets: tuple[float, ...] | None = None,
) -> Histogram:
    try:
        if buckets:
            return Histogram(name, doc, labels or [], buckets=buckets)
        return Histogram(name, doc, labels or [])
    except ValueError:
        return REGISTRY._names_to_collectors[name]


# Pagination metrics
pagination_query_duration_seconds = _get_or_create_histogram(
    "pagination_query_duration_seconds",
    "Time spent fetching one page of posts",
    ["strategy"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

# Count estimation metrics
count_estimate_outcomes_total = _get_or_create_counter(
    "count_estimate_outcomes_total",
    "Outcomes of the count estimator",
    ["outcome"],  # estimated, filtered, untrusted, unavailable
)
