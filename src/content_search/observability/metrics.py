"""Prometheus metrics for the search API and the locale indexes."""

from __future__ import annotations

from collections.abc import Mapping
from contextlib import contextmanager
import time
from typing import TYPE_CHECKING

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Iterator


REQUEST_COUNT = Counter(
    "content_search_requests_total",
    "Search API requests by endpoint and HTTP status",
    ["endpoint", "status"],
)

# Scans over a few hundred entries finish in well under a millisecond
SEARCH_LATENCY = Histogram(
    "content_search_latency_seconds",
    "Time spent in search, suggestion and correction calls",
    ["locale", "operation"],
    buckets=(0.0001, 0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1),
)

SEARCH_RESULT_COUNT = Histogram(
    "content_search_result_count",
    "Results returned per search query",
    ["locale"],
    buckets=(0, 1, 2, 5, 10, 20, 50, 100),
)

INDEX_DOC_COUNT = Gauge(
    "content_search_index_documents",
    "Entries in the current index snapshot of a locale",
    ["locale"],
)


@contextmanager
def track_latency(histogram: Histogram, **labels: str) -> Iterator[None]:
    """Observe the wall time of the block, including when it raises."""
    started = time.perf_counter()
    try:
        yield
    finally:
        histogram.labels(**labels).observe(time.perf_counter() - started)


def record_index_sizes(sizes: Mapping[str, int]) -> None:
    for locale, size in sizes.items():
        INDEX_DOC_COUNT.labels(locale=locale).set(size)


def get_metrics() -> bytes:
    """Text exposition of the default registry."""
    return generate_latest()


def get_metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST
