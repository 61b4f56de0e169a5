"""Prometheus metrics for the indexer and the query engine."""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING

from prometheus_client import Counter, Gauge, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Generator


SEARCH_LATENCY = Histogram(
    "site_search_query_latency_seconds",
    "Search query latency",
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25),
)

QUERY_COUNT = Counter(
    "site_search_queries_total",
    "Queries served",
    ["status"],
)

INDEX_DOC_COUNT = Gauge(
    "site_search_index_document_count",
    "Entries in the in-memory index",
)

CORPUS_ENTRY_COUNT = Gauge(
    "site_search_corpus_entry_count",
    "Entries emitted by the last corpus build",
)


@contextmanager
def track_latency(histogram: Histogram) -> Generator[None, None, None]:
    """Context manager to track operation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()
