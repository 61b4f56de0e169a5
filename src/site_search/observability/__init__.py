"""Observability module: structured logging, tracing and metrics."""

from site_search.observability.context import get_trace_context, trace_context
from site_search.observability.logging import JsonFormatter, configure_logging
from site_search.observability.metrics import (
    CORPUS_ENTRY_COUNT,
    INDEX_DOC_COUNT,
    QUERY_COUNT,
    SEARCH_LATENCY,
    get_metrics,
    track_latency,
)
from site_search.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "CORPUS_ENTRY_COUNT",
    "INDEX_DOC_COUNT",
    "QUERY_COUNT",
    "SEARCH_LATENCY",
    "JsonFormatter",
    "configure_logging",
    "create_span",
    "get_metrics",
    "get_trace_context",
    "get_tracer",
    "init_tracing",
    "trace_context",
    "track_latency",
]
