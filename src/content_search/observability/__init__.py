"""Observability module: structured logging, tracing and Prometheus metrics."""

from content_search.observability.context import TraceContext, get_trace_context, set_trace_context, trace_context
from content_search.observability.logging import JsonFormatter, configure_logging
from content_search.observability.metrics import (
    INDEX_DOC_COUNT,
    REQUEST_COUNT,
    SEARCH_LATENCY,
    SEARCH_RESULT_COUNT,
    get_metrics,
    get_metrics_content_type,
    record_index_sizes,
    track_latency,
)
from content_search.observability.tracing import (
    TraceContextMiddleware,
    create_span,
    get_tracer,
    init_tracing,
    trace_request,
)


__all__ = [
    "INDEX_DOC_COUNT",
    "REQUEST_COUNT",
    "SEARCH_LATENCY",
    "SEARCH_RESULT_COUNT",
    "JsonFormatter",
    "TraceContext",
    "TraceContextMiddleware",
    "configure_logging",
    "create_span",
    "get_metrics",
    "get_metrics_content_type",
    "get_trace_context",
    "get_tracer",
    "init_tracing",
    "record_index_sizes",
    "set_trace_context",
    "trace_context",
    "trace_request",
    "track_latency",
]
