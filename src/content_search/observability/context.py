"""Request-scoped trace context shared by the log formatter and spans."""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, replace
import secrets


@dataclass(frozen=True)
class TraceContext:
    """Identifiers stamped on every log line emitted while handling a request."""

    trace_id: str
    span_id: str
    locale: str | None = None

    def as_log_fields(self) -> dict[str, str]:
        fields = {"trace_id": self.trace_id, "span_id": self.span_id}
        if self.locale:
            fields["locale"] = self.locale
        return fields


trace_context: ContextVar[TraceContext | None] = ContextVar("content_search_trace_context", default=None)


def new_trace_id() -> str:
    """32 hex chars, the W3C trace-id width."""
    return secrets.token_hex(16)


def new_span_id() -> str:
    return secrets.token_hex(8)


def get_trace_context() -> TraceContext:
    """Current context; code running outside a request gets a fresh one."""
    ctx = trace_context.get()
    if ctx is None:
        ctx = TraceContext(trace_id=new_trace_id(), span_id=new_span_id())
        trace_context.set(ctx)
    return ctx


def set_trace_context(trace_id: str, span_id: str, locale: str | None = None) -> TraceContext:
    ctx = TraceContext(trace_id=trace_id, span_id=span_id, locale=locale)
    trace_context.set(ctx)
    return ctx


def update_span_id(span_id: str) -> None:
    trace_context.set(replace(get_trace_context(), span_id=span_id))
