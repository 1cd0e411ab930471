"""OpenTelemetry spans for HTTP requests and search calls."""

from __future__ import annotations

from contextlib import contextmanager
import logging
import re
from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qs

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.trace import SpanKind, Status, StatusCode
from starlette.datastructures import Headers

from content_search.observability.context import (
    get_trace_context,
    new_span_id,
    new_trace_id,
    set_trace_context,
    update_span_id,
)


if TYPE_CHECKING:
    from collections.abc import Generator

    from opentelemetry.trace import Span, Tracer
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)

TRACER_NAME = "content_search"
TRACE_ID_HEADER = "x-trace-id"
_TRACE_ID_PATTERN = re.compile(r"[0-9a-f]{32}")

_state: dict[str, Tracer | None] = {"tracer": None}


def init_tracing(
    service_name: str = "content-search",
    resource_attributes: dict[str, str] | None = None,
) -> TracerProvider:
    """Install an SDK tracer provider; spans are recorded but not exported."""
    provider = TracerProvider(resource=Resource.create({"service.name": service_name, **(resource_attributes or {})}))
    trace.set_tracer_provider(provider)
    _state["tracer"] = provider.get_tracer(TRACER_NAME)
    logger.info("Tracing initialized for service: %s", service_name)
    return provider


def get_tracer() -> Tracer:
    return _state["tracer"] or trace.get_tracer(TRACER_NAME)


@contextmanager
def create_span(
    name: str,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: dict[str, Any] | None = None,
) -> Generator[Span, None, None]:
    """Start a span and point the log context's span_id at it."""
    with get_tracer().start_as_current_span(
        name,
        kind=kind,
        attributes=attributes,
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        span_context = span.get_span_context()
        if span_context.is_valid:
            update_span_id(format(span_context.span_id, "016x"))
        try:
            yield span
        except Exception as exc:
            span.record_exception(exc)
            span.set_status(Status(StatusCode.ERROR, str(exc)))
            raise


def _incoming_trace_id(scope: Scope) -> str | None:
    """The caller's trace id when it is 32 hex chars; anything else is ignored."""
    value = Headers(scope=scope).get(TRACE_ID_HEADER, "").strip().lower()
    return value if _TRACE_ID_PATTERN.fullmatch(value) else None


def _requested_locale(scope: Scope) -> str | None:
    values = parse_qs(scope.get("query_string", b"").decode("latin-1")).get("locale")
    return values[0][:16] if values else None


class TraceContextMiddleware:
    """Binds a trace context, and the requested locale, to each HTTP request.

    A well-formed incoming ``x-trace-id`` header (32 hex chars) is reused so
    logs can be joined with the caller's; any other value gets a fresh id.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            trace_id = _incoming_trace_id(scope) or new_trace_id()
            set_trace_context(trace_id, new_span_id(), locale=_requested_locale(scope))
        await self.app(scope, receive, send)


async def trace_request(request: Request, call_next: Any) -> Response:
    """HTTP middleware wrapping each request in a server span."""
    attributes = {
        "http.method": request.method,
        "http.route": request.url.path,
        "http.url": str(request.url),
    }
    locale = get_trace_context().locale
    if locale:
        attributes["search.locale"] = locale

    with create_span(f"{request.method} {request.url.path}", kind=SpanKind.SERVER, attributes=attributes) as span:
        response: Response = await call_next(request)
        span.set_attribute("http.status_code", response.status_code)
        if response.status_code >= 500:
            span.set_status(Status(StatusCode.ERROR, f"HTTP {response.status_code}"))
    return response
