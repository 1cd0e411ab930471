"""Composable builder for the search HTTP app."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from content_search.config import Settings
from content_search.content.loader import ContentSource, FileContentLoader
from content_search.domain.search import (
    DidYouMeanParams,
    DidYouMeanResponse,
    EnrichedSearchResult,
    SearchParams,
    SearchResponse,
    SuggestionParams,
    SuggestionResponse,
    validation_error_detail,
)
from content_search.observability import (
    REQUEST_COUNT,
    TraceContextMiddleware,
    configure_logging,
    get_metrics,
    get_metrics_content_type,
    init_tracing,
    trace_request,
)
from content_search.runtime.health import build_health_endpoint
from content_search.search.index import IndexRegistry
from content_search.service_layer.search_service import SearchService


if TYPE_CHECKING:
    from starlette.requests import Request


logger = logging.getLogger(__name__)


class AppBuilder:
    """Builds the Starlette app from settings and an optional content source."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        source: ContentSource | None = None,
        configure_observability: bool = True,
    ) -> None:
        self.settings = settings or Settings()
        self.source = source or FileContentLoader(self.settings.content_dir)
        self.configure_observability = configure_observability
        self.service: SearchService | None = None

    def build(self) -> Starlette:
        """Build and return the Starlette application."""
        settings = self.settings
        if self.configure_observability:
            configure_logging(level=settings.log_level, json_output=settings.log_json, access_log=settings.access_log)
            init_tracing(service_name="content-search")

        registry = IndexRegistry(self.source, settings.get_locales(), default_locale=settings.default_locale)
        self.service = SearchService(
            registry,
            trending=settings.get_trending_searches(),
            suggestion_min_length=settings.suggestion_min_length,
            did_you_mean_min_length=settings.did_you_mean_min_length,
        )
        # The registry built every locale index; later content changes call rebuild()
        sizes = registry.sizes()

        app = Starlette(
            debug=settings.log_level == "debug",
            routes=self._build_routes(self.service),
            middleware=[
                # Outermost first: the trace context must exist before the request span starts
                Middleware(TraceContextMiddleware),
                Middleware(BaseHTTPMiddleware, dispatch=trace_request),
            ],
        )
        app.state.search_service = self.service
        logger.info("Search app initialized for locales %s", ", ".join(f"{k}={v}" for k, v in sizes.items()))
        return app

    def _build_routes(self, service: SearchService) -> list[Route]:
        return [
            Route("/api/search", endpoint=self._build_search_endpoint(service), methods=["GET"]),
            Route("/api/search/suggestions", endpoint=self._build_suggestions_endpoint(service), methods=["GET"]),
            Route("/api/search/did-you-mean", endpoint=self._build_did_you_mean_endpoint(service), methods=["GET"]),
            Route("/api/search/trending", endpoint=self._build_trending_endpoint(service), methods=["GET"]),
            Route("/health", endpoint=build_health_endpoint(service), methods=["GET"]),
            Route("/metrics", endpoint=self._build_metrics_endpoint(), methods=["GET"]),
        ]

    @staticmethod
    def _validation_error_response(endpoint: str, exc: ValidationError) -> JSONResponse:
        REQUEST_COUNT.labels(endpoint=endpoint, status="400").inc()
        return JSONResponse(
            {"error": "validation_error", "detail": validation_error_detail(exc)},
            status_code=400,
        )

    def _display_locale(self, locale: str) -> str:
        return locale if locale in self.settings.get_locales() else self.settings.default_locale

    def _build_search_endpoint(self, service: SearchService):
        max_limit = self.settings.search_max_limit

        async def search_endpoint(request: Request) -> JSONResponse:
            try:
                params = SearchParams.model_validate(
                    dict(request.query_params), context={"max_limit": max_limit}
                )
            except ValidationError as exc:
                return self._validation_error_response("search", exc)

            results = service.search(params.q, params.to_filters(), locale=params.locale)
            display_locale = self._display_locale(params.locale)
            payload = SearchResponse(
                results=[EnrichedSearchResult.from_result(result, display_locale) for result in results],
                query=params.q,
            )
            REQUEST_COUNT.labels(endpoint="search", status="200").inc()
            return JSONResponse(payload.model_dump(by_alias=True, mode="json"))

        return search_endpoint

    def _build_suggestions_endpoint(self, service: SearchService):
        max_limit = self.settings.suggestion_max_limit
        default_limit = self.settings.suggestion_limit

        async def suggestions_endpoint(request: Request) -> JSONResponse:
            raw = dict(request.query_params)
            if not raw.get("limit"):
                raw["limit"] = str(default_limit)
            try:
                params = SuggestionParams.model_validate(raw, context={"max_limit": max_limit})
            except ValidationError as exc:
                return self._validation_error_response("suggestions", exc)

            payload = SuggestionResponse(
                suggestions=service.suggestions(params.q, params.limit, locale=params.locale),
                query=params.q,
            )
            REQUEST_COUNT.labels(endpoint="suggestions", status="200").inc()
            return JSONResponse(payload.model_dump(by_alias=True, mode="json"))

        return suggestions_endpoint

    def _build_did_you_mean_endpoint(self, service: SearchService):
        async def did_you_mean_endpoint(request: Request) -> JSONResponse:
            try:
                params = DidYouMeanParams.model_validate(dict(request.query_params))
            except ValidationError as exc:
                return self._validation_error_response("did_you_mean", exc)

            payload = DidYouMeanResponse(
                suggestion=service.did_you_mean(params.q, locale=params.locale),
                query=params.q,
            )
            REQUEST_COUNT.labels(endpoint="did_you_mean", status="200").inc()
            return JSONResponse(payload.model_dump(by_alias=True, mode="json"))

        return did_you_mean_endpoint

    def _build_trending_endpoint(self, service: SearchService):
        async def trending_endpoint(_: Request) -> JSONResponse:
            REQUEST_COUNT.labels(endpoint="trending", status="200").inc()
            return JSONResponse({"trending": service.trending_searches()})

        return trending_endpoint

    def _build_metrics_endpoint(self):
        async def metrics_endpoint(_: Request) -> Response:
            return Response(content=get_metrics(), media_type=get_metrics_content_type())

        return metrics_endpoint
