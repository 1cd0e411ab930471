"""Search service orchestration layer.

Binds the pure search functions to an ``IndexRegistry`` snapshot and adds
logging, tracing and metrics. This is the seam used by the HTTP app and CLI.
"""

from __future__ import annotations

from collections.abc import Sequence
import logging

from content_search.observability.metrics import SEARCH_LATENCY, SEARCH_RESULT_COUNT, record_index_sizes, track_latency
from content_search.observability.tracing import create_span
from content_search.search.index import IndexRegistry
from content_search.search.matcher import search
from content_search.search.models import SearchFilters, SearchResult
from content_search.search.suggestions import (
    DID_YOU_MEAN_MIN_LENGTH,
    SUGGESTION_MIN_LENGTH,
    get_did_you_mean,
    get_search_suggestions,
    get_trending_searches,
)


logger = logging.getLogger(__name__)


class SearchService:
    """High-level search API over per-locale index snapshots."""

    def __init__(
        self,
        registry: IndexRegistry,
        *,
        trending: Sequence[str] | None = None,
        suggestion_min_length: int = SUGGESTION_MIN_LENGTH,
        did_you_mean_min_length: int = DID_YOU_MEAN_MIN_LENGTH,
    ) -> None:
        self.registry = registry
        self.trending = tuple(trending or ())
        self.suggestion_min_length = suggestion_min_length
        self.did_you_mean_min_length = did_you_mean_min_length
        record_index_sizes(registry.sizes())

    def rebuild(self, locale: str | None = None) -> dict[str, int]:
        """Rebuild indexes after a content change and return per-locale sizes."""
        self.registry.rebuild(locale)
        sizes = self.registry.sizes()
        record_index_sizes(sizes)
        logger.info("Content indexes rebuilt: %s", sizes)
        return sizes

    def search(self, query: str, filters: SearchFilters | None = None, locale: str | None = None) -> list[SearchResult]:
        index = self.registry.get(locale)
        attributes = {"search.locale": index.locale, "search.query_length": len(query)}
        with create_span("search.query", attributes=attributes), track_latency(
            SEARCH_LATENCY, locale=index.locale, operation="search"
        ):
            results = search(index, query, filters)

        SEARCH_RESULT_COUNT.labels(locale=index.locale).observe(len(results))
        logger.debug("Search for %r in %s returned %d results", query, index.locale, len(results))
        return results

    def suggestions(self, query: str, limit: int = 5, locale: str | None = None) -> list[str]:
        index = self.registry.get(locale)
        with track_latency(SEARCH_LATENCY, locale=index.locale, operation="suggestions"):
            return get_search_suggestions(index, query, limit, min_length=self.suggestion_min_length)

    def did_you_mean(self, query: str, locale: str | None = None) -> str | None:
        index = self.registry.get(locale)
        with track_latency(SEARCH_LATENCY, locale=index.locale, operation="did_you_mean"):
            suggestion = get_did_you_mean(index, query, min_length=self.did_you_mean_min_length)
        if suggestion is not None:
            logger.debug("Did-you-mean for %r in %s: %r", query, index.locale, suggestion)
        return suggestion

    def trending_searches(self) -> list[str]:
        return get_trending_searches(self.trending)
