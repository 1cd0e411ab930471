"""Full-text search core: index builder, matcher, highlighter and suggestions."""

from content_search.search.highlight import build_highlights, highlight_text
from content_search.search.index import ContentIndex, IndexRegistry, build_index
from content_search.search.matcher import normalize_query, rank, score_entry, search
from content_search.search.models import (
    ContentIndexEntry,
    MatchedField,
    ScoredEntry,
    SearchFilters,
    SearchResult,
)
from content_search.search.suggestions import get_did_you_mean, get_search_suggestions, get_trending_searches


__all__ = [
    "ContentIndex",
    "ContentIndexEntry",
    "IndexRegistry",
    "MatchedField",
    "ScoredEntry",
    "SearchFilters",
    "SearchResult",
    "build_highlights",
    "build_index",
    "get_did_you_mean",
    "get_search_suggestions",
    "get_trending_searches",
    "highlight_text",
    "normalize_query",
    "rank",
    "score_entry",
    "search",
]
