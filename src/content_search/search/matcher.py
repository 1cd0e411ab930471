"""Query matching and scoring over a content index.

Scoring is additive per matched field:

- title: 10 when the whole normalized query occurs in the title, otherwise 3
  per query word found in it
- summary: 2 per query word found in it
- tags: 2 per query word found in at least one tag

Entries without any field match are dropped. Ranking is by descending score;
equal scores keep index order.
"""

from __future__ import annotations

from collections.abc import Iterable

from content_search.search.highlight import build_highlights
from content_search.search.index import ContentIndex
from content_search.search.models import (
    ContentIndexEntry,
    MatchedField,
    ScoredEntry,
    SearchFilters,
    SearchResult,
)


TITLE_PHRASE_WEIGHT = 10
TITLE_WORD_WEIGHT = 3
SUMMARY_WORD_WEIGHT = 2
TAG_WORD_WEIGHT = 2


def normalize_query(query: str) -> tuple[str, frozenset[str]]:
    """Return the lowercased, trimmed query and its set of words."""
    normalized = query.strip().lower()
    return normalized, frozenset(normalized.split())


def score_entry(entry: ContentIndexEntry, phrase: str, words: Iterable[str]) -> ScoredEntry:
    """Score a single entry; a score of 0 means no field matched."""
    title = entry.title.lower()
    summary = entry.summary.lower()
    tags = [tag.lower() for tag in entry.tags]

    title_hits = sum(1 for word in words if word in title)
    summary_hits = sum(1 for word in words if word in summary)
    tag_hits = sum(1 for word in words if any(word in tag for tag in tags))

    score = 0
    matched = MatchedField.NONE
    if title_hits:
        matched |= MatchedField.TITLE
        score += TITLE_PHRASE_WEIGHT if phrase in title else TITLE_WORD_WEIGHT * title_hits
    if summary_hits:
        matched |= MatchedField.SUMMARY
        score += SUMMARY_WORD_WEIGHT * summary_hits
    if tag_hits:
        matched |= MatchedField.TAGS
        score += TAG_WORD_WEIGHT * tag_hits
    return ScoredEntry(entry=entry, score=score, matched_on=matched)


def rank(index: Iterable[ContentIndexEntry], query: str, filters: SearchFilters | None = None) -> list[ScoredEntry]:
    """Filter, score and sort entries without building result objects."""
    phrase, words = normalize_query(query)
    if not words:
        return []

    filters = filters or SearchFilters()
    scored = [
        candidate
        for candidate in (score_entry(entry, phrase, words) for entry in index if filters.accepts(entry))
        if candidate.matched_on
    ]
    # list.sort is stable, so equal scores keep index order
    scored.sort(key=lambda candidate: candidate.score, reverse=True)
    if filters.limit is not None:
        scored = scored[: filters.limit]
    return scored


def search(index: ContentIndex, query: str, filters: SearchFilters | None = None) -> list[SearchResult]:
    """Search ``index`` for ``query``.

    Args:
        index: Locale snapshot to scan.
        query: Raw user query; empty or whitespace-only yields ``[]``.
        filters: Optional topic/type/level/limit, already validated.

    Returns:
        Results ordered by non-increasing score, each carrying the matched
        fields and highlighted copies of them.
    """
    query = query.strip()
    return [
        SearchResult(
            entry=candidate.entry,
            matched_on=candidate.matched_on,
            highlights=build_highlights(candidate.entry, candidate.matched_on, query),
        )
        for candidate in rank(index, query, filters)
    ]
