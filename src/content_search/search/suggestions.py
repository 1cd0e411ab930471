"""As-you-type assistance: autocomplete, "did you mean" and trending searches."""

from __future__ import annotations

from collections.abc import Sequence
import re

from content_search.search.fuzzy import find_closest_term
from content_search.search.index import ContentIndex
from content_search.search.matcher import normalize_query


SUGGESTION_MIN_LENGTH = 2
DID_YOU_MEAN_MIN_LENGTH = 3
VOCABULARY_MIN_WORD_LENGTH = 3

DEFAULT_TRENDING_SEARCHES = (
    "What is Bitcoin?",
    "Bitcoin energy",
    "Ponzi scheme",
    "Lightning Network",
    "Bitcoin vs gold",
)

_WORD_PATTERN = re.compile(r"[^\W_]+")


def get_search_suggestions(
    index: ContentIndex,
    query: str,
    limit: int = 5,
    *,
    min_length: int = SUGGESTION_MIN_LENGTH,
) -> list[str]:
    """Distinct titles, then tags, containing the query (case-insensitive).

    Queries shorter than ``min_length`` characters return no suggestions.
    Source casing is preserved and no string appears twice.
    """
    query = query.strip()
    if len(query) < min_length or limit <= 0:
        return []

    needle = query.lower()
    suggestions: dict[str, None] = {}
    for entry in index:
        if len(suggestions) >= limit:
            break
        if needle in entry.title.lower():
            suggestions.setdefault(entry.title)
    for entry in index:
        for tag in entry.tags:
            if len(suggestions) >= limit:
                return list(suggestions)
            if needle in tag.lower():
                suggestions.setdefault(tag)
    return list(suggestions)[:limit]


def _index_text(index: ContentIndex) -> list[str]:
    texts: list[str] = []
    for entry in index:
        texts.append(entry.title.lower())
        texts.append(entry.summary.lower())
        texts.extend(tag.lower() for tag in entry.tags)
    return texts


def _vocabulary(index: ContentIndex) -> tuple[set[str], set[str]]:
    """Known terms (titles and tags) and the words they are made of."""
    terms: set[str] = set()
    words: set[str] = set()
    for entry in index:
        for term in (entry.title, *entry.tags):
            terms.add(term)
            words.update(word for word in _WORD_PATTERN.findall(term) if len(word) >= VOCABULARY_MIN_WORD_LENGTH)
    return terms, words


def get_did_you_mean(
    index: ContentIndex,
    query: str,
    *,
    min_length: int = DID_YOU_MEAN_MIN_LENGTH,
) -> str | None:
    """Suggest a correction drawn from known titles and tags.

    Returns None when the query is shorter than ``min_length``, when it
    already matches something (any query word occurs in a title, summary or
    tag, which is what keeps an entry in search results), or when nothing is
    within the edit budget of :func:`~content_search.search.fuzzy.get_max_edit_distance`.
    Whole titles/tags and single words are tried first; multi-word queries
    then fall back to correcting each word on its own. The query itself is
    never returned.
    """
    query = query.strip()
    if len(query) < min_length:
        return None

    _, words = normalize_query(query)
    texts = _index_text(index)
    if not texts:
        return None

    if any(word in text for word in words for text in texts):
        return None

    terms, term_words = _vocabulary(index)
    correction = find_closest_term(query, terms | term_words)
    if correction is not None:
        return correction

    tokens = query.split()
    if len(tokens) < 2:
        return None

    fixes = [find_closest_term(token, term_words) for token in tokens]
    if all(fix is None for fix in fixes):
        return None
    suggestion = " ".join(fix or token for fix, token in zip(fixes, tokens))
    return None if suggestion.lower() == query.lower() else suggestion


def get_trending_searches(curated: Sequence[str] | None = None) -> list[str]:
    """Curated entry-point queries; the built-in list when none are configured."""
    return list(curated) if curated else list(DEFAULT_TRENDING_SEARCHES)
