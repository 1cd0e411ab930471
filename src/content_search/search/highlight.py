"""Query highlighting for matched result fields."""

from __future__ import annotations

import html
import re

from content_search.search.models import ContentIndexEntry, MatchedField


MARK_OPEN = "<mark>"
MARK_CLOSE = "</mark>"
TAG_SEPARATOR = ", "


def highlight_text(text: str, query: str) -> str:
    """Wrap every case-insensitive occurrence of ``query`` in ``<mark>``.

    The query is escaped before compiling so regex metacharacters are matched
    literally. Text outside the marks is HTML-escaped and the source casing
    of the matched text is preserved.

    Example:
        >>> highlight_text("What is Bitcoin?", "bitcoin")
        'What is <mark>Bitcoin</mark>?'
    """
    if not query:
        return html.escape(text, quote=False)

    pattern = re.compile(re.escape(query), re.IGNORECASE)
    parts: list[str] = []
    last_end = 0
    for match in pattern.finditer(text):
        parts.append(html.escape(text[last_end : match.start()], quote=False))
        parts.append(f"{MARK_OPEN}{html.escape(match.group(0), quote=False)}{MARK_CLOSE}")
        last_end = match.end()
    parts.append(html.escape(text[last_end:], quote=False))
    return "".join(parts)


def build_highlights(entry: ContentIndexEntry, matched_on: MatchedField, query: str) -> dict[str, str]:
    """Highlight only the fields that matched; others stay absent."""
    query = query.strip()
    highlights: dict[str, str] = {}
    if MatchedField.TITLE in matched_on:
        highlights["title"] = highlight_text(entry.title, query)
    if MatchedField.SUMMARY in matched_on:
        highlights["summary"] = highlight_text(entry.summary, query)
    if MatchedField.TAGS in matched_on:
        highlights["tags"] = highlight_text(TAG_SEPARATOR.join(entry.tags), query)
    return highlights
