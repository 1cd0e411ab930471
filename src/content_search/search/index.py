"""Locale-scoped content index.

``build_index`` is a pure projection of a content source onto an immutable
``ContentIndex``. ``IndexRegistry`` builds one index per configured locale up
front; after that an index is only swapped via ``rebuild``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
import logging

from content_search.content.loader import ContentSource
from content_search.search.models import ContentIndexEntry


logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"


@dataclass(frozen=True)
class ContentIndex:
    """Read-only, ordered entries for one locale."""

    locale: str
    entries: tuple[ContentIndexEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[ContentIndexEntry]:
        return iter(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)

    def get(self, slug: str) -> ContentIndexEntry | None:
        return next((entry for entry in self.entries if entry.slug == slug), None)


def build_index(source: ContentSource, locale: str | None = None) -> ContentIndex:
    """Build the index for ``locale`` (defaults to ``"en"``).

    Never raises: an unavailable source yields an empty index, and records
    that cannot be projected are logged and skipped.
    """
    locale = locale or DEFAULT_LOCALE
    try:
        records = source.load(locale)
    except OSError as exc:
        logger.warning("Content source unavailable for locale %s: %s", locale, exc)
        return ContentIndex(locale=locale)

    entries: list[ContentIndexEntry] = []
    for record in records or ():
        try:
            entries.append(ContentIndexEntry.from_record(record, locale))
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("Skipping malformed record %r for locale %s: %s", record.get("slug"), locale, exc)

    if not entries:
        logger.warning("Content index for locale %s is empty", locale)
    else:
        logger.info("Built content index for locale %s with %d entries", locale, len(entries))
    return ContentIndex(locale=locale, entries=tuple(entries))


class IndexRegistry:
    """Explicitly constructed holder of the per-locale indexes.

    Every configured locale is indexed on construction. Queries take a
    snapshot via :meth:`get`, which never builds or stores anything;
    :meth:`rebuild` is the only mutation and replaces whole index objects, so
    a snapshot is never changed under a running query.
    """

    def __init__(self, source: ContentSource, locales: Iterable[str], default_locale: str = DEFAULT_LOCALE) -> None:
        self.source = source
        self.default_locale = default_locale
        self.locales = tuple(dict.fromkeys([default_locale, *locales]))
        self._indexes: dict[str, ContentIndex] = {}
        self.rebuild()

    def rebuild(self, locale: str | None = None) -> None:
        """Rebuild one locale, or every configured locale when ``locale`` is None.

        Raises:
            ValueError: if ``locale`` is not one of the configured locales.
        """
        if locale is not None and locale not in self.locales:
            raise ValueError(f"Locale {locale!r} is not indexed; configured: {', '.join(self.locales)}")
        for target in (locale,) if locale else self.locales:
            self._indexes[target] = build_index(self.source, target)

    def get(self, locale: str | None = None) -> ContentIndex:
        """Snapshot for ``locale``; unknown locales get an empty index."""
        locale = locale or self.default_locale
        index = self._indexes.get(locale)
        return index if index is not None else ContentIndex(locale=locale)

    def sizes(self) -> dict[str, int]:
        return {locale: len(self._indexes[locale]) for locale in self.locales}
