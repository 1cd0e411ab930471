"""Filesystem content loader.

Reads ``<content_dir>/<locale>/**/*.md|*.mdx`` files, validates their front
matter and exposes the locale's collection plus a few collection queries used
by page surfaces (by slug, topic, type, level, related content).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
import logging
import math
from pathlib import Path
import re
from typing import Any, Protocol

from pydantic import ValidationError

from content_search.content.front_matter import parse_front_matter
from content_search.content.schema import ContentLevel, ContentType, Frontmatter, Topic
from content_search.exceptions import ContentLoadError


logger = logging.getLogger(__name__)

CONTENT_SUFFIXES = (".md", ".mdx")
WORDS_PER_MINUTE = 200
_WORD_PATTERN = re.compile(r"\S+")


class ContentSource(Protocol):
    """Anything that can hand the index builder a locale's records."""

    def load(self, locale: str) -> Sequence[Mapping[str, Any]]: ...


def estimate_read_time(body: str) -> int:
    """Whole minutes needed to read ``body`` at 200 words per minute."""
    return math.ceil(len(_WORD_PATTERN.findall(body)) / WORDS_PER_MINUTE)


@dataclass(frozen=True)
class ContentItem:
    """A validated content file."""

    frontmatter: Frontmatter
    body: str
    path: Path
    read_time: int

    @property
    def slug(self) -> str:
        return self.frontmatter.slug

    def to_record(self) -> dict[str, Any]:
        """Project the item onto the flat record consumed by the index builder."""
        fm = self.frontmatter
        return {
            "slug": fm.slug,
            "title": fm.title,
            "summary": fm.summary,
            "topic": fm.topic.value,
            "type": fm.type.value,
            "level": fm.level.value,
            "tags": list(fm.tags),
            "last_updated": fm.last_updated,
            "read_time": fm.read_time if fm.read_time is not None else self.read_time,
        }


def load_content_file(path: Path) -> ContentItem:
    """Parse and validate a single content file.

    Raises:
        ContentLoadError: if the file is unreadable, has no front matter or
            fails validation.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ContentLoadError(path, f"unreadable: {exc}") from exc
    metadata, body = parse_front_matter(text)
    if not metadata:
        raise ContentLoadError(path, "missing or invalid front matter")
    try:
        frontmatter = Frontmatter.model_validate(metadata)
    except ValidationError as exc:
        raise ContentLoadError(path, f"invalid front matter: {exc.error_count()} error(s)\n{exc}") from exc
    return ContentItem(frontmatter=frontmatter, body=body, path=path, read_time=estimate_read_time(body))


class FileContentLoader:
    """Loads content items from a directory tree partitioned by locale."""

    def __init__(self, content_dir: Path | str) -> None:
        self.content_dir = Path(content_dir)

    def _content_files(self, locale: str) -> list[Path]:
        locale_dir = self.content_dir / locale
        if not locale_dir.is_dir():
            return []
        # Sorted so that insertion order is stable across platforms
        return sorted(
            path for path in locale_dir.rglob("*") if path.is_file() and path.suffix in CONTENT_SUFFIXES
        )

    def get_all_content(self, locale: str = "en") -> list[ContentItem]:
        """Load every valid content item for a locale; invalid files are logged and skipped."""
        items: list[ContentItem] = []
        for path in self._content_files(locale):
            try:
                items.append(load_content_file(path))
            except ContentLoadError as exc:
                logger.error("Error parsing front matter for %s: %s", exc.path, exc.reason)
        logger.debug("Loaded %d content items for locale %s", len(items), locale)
        return items

    def load(self, locale: str) -> list[dict[str, Any]]:
        return [item.to_record() for item in self.get_all_content(locale)]

    def get_content_by_slug(self, slug: str, locale: str = "en") -> ContentItem | None:
        return next((item for item in self.get_all_content(locale) if item.slug == slug), None)

    def get_content_by_topic(self, topic: Topic, locale: str = "en") -> list[ContentItem]:
        return [item for item in self.get_all_content(locale) if item.frontmatter.topic == topic]

    def get_content_by_type(self, content_type: ContentType, locale: str = "en") -> list[ContentItem]:
        return [item for item in self.get_all_content(locale) if item.frontmatter.type == content_type]

    def get_content_by_level(self, level: ContentLevel, locale: str = "en") -> list[ContentItem]:
        return [item for item in self.get_all_content(locale) if item.frontmatter.level == level]

    def get_all_topics(self, locale: str = "en") -> list[Topic]:
        """Topics in use, in first-seen order."""
        return list(dict.fromkeys(item.frontmatter.topic for item in self.get_all_content(locale)))

    def get_all_tags(self, locale: str = "en") -> list[str]:
        return sorted({tag for item in self.get_all_content(locale) for tag in item.frontmatter.tags})

    def get_popular_content(self, locale: str = "en", limit: int = 6) -> list[ContentItem]:
        # No analytics feed yet, so "popular" is the head of the collection
        return self.get_all_content(locale)[:limit]

    def get_related_content(self, slug: str, locale: str = "en", limit: int = 4) -> list[ContentItem]:
        """Rank other items by shared topic, shared tags and level.

        Same topic scores 2, each shared tag 1 and same level 0.5. Ties keep
        collection order.
        """
        items = self.get_all_content(locale)
        current = next((item for item in items if item.slug == slug), None)
        if current is None:
            return []

        current_tags = set(current.frontmatter.tags)
        scored: list[tuple[float, ContentItem]] = []
        for item in items:
            if item.slug == slug:
                continue
            fm = item.frontmatter
            score = 0.0
            if fm.topic == current.frontmatter.topic:
                score += 2
            score += sum(1 for tag in fm.tags if tag in current_tags)
            if fm.level == current.frontmatter.level:
                score += 0.5
            scored.append((score, item))

        scored.sort(key=lambda pair: pair[0], reverse=True)
        return [item for _, item in scored[:limit]]


class StaticContentSource:
    """In-memory content source keyed by locale."""

    def __init__(self, records: Mapping[str, Sequence[Mapping[str, Any]]]) -> None:
        self._records = {locale: list(items) for locale, items in records.items()}

    def load(self, locale: str) -> list[Mapping[str, Any]]:
        return list(self._records.get(locale, []))
