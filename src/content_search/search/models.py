"""Search data models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Flag
from typing import Any

from content_search.content.schema import ContentLevel, ContentType, Topic


class MatchedField(Flag):
    """Fields of an entry that contributed to a match."""

    NONE = 0
    TITLE = 1
    SUMMARY = 2
    TAGS = 4

    @property
    def names(self) -> list[str]:
        """Matched field names in title, summary, tags order."""
        return [member.name.lower() for member in _FIELD_ORDER if member in self]


_FIELD_ORDER = (MatchedField.TITLE, MatchedField.SUMMARY, MatchedField.TAGS)


@dataclass(frozen=True)
class ContentIndexEntry:
    """One searchable record per content item per locale."""

    slug: str
    title: str
    summary: str
    topic: Topic
    type: ContentType
    level: ContentLevel
    locale: str
    tags: tuple[str, ...] = ()
    last_updated: str | None = None
    read_time: int | None = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any], locale: str) -> ContentIndexEntry:
        """Build an entry from a content source record.

        Raises:
            KeyError: if a required field is missing.
            ValueError: if topic, type or level is outside its enum.
        """
        return cls(
            slug=record["slug"],
            title=record["title"],
            summary=record["summary"],
            topic=Topic(record["topic"]),
            type=ContentType(record["type"]),
            level=ContentLevel(record["level"]),
            locale=locale,
            tags=tuple(record.get("tags") or ()),
            last_updated=record.get("last_updated"),
            read_time=record.get("read_time"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "slug": self.slug,
            "title": self.title,
            "summary": self.summary,
            "topic": self.topic.value,
            "type": self.type.value,
            "level": self.level.value,
            "locale": self.locale,
            "tags": list(self.tags),
            "last_updated": self.last_updated,
            "read_time": self.read_time,
        }


@dataclass(frozen=True)
class SearchFilters:
    """Pre-validated filters applied before scoring."""

    topic: Topic | None = None
    type: ContentType | None = None
    level: ContentLevel | None = None
    limit: int | None = None

    def accepts(self, entry: ContentIndexEntry) -> bool:
        if self.topic is not None and entry.topic != self.topic:
            return False
        if self.type is not None and entry.type != self.type:
            return False
        return self.level is None or entry.level == self.level


@dataclass(frozen=True)
class ScoredEntry:
    """An entry paired with its relevance score; used only while ranking."""

    entry: ContentIndexEntry
    score: int
    matched_on: MatchedField


@dataclass(frozen=True)
class SearchResult:
    """An index entry annotated with where and how it matched."""

    entry: ContentIndexEntry
    matched_on: MatchedField
    highlights: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.entry.to_dict(),
            "matched_on": self.matched_on.names,
            "highlights": dict(self.highlights),
        }
