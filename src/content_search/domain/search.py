"""Request and response value objects for the search API.

The request models are the only place filter values are checked against the
topic/type/level enums; everything behind them trusts the values.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator, model_validator
from pydantic.alias_generators import to_camel

from content_search.content.labels import content_type_label, level_label, topic_label
from content_search.content.schema import ContentLevel, ContentType, Topic
from content_search.search.models import SearchFilters, SearchResult


MAX_SEARCH_LIMIT = 100
MAX_SUGGESTION_LIMIT = 20
LOCALE_PATTERN = r"^[A-Za-z]{2,3}(?:-[A-Za-z0-9]{2,8})*$"


class _QueryParams(BaseModel):
    """Base for models parsed from URL query parameters."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    q: str = ""
    locale: str = Field(default="en", pattern=LOCALE_PATTERN)

    @model_validator(mode="before")
    @classmethod
    def _drop_blank_values(cls, data: Any) -> Any:
        # ?topic=&limit= behaves like the parameter was not sent
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if key == "q" or value not in ("", None)}
        return data

    @staticmethod
    def _check_limit(value: int | None, info: ValidationInfo, key: str, default_max: int) -> int | None:
        maximum = (info.context or {}).get(key, default_max)
        if value is not None and value > maximum:
            raise ValueError(f"limit must be less than or equal to {maximum}")
        return value


class SearchParams(_QueryParams):
    """Validated ``GET /api/search`` parameters."""

    topic: Topic | None = None
    type: ContentType | None = None
    level: ContentLevel | None = None
    limit: int | None = Field(default=None, ge=1)

    @field_validator("limit")
    @classmethod
    def _limit_within_max(cls, value: int | None, info: ValidationInfo) -> int | None:
        return cls._check_limit(value, info, "max_limit", MAX_SEARCH_LIMIT)

    def to_filters(self) -> SearchFilters:
        return SearchFilters(topic=self.topic, type=self.type, level=self.level, limit=self.limit)


class SuggestionParams(_QueryParams):
    """Validated ``GET /api/search/suggestions`` parameters."""

    limit: int = Field(default=5, ge=1)

    @field_validator("limit")
    @classmethod
    def _limit_within_max(cls, value: int, info: ValidationInfo) -> int:
        return cls._check_limit(value, info, "max_limit", MAX_SUGGESTION_LIMIT)


class DidYouMeanParams(_QueryParams):
    """Validated ``GET /api/search/did-you-mean`` parameters."""


class _CamelModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class EnrichedSearchResult(_CamelModel):
    """A search result plus locale-aware display labels, serialized camelCase."""

    slug: str
    title: str
    summary: str
    topic: Topic
    type: ContentType
    level: ContentLevel
    tags: list[str]
    locale: str
    last_updated: str | None = None
    read_time: int | None = None
    matched_on: list[str]
    highlights: dict[str, str]
    topic_label: str
    type_label: str
    level_label: str
    level_color: str

    @classmethod
    def from_result(cls, result: SearchResult, display_locale: str) -> EnrichedSearchResult:
        entry = result.entry
        level = level_label(entry.level, display_locale)
        return cls(
            slug=entry.slug,
            title=entry.title,
            summary=entry.summary,
            topic=entry.topic,
            type=entry.type,
            level=entry.level,
            tags=list(entry.tags),
            locale=entry.locale,
            last_updated=entry.last_updated,
            read_time=entry.read_time,
            matched_on=result.matched_on.names,
            highlights=dict(result.highlights),
            topic_label=topic_label(entry.topic, display_locale).label,
            type_label=content_type_label(entry.type, display_locale),
            level_label=level.label,
            level_color=level.color,
        )


class SearchResponse(_CamelModel):
    results: list[EnrichedSearchResult]
    query: str


class SuggestionResponse(_CamelModel):
    suggestions: list[str]
    query: str


class DidYouMeanResponse(_CamelModel):
    suggestion: str | None
    query: str


def validation_error_detail(exc: ValidationError) -> list[dict[str, str]]:
    """Flatten a pydantic error into field-level detail for a 400 response."""
    detail = []
    for error in exc.errors(include_url=False):
        field = ".".join(str(part) for part in error["loc"]) or "__root__"
        detail.append({"field": field, "message": error["msg"], "type": error["type"]})
    return detail
