"""Content schema: closed enums and validated front matter.

The enums are the single source of truth for the filter space used by the
search API; the front matter model validates every content file before it
reaches the index.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator


class Topic(str, Enum):
    """Topic identifiers an article is filed under."""

    BASICS = "basics"
    SECURITY = "security"
    MINING = "mining"
    LIGHTNING = "lightning"
    ECONOMICS = "economics"
    CRITICISM = "criticism"
    MONEY = "money"
    DEV = "dev"


class ContentLevel(str, Enum):
    """Reader level an article targets."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ContentType(str, Enum):
    """Content classification."""

    QA = "qa"
    EXPLAINER = "explainer"
    CRITICISM = "criticism"
    GLOSSARY = "glossary"
    SOURCE = "source"


class SourceType(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    VIDEO = "video"
    BOOK = "book"
    ARTICLE = "article"
    PODCAST = "podcast"


class Source(BaseModel):
    """A reference cited by an article."""

    model_config = ConfigDict(frozen=True)

    title: str
    url: HttpUrl | None = None
    author: str | None = None
    type: SourceType
    description: str | None = None


class Frontmatter(BaseModel):
    """Validated YAML front matter of a content file.

    Field names follow the camelCase keys used in the files; the Python
    attributes are snake_case.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    slug: str = Field(min_length=1)
    title: str = Field(min_length=1)
    summary: str = Field(min_length=1, max_length=300)
    tags: tuple[str, ...] = ()
    topic: Topic
    level: ContentLevel
    type: ContentType
    language: str = "en"
    last_updated: str = Field(alias="lastUpdated")
    sources: tuple[Source, ...] = ()
    read_time: int | None = Field(default=None, alias="readTime")
    tldr: Annotated[tuple[str, ...], Field(max_length=5)] | None = None
    related_questions: tuple[str, ...] = Field(default=(), alias="relatedQuestions")
    why_people_ask: str | None = Field(default=None, alias="whyPeopleAsk")
    steelman_objection: str | None = Field(default=None, alias="steelmanObjection")
    what_is_true: tuple[str, ...] | None = Field(default=None, alias="whatIsTrue")
    what_is_uncertain: tuple[str, ...] | None = Field(default=None, alias="whatIsUncertain")

    @field_validator("last_updated", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> Any:
        # YAML turns unquoted 2024-01-15 into a date object
        if isinstance(value, date):
            return value.isoformat()
        return value

    @field_validator("tags", "sources", "related_questions", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return () if value is None else value
