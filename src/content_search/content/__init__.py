"""Content loading: schema, front matter parsing and filesystem loader."""

from content_search.content.loader import (
    ContentItem,
    ContentSource,
    FileContentLoader,
    StaticContentSource,
    estimate_read_time,
    load_content_file,
)
from content_search.content.schema import ContentLevel, ContentType, Frontmatter, Topic


__all__ = [
    "ContentItem",
    "ContentLevel",
    "ContentSource",
    "ContentType",
    "FileContentLoader",
    "Frontmatter",
    "StaticContentSource",
    "Topic",
    "estimate_read_time",
    "load_content_file",
]
