"""Service layer - search use cases over the per-locale indexes."""

from .search_service import SearchService


__all__ = ["SearchService"]
