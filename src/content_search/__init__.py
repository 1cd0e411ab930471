"""Full-text search for a multilingual, file-based content knowledge base."""

__version__ = "0.1.0"
