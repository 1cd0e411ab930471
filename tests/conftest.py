"""Shared test fixtures and configuration."""

import logging
import os
from pathlib import Path
import textwrap

import pytest


# Complete test environment that overrides every config value read from the env
TEST_ENV = {
    "CONTENT_SEARCH_CONTENT_DIR": "content",
    "CONTENT_SEARCH_DEFAULT_LOCALE": "en",
    "CONTENT_SEARCH_LOCALES": "en,de",
    "CONTENT_SEARCH_SEARCH_MAX_LIMIT": "100",
    "CONTENT_SEARCH_SUGGESTION_LIMIT": "5",
    "CONTENT_SEARCH_SUGGESTION_MAX_LIMIT": "20",
    "CONTENT_SEARCH_SUGGESTION_MIN_LENGTH": "2",
    "CONTENT_SEARCH_DID_YOU_MEAN_MIN_LENGTH": "3",
    "CONTENT_SEARCH_TRENDING_SEARCHES": "",
    "CONTENT_SEARCH_HOST": "127.0.0.1",
    "CONTENT_SEARCH_PORT": "8080",
    "CONTENT_SEARCH_LOG_LEVEL": "info",
    "CONTENT_SEARCH_LOG_JSON": "true",
    "CONTENT_SEARCH_ACCESS_LOG": "false",
}

for key, value in TEST_ENV.items():
    os.environ[key] = value

from content_search.content.loader import StaticContentSource
from content_search.search.index import ContentIndex, build_index


EN_RECORDS = [
    {
        "slug": "what-is-bitcoin",
        "title": "What is Bitcoin?",
        "summary": "A digital currency without banks.",
        "tags": ["basics", "currency"],
        "topic": "basics",
        "level": "beginner",
        "type": "qa",
    },
    {
        "slug": "bitcoin-energy-use",
        "title": "Does Bitcoin waste energy?",
        "summary": "How proof-of-work mining turns electricity into network security.",
        "tags": ["energy", "mining", "proof-of-work"],
        "topic": "mining",
        "level": "intermediate",
        "type": "criticism",
    },
    {
        "slug": "lightning-network",
        "title": "What is the Lightning Network?",
        "summary": "A second layer for fast, cheap Bitcoin payments using payment channels.",
        "tags": ["lightning", "payments", "layer-2"],
        "topic": "lightning",
        "level": "intermediate",
        "type": "explainer",
    },
    {
        "slug": "store-keys-safely",
        "title": "How do I store my keys safely?",
        "summary": "Hardware wallets and seed phrases keep your bitcoin under your control.",
        "tags": ["security", "wallets", "keys"],
        "topic": "security",
        "level": "beginner",
        "type": "qa",
    },
    {
        "slug": "is-it-a-ponzi",
        "title": "Is it a Ponzi scheme?",
        "summary": "Why a transparent monetary network differs from fraud.",
        "tags": ["criticism", "ponzi"],
        "topic": "criticism",
        "level": "beginner",
        "type": "criticism",
    },
]

DE_RECORDS = [
    {
        "slug": "was-ist-bitcoin",
        "title": "Was ist Bitcoin?",
        "summary": "Eine digitale Währung ohne Banken.",
        "tags": ["grundlagen", "währung"],
        "topic": "basics",
        "level": "beginner",
        "type": "qa",
    },
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Pin environment variables for each test."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo configure_logging() calls made by the code under test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def content_source() -> StaticContentSource:
    return StaticContentSource({"en": EN_RECORDS, "de": DE_RECORDS})


@pytest.fixture
def en_index(content_source) -> ContentIndex:
    return build_index(content_source, "en")


def _front_matter_file(record: dict, body: str = "Body text.") -> str:
    tags = ", ".join(record["tags"])
    return textwrap.dedent(
        f"""\
        ---
        slug: {record["slug"]}
        title: "{record["title"]}"
        summary: "{record["summary"]}"
        tags: [{tags}]
        topic: {record["topic"]}
        level: {record["level"]}
        type: {record["type"]}
        lastUpdated: 2024-01-15
        ---
        """
    ) + body + "\n"


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """A content tree on disk mirroring EN_RECORDS and DE_RECORDS."""
    root = tmp_path / "content"
    for locale, records in (("en", EN_RECORDS), ("de", DE_RECORDS)):
        for position, record in enumerate(records):
            path = root / locale / f"{position:02d}-{record['slug']}.mdx"
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(_front_matter_file(record), encoding="utf-8")
    return root
