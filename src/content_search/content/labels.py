"""Locale-aware display labels for topics, content types and levels.

These labels live outside the search core; the API layer uses them to enrich
results. Locales without a translation fall back to English.
"""

from __future__ import annotations

from typing import NamedTuple

from content_search.content.schema import ContentLevel, ContentType, Topic


FALLBACK_LOCALE = "en"


class TopicLabel(NamedTuple):
    label: str
    description: str
    icon: str


class LevelLabel(NamedTuple):
    label: str
    color: str


TOPICS: dict[str, dict[Topic, TopicLabel]] = {
    "en": {
        Topic.BASICS: TopicLabel("Bitcoin Basics", "Fundamental concepts and how Bitcoin works", "₿"),
        Topic.SECURITY: TopicLabel("Security & Self-Custody", "Protecting your Bitcoin and managing keys", "🔐"),
        Topic.MINING: TopicLabel("Mining & Energy", "How mining secures the network", "⛏️"),
        Topic.LIGHTNING: TopicLabel("Lightning & Payments", "Fast, cheap Bitcoin transactions", "⚡"),
        Topic.ECONOMICS: TopicLabel("Monetary Economics", "Bitcoin as money and economic theory", "📊"),
        Topic.CRITICISM: TopicLabel("Criticism & Concerns", "Common objections addressed fairly", "🤔"),
        Topic.MONEY: TopicLabel("Sound Money", "Austrian economics and monetary history", "🪙"),
        Topic.DEV: TopicLabel("Development", "Building on Bitcoin", "💻"),
    },
    "de": {
        Topic.BASICS: TopicLabel("Bitcoin-Grundlagen", "Grundbegriffe und wie Bitcoin funktioniert", "₿"),
        Topic.SECURITY: TopicLabel("Sicherheit & Verwahrung", "Bitcoin schützen und Schlüssel verwalten", "🔐"),
        Topic.MINING: TopicLabel("Mining & Energie", "Wie Mining das Netzwerk sichert", "⛏️"),
        Topic.LIGHTNING: TopicLabel("Lightning & Zahlungen", "Schnelle, günstige Bitcoin-Transaktionen", "⚡"),
        Topic.ECONOMICS: TopicLabel("Geldökonomie", "Bitcoin als Geld und ökonomische Theorie", "📊"),
        Topic.CRITICISM: TopicLabel("Kritik & Bedenken", "Häufige Einwände fair beantwortet", "🤔"),
        Topic.MONEY: TopicLabel("Gesundes Geld", "Österreichische Schule und Geldgeschichte", "🪙"),
        Topic.DEV: TopicLabel("Entwicklung", "Auf Bitcoin aufbauen", "💻"),
    },
}

CONTENT_TYPES: dict[str, dict[ContentType, str]] = {
    "en": {
        ContentType.QA: "Q&A",
        ContentType.EXPLAINER: "Explainer",
        ContentType.CRITICISM: "Criticism",
        ContentType.GLOSSARY: "Glossary",
        ContentType.SOURCE: "Source",
    },
    "de": {
        ContentType.QA: "F&A",
        ContentType.EXPLAINER: "Erklärung",
        ContentType.CRITICISM: "Kritik",
        ContentType.GLOSSARY: "Glossar",
        ContentType.SOURCE: "Quelle",
    },
}

LEVELS: dict[str, dict[ContentLevel, LevelLabel]] = {
    "en": {
        ContentLevel.BEGINNER: LevelLabel("Beginner", "var(--color-success)"),
        ContentLevel.INTERMEDIATE: LevelLabel("Intermediate", "var(--color-warning)"),
        ContentLevel.ADVANCED: LevelLabel("Advanced", "var(--color-error)"),
    },
    "de": {
        ContentLevel.BEGINNER: LevelLabel("Einsteiger", "var(--color-success)"),
        ContentLevel.INTERMEDIATE: LevelLabel("Fortgeschritten", "var(--color-warning)"),
        ContentLevel.ADVANCED: LevelLabel("Experte", "var(--color-error)"),
    },
}


def topic_label(topic: Topic, locale: str) -> TopicLabel:
    return TOPICS.get(locale, TOPICS[FALLBACK_LOCALE])[topic]


def content_type_label(content_type: ContentType, locale: str) -> str:
    return CONTENT_TYPES.get(locale, CONTENT_TYPES[FALLBACK_LOCALE])[content_type]


def level_label(level: ContentLevel, locale: str) -> LevelLabel:
    return LEVELS.get(locale, LEVELS[FALLBACK_LOCALE])[level]
