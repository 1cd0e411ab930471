"""Unit tests for autocomplete, did-you-mean and trending searches."""

import pytest

from content_search.content.loader import StaticContentSource
from content_search.search.index import ContentIndex, build_index
from content_search.search.matcher import search
from content_search.search.suggestions import (
    DEFAULT_TRENDING_SEARCHES,
    get_did_you_mean,
    get_search_suggestions,
    get_trending_searches,
)


pytestmark = pytest.mark.unit


class TestSearchSuggestions:
    def test_titles_in_index_order(self, en_index):
        assert get_search_suggestions(en_index, "bit") == ["What is Bitcoin?", "Does Bitcoin waste energy?"]

    def test_tags_after_titles(self, en_index):
        assert get_search_suggestions(en_index, "pay") == ["payments"]
        assert get_search_suggestions(en_index, "mining") == ["mining"]

    def test_titles_before_tags(self, en_index):
        suggestions = get_search_suggestions(en_index, "ponzi")
        assert suggestions == ["Is it a Ponzi scheme?", "ponzi"]

    def test_case_insensitive_and_trimmed(self, en_index):
        assert get_search_suggestions(en_index, "  LIGHTNING ") == ["What is the Lightning Network?", "lightning"]

    def test_respects_limit(self, en_index):
        assert get_search_suggestions(en_index, "is", limit=2) == ["What is Bitcoin?", "What is the Lightning Network?"]
        assert get_search_suggestions(en_index, "is") == [
            "What is Bitcoin?",
            "What is the Lightning Network?",
            "Is it a Ponzi scheme?",
            "criticism",
        ]

    def test_short_query_returns_nothing(self, en_index):
        assert get_search_suggestions(en_index, "b") == []
        assert get_search_suggestions(en_index, "  ") == []

    def test_configurable_min_length(self, en_index):
        assert get_search_suggestions(en_index, "bit", min_length=4) == []

    def test_no_duplicates(self):
        source = StaticContentSource(
            {
                "en": [
                    {"slug": "a", "title": "Mining", "summary": "S", "tags": ["mining"], "topic": "mining", "level": "beginner", "type": "qa"},
                    {"slug": "b", "title": "Mining", "summary": "S", "tags": ["Mining"], "topic": "mining", "level": "beginner", "type": "qa"},
                ]
            }
        )
        assert get_search_suggestions(build_index(source, "en"), "min") == ["Mining", "mining"]

    def test_empty_index(self):
        assert get_search_suggestions(ContentIndex(locale="en"), "bitcoin") == []


class TestDidYouMean:
    def test_corrects_misspelled_title_word(self, en_index):
        assert get_did_you_mean(en_index, "bitconi") == "Bitcoin"

    def test_corrects_misspelled_tag(self, en_index):
        assert get_did_you_mean(en_index, "ligthning") == "Lightning"

    def test_corrects_each_word_of_multi_word_query(self, en_index):
        assert get_did_you_mean(en_index, "bitconi enrgy") == "Bitcoin energy"

    def test_no_correction_when_query_already_has_results(self, en_index):
        assert search(en_index, "bitcoin enrgy")
        assert get_did_you_mean(en_index, "bitcoin enrgy") is None
        assert get_did_you_mean(en_index, "ponzi xyzzyq") is None

    def test_known_query_has_no_correction(self, en_index):
        assert get_did_you_mean(en_index, "bitcoin") is None
        assert get_did_you_mean(en_index, "proof-of-work mining") is None

    def test_short_query_has_no_correction(self, en_index):
        assert get_did_you_mean(en_index, "ab") is None

    def test_nothing_close_enough(self, en_index):
        assert get_did_you_mean(en_index, "xyznonexistent") is None

    def test_empty_index(self):
        assert get_did_you_mean(ContentIndex(locale="en"), "bitconi") is None

    def test_never_returns_the_query(self, en_index):
        for query in ("bitconi", "ligthning", "bitconi enrgy", "walets"):
            suggestion = get_did_you_mean(en_index, query)
            assert suggestion is None or suggestion.lower() != query.lower()

    def test_deterministic(self, en_index):
        assert {get_did_you_mean(en_index, "walets") for _ in range(5)} == {"wallets"}


class TestTrendingSearches:
    def test_default_list(self):
        assert get_trending_searches() == list(DEFAULT_TRENDING_SEARCHES)
        assert get_trending_searches()[0] == "What is Bitcoin?"

    def test_curated_list(self):
        assert get_trending_searches(["Halving", "Self custody"]) == ["Halving", "Self custody"]

    def test_empty_curated_list_uses_default(self):
        assert get_trending_searches([]) == list(DEFAULT_TRENDING_SEARCHES)
