"""Unit tests for search API request and response models."""

from pydantic import ValidationError
import pytest

from content_search.content.schema import ContentLevel, ContentType, Topic
from content_search.domain.search import (
    DidYouMeanParams,
    EnrichedSearchResult,
    SearchParams,
    SuggestionParams,
    validation_error_detail,
)
from content_search.search.matcher import search
from content_search.search.models import SearchFilters


pytestmark = pytest.mark.unit


def _errors(model, data, **kwargs):
    with pytest.raises(ValidationError) as exc_info:
        model.model_validate(data, **kwargs)
    return validation_error_detail(exc_info.value)


class TestSearchParams:
    def test_parses_query_string_values(self):
        params = SearchParams.model_validate(
            {"q": "bitcoin", "topic": "basics", "type": "qa", "level": "beginner", "limit": "5", "locale": "de"}
        )
        assert params.topic is Topic.BASICS
        assert params.type is ContentType.QA
        assert params.level is ContentLevel.BEGINNER
        assert params.limit == 5
        assert params.locale == "de"

    def test_defaults(self):
        params = SearchParams.model_validate({})
        assert params.q == ""
        assert params.locale == "en"
        assert params.to_filters() == SearchFilters()

    def test_blank_values_are_ignored(self):
        params = SearchParams.model_validate({"q": "", "topic": "", "limit": "", "locale": ""})
        assert params.topic is None
        assert params.limit is None
        assert params.locale == "en"

    def test_to_filters(self):
        params = SearchParams.model_validate({"q": "x", "topic": "mining", "limit": "3"})
        assert params.to_filters() == SearchFilters(topic=Topic.MINING, limit=3)

    def test_unknown_topic(self):
        detail = _errors(SearchParams, {"q": "bitcoin", "topic": "astrology"})
        assert [error["field"] for error in detail] == ["topic"]
        assert detail[0]["type"] == "enum"

    def test_unknown_type_and_level(self):
        detail = _errors(SearchParams, {"type": "video", "level": "expert"})
        assert {error["field"] for error in detail} == {"type", "level"}

    @pytest.mark.parametrize(("limit", "error_type"), [("0", "greater_than_equal"), ("101", "value_error"), ("abc", "int_parsing")])
    def test_invalid_limit(self, limit, error_type):
        detail = _errors(SearchParams, {"q": "bitcoin", "limit": limit})
        assert detail == [{"field": "limit", "message": detail[0]["message"], "type": error_type}]

    def test_limit_bounds_are_inclusive(self):
        assert SearchParams.model_validate({"limit": "1"}).limit == 1
        assert SearchParams.model_validate({"limit": "100"}).limit == 100

    def test_max_limit_from_context(self):
        assert SearchParams.model_validate({"limit": "10"}, context={"max_limit": 10}).limit == 10
        detail = _errors(SearchParams, {"limit": "11"}, context={"max_limit": 10})
        assert "less than or equal to 10" in detail[0]["message"]

    @pytest.mark.parametrize("locale", ["e", "english!", "12"])
    def test_invalid_locale(self, locale):
        assert _errors(SearchParams, {"locale": locale})[0]["field"] == "locale"

    def test_region_locale(self):
        assert SearchParams.model_validate({"locale": "de-AT"}).locale == "de-AT"


class TestSuggestionParams:
    def test_default_limit(self):
        assert SuggestionParams.model_validate({"q": "bit"}).limit == 5

    def test_limit_upper_bound(self):
        assert SuggestionParams.model_validate({"limit": "20"}).limit == 20
        assert _errors(SuggestionParams, {"limit": "21"})[0]["field"] == "limit"


class TestDidYouMeanParams:
    def test_ignores_unknown_parameters(self):
        params = DidYouMeanParams.model_validate({"q": "bitconi", "utm_source": "newsletter"})
        assert params.q == "bitconi"


class TestEnrichedSearchResult:
    def test_serializes_camel_case_with_labels(self, en_index):
        result = search(en_index, "bitcoin")[0]
        payload = EnrichedSearchResult.from_result(result, "en").model_dump(by_alias=True, mode="json")
        assert payload == {
            "slug": "what-is-bitcoin",
            "title": "What is Bitcoin?",
            "summary": "A digital currency without banks.",
            "topic": "basics",
            "type": "qa",
            "level": "beginner",
            "tags": ["basics", "currency"],
            "locale": "en",
            "lastUpdated": None,
            "readTime": None,
            "matchedOn": ["title"],
            "highlights": {"title": "What is <mark>Bitcoin</mark>?"},
            "topicLabel": "Bitcoin Basics",
            "typeLabel": "Q&A",
            "levelLabel": "Beginner",
            "levelColor": "var(--color-success)",
        }

    def test_display_locale_labels(self, en_index):
        result = search(en_index, "lightning")[0]
        enriched = EnrichedSearchResult.from_result(result, "de")
        assert enriched.topic_label == "Lightning & Zahlungen"
        assert enriched.type_label == "Erklärung"
        assert enriched.level_label == "Fortgeschritten"
        assert enriched.level_color == "var(--color-warning)"

    def test_unknown_display_locale_falls_back_to_english(self, en_index):
        result = search(en_index, "lightning")[0]
        assert EnrichedSearchResult.from_result(result, "fr").topic_label == "Lightning & Payments"
