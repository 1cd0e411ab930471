"""Unit tests for the content-search command line."""

import orjson
import pytest

from content_search.cli import build_argument_parser, main


pytestmark = pytest.mark.unit


def _run(capsys, content_dir, *argv):
    exit_code = main(["--content-dir", str(content_dir), *argv])
    captured = capsys.readouterr()
    return exit_code, captured.out, captured.err


class TestCli:
    def test_search(self, capsys, content_dir):
        exit_code, out, _ = _run(capsys, content_dir, "search", "bitcoin", "--limit", "2")
        assert exit_code == 0
        payload = orjson.loads(out)
        assert payload["query"] == "bitcoin"
        assert [result["slug"] for result in payload["results"]] == ["what-is-bitcoin", "bitcoin-energy-use"]
        assert payload["results"][0]["highlights"]["title"] == "What is <mark>Bitcoin</mark>?"
        assert payload["results"][0]["lastUpdated"] == "2024-01-15"
        assert payload["results"][0]["readTime"] == 1

    def test_search_with_filters_and_locale(self, capsys, content_dir):
        exit_code, out, _ = _run(capsys, content_dir, "search", "bitcoin", "--topic", "basics", "--locale", "de")
        assert exit_code == 0
        result = orjson.loads(out)["results"][0]
        assert result["slug"] == "was-ist-bitcoin"
        assert result["topicLabel"] == "Bitcoin-Grundlagen"

    def test_invalid_filter_exits_with_status_2(self, capsys, content_dir):
        exit_code, out, err = _run(capsys, content_dir, "search", "bitcoin", "--topic", "astrology")
        assert exit_code == 2
        assert out == ""
        assert err.startswith("topic:")

    def test_invalid_limit(self, capsys, content_dir):
        exit_code, _, err = _run(capsys, content_dir, "search", "bitcoin", "--limit", "0")
        assert exit_code == 2
        assert "limit" in err

    def test_suggest(self, capsys, content_dir):
        exit_code, out, _ = _run(capsys, content_dir, "suggest", "bit", "--limit", "1")
        assert exit_code == 0
        assert orjson.loads(out) == {"suggestions": ["What is Bitcoin?"], "query": "bit"}

    def test_did_you_mean(self, capsys, content_dir):
        _, out, _ = _run(capsys, content_dir, "did-you-mean", "bitconi")
        assert orjson.loads(out) == {"suggestion": "Bitcoin", "query": "bitconi"}

    def test_trending(self, capsys, content_dir):
        _, out, _ = _run(capsys, content_dir, "trending")
        assert orjson.loads(out)["trending"][0] == "What is Bitcoin?"

    def test_invalid_content_files_are_reported_on_stderr(self, capsys, content_dir):
        (content_dir / "en" / "99-broken.md").write_text("---\nslug: broken\n---\n", encoding="utf-8")
        exit_code, out, err = _run(capsys, content_dir, "search", "ponzi")
        assert exit_code == 0
        assert orjson.loads(out)["results"][0]["slug"] == "is-it-a-ponzi"
        assert "99-broken.md" in err

    def test_invalid_configuration(self, capsys, monkeypatch, content_dir):
        monkeypatch.setenv("CONTENT_SEARCH_DEFAULT_LOCALE", "fr")
        exit_code, _, err = _run(capsys, content_dir, "trending")
        assert exit_code == 2
        assert "Invalid configuration" in err

    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            build_argument_parser().parse_args([])
