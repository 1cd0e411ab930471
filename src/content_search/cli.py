"""Command-line access to the search core.

Prints JSON (camelCase, same shape as the HTTP API) so the output can be piped
into other tools.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path
import sys
import textwrap
from typing import Any

import orjson
from pydantic import ValidationError

from content_search.config import Settings
from content_search.content.loader import FileContentLoader
from content_search.domain.search import (
    DidYouMeanParams,
    EnrichedSearchResult,
    SearchParams,
    SearchResponse,
    SuggestionParams,
    validation_error_detail,
)
from content_search.observability import configure_logging
from content_search.search.index import IndexRegistry
from content_search.service_layer.search_service import SearchService


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="content-search",
        description="Query the localized content index",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent(
            """
            Examples:
              content-search search bitcoin --topic basics --limit 5
              content-search suggest bit --locale de
              content-search did-you-mean bitconi
              content-search serve
            """
        ).strip(),
    )
    parser.add_argument(
        "--content-dir",
        type=Path,
        default=None,
        help="Content root holding <locale>/ directories (default: CONTENT_SEARCH_CONTENT_DIR or ./content)",
    )
    parser.add_argument("--verbose", action="store_true", help="Log at DEBUG level to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    search_parser = subparsers.add_parser("search", help="Ranked search with highlights")
    search_parser.add_argument("query")
    search_parser.add_argument("--topic")
    search_parser.add_argument("--type")
    search_parser.add_argument("--level")
    search_parser.add_argument("--limit")
    search_parser.add_argument("--locale", default="en")

    suggest_parser = subparsers.add_parser("suggest", help="Autocomplete suggestions")
    suggest_parser.add_argument("query")
    suggest_parser.add_argument("--limit", default="5")
    suggest_parser.add_argument("--locale", default="en")

    dym_parser = subparsers.add_parser("did-you-mean", help="Spelling correction for a query")
    dym_parser.add_argument("query")
    dym_parser.add_argument("--locale", default="en")

    subparsers.add_parser("trending", help="Curated trending searches")
    subparsers.add_parser("serve", help="Run the HTTP API")
    return parser


def _emit(payload: Any) -> None:
    sys.stdout.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8") + "\n")


def _build_service(settings: Settings) -> SearchService:
    registry = IndexRegistry(
        FileContentLoader(settings.content_dir),
        settings.get_locales(),
        default_locale=settings.default_locale,
    )
    return SearchService(
        registry,
        trending=settings.get_trending_searches(),
        suggestion_min_length=settings.suggestion_min_length,
        did_you_mean_min_length=settings.did_you_mean_min_length,
    )


def _run_query(args: argparse.Namespace, settings: Settings, service: SearchService) -> None:
    if args.command == "search":
        params = SearchParams.model_validate(
            {
                "q": args.query,
                "topic": args.topic,
                "type": args.type,
                "level": args.level,
                "limit": args.limit,
                "locale": args.locale,
            },
            context={"max_limit": settings.search_max_limit},
        )
        display_locale = params.locale if params.locale in settings.get_locales() else settings.default_locale
        results = service.search(params.q, params.to_filters(), locale=params.locale)
        response = SearchResponse(
            results=[EnrichedSearchResult.from_result(result, display_locale) for result in results],
            query=params.q,
        )
        _emit(response.model_dump(by_alias=True, mode="json"))
    elif args.command == "suggest":
        params = SuggestionParams.model_validate(
            {"q": args.query, "limit": args.limit, "locale": args.locale},
            context={"max_limit": settings.suggestion_max_limit},
        )
        _emit({"suggestions": service.suggestions(params.q, params.limit, locale=params.locale), "query": params.q})
    elif args.command == "did-you-mean":
        params = DidYouMeanParams.model_validate({"q": args.query, "locale": args.locale})
        _emit({"suggestion": service.did_you_mean(params.q, locale=params.locale), "query": params.q})
    else:
        _emit({"trending": service.trending_searches()})


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    overrides: dict[str, Any] = {}
    if args.content_dir is not None:
        overrides["content_dir"] = args.content_dir
    try:
        settings = Settings(**overrides)
    except ValidationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    if args.command == "serve":
        import uvicorn

        from content_search.app import create_app

        uvicorn.run(
            create_app(settings),
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level,
            log_config=None,
        )
        return 0

    # Logs go to stderr so stdout stays valid JSON
    configure_logging(level="debug" if args.verbose else "warning", json_output=False, stream=sys.stderr)

    try:
        _run_query(args, settings, _build_service(settings))
    except ValidationError as exc:
        for error in validation_error_detail(exc):
            print(f"{error['field']}: {error['message']}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
