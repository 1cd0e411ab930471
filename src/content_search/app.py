"""Main ASGI application entry point.

Usage:
    # Serve ./content with default settings
    python -m content_search.app

    # Or point at another content tree
    CONTENT_SEARCH_CONTENT_DIR=/srv/content python -m content_search.app
"""

import logging

from pydantic import ValidationError
from starlette.applications import Starlette

from content_search.app_builder import AppBuilder
from content_search.config import Settings


logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> Starlette:
    """Create the ASGI application, building every locale index up front."""
    return AppBuilder(settings).build()


def main() -> int:
    """Run the search server under uvicorn."""
    import uvicorn

    try:
        settings = Settings()
    except ValidationError as exc:
        logger.error("Configuration is invalid: %s", exc)
        return 2

    app = create_app(settings)
    logger.info("Starting server on %s:%d (content: %s)", settings.host, settings.port, settings.content_dir)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
        log_config=None,  # Keep our logging configuration
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
