"""Health endpoint factory."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.responses import JSONResponse


if TYPE_CHECKING:
    from starlette.requests import Request

    from content_search.service_layer.search_service import SearchService


def build_health_endpoint(service: SearchService):
    """Return a coroutine function that reports index sizes per locale.

    An empty locale index is reported as ``degraded`` rather than unhealthy:
    search still answers, just with no results.
    """

    async def health_check(_: Request) -> JSONResponse:
        sizes = service.registry.sizes()
        status = "healthy" if sizes and all(sizes.values()) else "degraded"
        return JSONResponse(
            {
                "status": status,
                "default_locale": service.registry.default_locale,
                "indexes": sizes,
            }
        )

    return health_check
