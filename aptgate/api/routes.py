from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable

from fastapi import APIRouter, Request, Response

from ..domain.artifacts import ArtifactRoute
from ..logging_conf import get_logger
from ..service import gate_service
from .paths import raw_request_path
from .responses import to_http_response

logger = get_logger("api")

# The redirector only looks at the path, so any method gets the same answer.
ARTIFACT_METHODS = ["GET", "HEAD", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]


def _artifact_endpoint(route: ArtifactRoute) -> Callable[[Request], Awaitable[Response]]:
    async def redirect_artifact(request: Request) -> Response:
        """Redirect a pool .deb download to its GitHub release asset."""
        path = raw_request_path(request.scope)
        return to_http_response(gate_service.redirect_artifact(path, route))

    return redirect_artifact


def build_router(routes: Iterable[ArtifactRoute]) -> APIRouter:
    """Return a router with one redirect endpoint per package pool directory."""
    router = APIRouter()
    for route in routes:
        router.add_api_route(
            f"{route.pool_prefix}{{filename:path}}",
            _artifact_endpoint(route),
            methods=ARTIFACT_METHODS,
            name=f"artifact:{route.package}",
            summary=f"Redirect {route.package} downloads to release assets",
            include_in_schema=False,
        )
        logger.debug(
            "route.registered",
            extra={"event": "route_registered", "package": route.package, "prefix": route.pool_prefix},
        )
    return router
