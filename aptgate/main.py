"""FastAPI app factory: path gate, artifact redirects and the static apt tree."""
from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.staticfiles import StaticFiles

from .api import build_router
from .api.paths import raw_request_path
from .api.responses import to_http_response
from .config import Settings, load_settings
from .logging_conf import get_logger, setup_logging
from .service import gate_service

logger = get_logger("aptgate")

CallNext = Callable[[Request], Awaitable[Response]]


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="aptgate",
        version=settings.app_version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings

    @app.on_event("startup")
    async def _on_startup() -> None:
        logger.info(
            "startup",
            extra={
                "event": "startup",
                "static_root": str(settings.static_root) if settings.static_root else None,
                "packages": [r.package for r in settings.artifact_routes],
            },
        )

    @app.on_event("shutdown")
    async def _on_shutdown() -> None:
        logger.info("shutdown", extra={"event": "shutdown"})

    # Middleware added last runs first: request_logger wraps path_gate.
    @app.middleware("http")
    async def path_gate(request: Request, call_next: CallNext) -> Response:
        """Answer 404 for anything outside the public repository surface."""
        blocked = gate_service.gate(
            raw_request_path(request.scope),
            settings.allow_set,
            decoded_path=request.url.path,
        )
        if blocked is not None:
            return to_http_response(blocked)
        return await call_next(request)

    @app.middleware("http")
    async def request_logger(request: Request, call_next: CallNext) -> Response:
        """JSON request logging with a correlation id.

        - Propagates an incoming X-Request-ID or mints one
        - Logs start and end events with method/path/status/elapsed_ms
        - Echoes X-Request-ID on the response
        """
        request_id = request.headers.get("X-Request-ID", str(uuid4()))
        request.state.request_id = request_id

        start = time.perf_counter()
        logger.info(
            "request.start",
            extra={
                "event": "request_start",
                "method": request.method,
                "path": request.url.path,
                "request_id": request_id,
            },
        )
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request.error",
                extra={
                    "event": "request_error",
                    "path": request.url.path,
                    "method": request.method,
                    "request_id": request_id,
                },
            )
            raise
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000.0

        response.headers["X-Request-ID"] = request_id
        logger.info(
            "request.end",
            extra={
                "event": "request_end",
                "status_code": response.status_code,
                "elapsed_ms": round(elapsed_ms, 2),
                "request_id": request_id,
            },
        )
        return response

    app.include_router(build_router(settings.artifact_routes))

    # Mounted last so the redirect routes take precedence under /pool/.
    if settings.static_root is not None:
        app.mount("/", StaticFiles(directory=settings.static_root, html=True), name="repo")

    return app


# ASGI entrypoint for uvicorn: `uvicorn aptgate.main:app --port 8000`
app = create_app()
