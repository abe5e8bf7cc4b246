from __future__ import annotations

from ..domain.artifacts import DEFAULT_ROUTE, ArtifactRoute, Redirect, resolve, to_gate_response
from ..domain.pathgate import (
    DEFAULT_ALLOW_SET,
    AllowSet,
    Decision,
    blocked_response,
    classify,
    has_dot_segments,
)
from ..domain.responses import GateResponse
from ..logging_conf import get_logger

logger = get_logger("service.gate")


# ------------------------
# Use-cases
# ------------------------

def gate(
    path: str, allow_set: AllowSet = DEFAULT_ALLOW_SET, *, decoded_path: str | None = None
) -> GateResponse | None:
    """Return the block response for a non-public path, or None to continue.

    ``path`` is classified as received, without percent-decoding. When the
    host also hands over its decoded form, dot segments in it block too.
    """
    if decoded_path is not None and has_dot_segments(decoded_path):
        logger.info(
            "gate.block",
            extra={"event": "gate_block", "path": path, "reason": "dot_segment"},
        )
        return blocked_response()
    if classify(path, allow_set) is Decision.allow:
        return None
    logger.info("gate.block", extra={"event": "gate_block", "path": path, "reason": "not_public"})
    return blocked_response()


def redirect_artifact(path: str, route: ArtifactRoute = DEFAULT_ROUTE) -> GateResponse:
    """Redirect a pool download to its release asset, or 404."""
    resolution = resolve(path, route)
    if isinstance(resolution, Redirect) and resolution.match is not None:
        logger.info(
            "artifact.redirect",
            extra={
                "event": "artifact_redirect",
                "package": resolution.match.package,
                "version": resolution.match.version,
                "arch": resolution.match.arch,
                "location": resolution.url,
            },
        )
    else:
        logger.info(
            "artifact.not_found",
            extra={"event": "artifact_not_found", "package": route.package, "path": path},
        )
    return to_gate_response(resolution)
