from __future__ import annotations

from starlette.responses import PlainTextResponse, RedirectResponse, Response

from ..domain.responses import GateResponse


def to_http_response(resp: GateResponse) -> Response:
    """Translate a domain response descriptor into a Starlette response."""
    if resp.location is not None and 300 <= resp.status < 400:
        return RedirectResponse(url=resp.location, status_code=resp.status)
    return PlainTextResponse(resp.body, status_code=resp.status, headers=dict(resp.headers))
