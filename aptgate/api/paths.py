from __future__ import annotations

from starlette.types import Scope


def raw_request_path(scope: Scope) -> str:
    """Return the request path exactly as the client sent it.

    Starlette's ``request.url.path`` is percent-decoded; the gate and the
    redirector match on the undecoded form. Some transports leave the query
    string on ``raw_path``, so it is cut here.
    """
    raw = scope.get("raw_path")
    if not raw:
        return scope.get("path", "")
    return raw.decode("latin-1").split("?", 1)[0]
