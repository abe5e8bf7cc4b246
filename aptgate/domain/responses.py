from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

__all__ = [
    "GateResponse",
    "BLOCKED_BODY",
    "NOT_FOUND_BODY",
    "not_found",
    "redirect",
]

# Gate and redirector 404 bodies differ in case; both are matched verbatim.
BLOCKED_BODY = "Not Found"
NOT_FOUND_BODY = "Not found"


def _empty_headers() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True)
class GateResponse:
    """Platform-neutral response descriptor produced by the domain layer."""

    status: int
    body: str = ""
    headers: Mapping[str, str] = field(default_factory=_empty_headers)

    @property
    def location(self) -> str | None:
        return self.headers.get("Location")


def not_found(body: str = NOT_FOUND_BODY) -> GateResponse:
    return GateResponse(status=404, body=body)


def redirect(url: str, status: int = 302) -> GateResponse:
    """Build a redirect descriptor with an empty body."""
    return GateResponse(status=status, headers=MappingProxyType({"Location": url}))
