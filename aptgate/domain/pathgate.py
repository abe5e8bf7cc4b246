from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator

from .responses import BLOCKED_BODY, GateResponse, not_found

__all__ = [
    "Decision",
    "AllowSet",
    "DEFAULT_ALLOW_SET",
    "classify",
    "has_dot_segments",
    "blocked_response",
]


class Decision(str, Enum):
    allow = "allow"
    block = "block"


class AllowSet(BaseModel):
    """Closed table of public paths.

    Anything not listed is blocked, so files colocated with the published
    tree (scripts, docs, CI config) never leak out.
    """

    model_config = ConfigDict(frozen=True)

    exact: frozenset[str]
    prefixes: tuple[str, ...]

    @field_validator("exact", "prefixes")
    @classmethod
    def _must_be_absolute(cls, value):
        for entry in value:
            if not entry.startswith("/"):
                raise ValueError(f"allow-set entry must start with '/': {entry!r}")
        return value

    def matches_prefix(self, path: str) -> bool:
        """Ordinal, case-sensitive prefix test on a segment boundary.

        A prefix ending in "/" already is a boundary; any other prefix must be
        followed by "/" or the end of the path. Stricter than a bare
        startswith on purpose: "/dists" must not admit "/distsx".
        """
        for prefix in self.prefixes:
            if not path.startswith(prefix):
                continue
            if prefix.endswith("/") or len(path) == len(prefix) or path[len(prefix)] == "/":
                return True
        return False


DEFAULT_ALLOW_SET = AllowSet(
    exact=frozenset({"/", "/index.html", "/PUBLIC.KEY"}),
    prefixes=("/dists", "/pool/"),
)


def classify(path: str, allow_set: AllowSet = DEFAULT_ALLOW_SET) -> Decision:
    """Decide whether a request path belongs to the public repository surface."""
    if path in allow_set.exact or allow_set.matches_prefix(path):
        return Decision.allow
    return Decision.block


def has_dot_segments(path: str) -> bool:
    """True if any segment is "." or "..".

    Checked on the decoded path: file serving resolves these, so such a path
    could land outside the prefix that admitted it.
    """
    return any(segment in (".", "..") for segment in path.split("/"))


def blocked_response() -> GateResponse:
    return not_found(BLOCKED_BODY)
