from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Case:
    """One request the probe sends and what it expects back.

    ``status`` None means "anything but a gate block": allowed paths may still
    404 when the file isn't published, but then the body isn't the gate's.
    """

    name: str
    path: str
    status: int | None
    location: str | None = None
    body: str | None = None


@dataclass(frozen=True)
class Outcome:
    case: Case
    status: int
    location: str | None
    body: str
    passed: bool


class ProbeError(RuntimeError):
    """Raised when the probe cannot proceed (e.g., server never ready)."""


class ReadyTimeoutError(ProbeError):
    """Raised when the server didn't answer within the timeout."""


class FetchError(ProbeError):
    """Raised when a request keeps failing at the transport level."""
