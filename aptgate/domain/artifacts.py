from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .responses import NOT_FOUND_BODY, GateResponse, not_found, redirect

__all__ = [
    "VersionGrammar",
    "ArtifactRoute",
    "ArtifactMatch",
    "Redirect",
    "NotFound",
    "NOT_FOUND",
    "DEFAULT_ROUTE",
    "filename_of",
    "parse_artifact_filename",
    "release_url",
    "resolve",
    "to_gate_response",
]

_VERSION_PATTERNS = {
    "strict": r"\d+\.\d+\.\d+(?:-[A-Za-z0-9.]+)?",
    "permissive": r"[^_]+",
}

# Characters allowed into the redirect URL without escaping.
_URL_SAFE_RE = re.compile(r"^[A-Za-z0-9._~+:-]+$")
_PACKAGE_RE = re.compile(r"^[a-z0-9][a-z0-9.+-]*$")
_ARCH_RE = re.compile(r"^[a-z0-9]+$")
_SEGMENT_RE = re.compile(r"^[A-Za-z0-9._-]+$")


class VersionGrammar(str, Enum):
    strict = "strict"
    permissive = "permissive"

    @property
    def pattern(self) -> str:
        return _VERSION_PATTERNS[self.value]


class ArtifactRoute(BaseModel):
    """One package whose pool downloads are served from GitHub releases."""

    model_config = ConfigDict(frozen=True)

    package: str
    org: str
    host: str = "github.com"
    component: str = "main"
    architectures: tuple[str, ...] = Field(default=("amd64", "arm64"), min_length=1)
    grammar: VersionGrammar = VersionGrammar.strict

    @field_validator("package")
    @classmethod
    def _valid_package(cls, value: str) -> str:
        if not _PACKAGE_RE.match(value):
            raise ValueError(f"invalid Debian package name: {value!r}")
        return value

    @field_validator("org", "host", "component")
    @classmethod
    def _valid_segment(cls, value: str) -> str:
        if not _SEGMENT_RE.match(value):
            raise ValueError(f"invalid URL segment: {value!r}")
        return value

    @field_validator("architectures")
    @classmethod
    def _valid_architectures(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for arch in value:
            if not _ARCH_RE.match(arch):
                raise ValueError(f"invalid architecture: {arch!r}")
        return value

    @property
    def pool_prefix(self) -> str:
        """Pool directory of the package, e.g. /pool/main/k/keystone-cli/."""
        return f"/pool/{self.component}/{self.package[0]}/{self.package}/"

    @property
    def release_base(self) -> str:
        return f"https://{self.host}/{self.org}/{self.package}/releases/download/"

    @property
    def filename_re(self) -> re.Pattern[str]:
        arches = "|".join(re.escape(a) for a in self.architectures)
        return re.compile(
            rf"^{re.escape(self.package)}_({self.grammar.pattern})_({arches})\.deb$"
        )


DEFAULT_ROUTE = ArtifactRoute(package="keystone-cli", org="knight-owl-dev")


@dataclass(frozen=True)
class ArtifactMatch:
    package: str
    version: str
    arch: str
    filename: str


@dataclass(frozen=True)
class Redirect:
    url: str
    match: ArtifactMatch | None = field(default=None, compare=False)


@dataclass(frozen=True)
class NotFound:
    body: str = NOT_FOUND_BODY


NOT_FOUND = NotFound()


def filename_of(path: str) -> str:
    """Return the last path segment; empty for "" or a trailing slash."""
    return path.rsplit("/", 1)[-1]


def parse_artifact_filename(filename: str, route: ArtifactRoute = DEFAULT_ROUTE) -> ArtifactMatch | None:
    """Parse ``<package>_<version>_<arch>.deb`` for the route's package.

    Returns None when the name doesn't fit the route, or when the captured
    version or the filename holds characters that can't go into a URL as-is.
    """
    m = route.filename_re.fullmatch(filename)
    if not m:
        return None
    version, arch = m.group(1), m.group(2)
    if not (_URL_SAFE_RE.fullmatch(version) and _URL_SAFE_RE.fullmatch(filename)):
        return None
    return ArtifactMatch(package=route.package, version=version, arch=arch, filename=filename)


def release_url(match: ArtifactMatch, route: ArtifactRoute = DEFAULT_ROUTE) -> str:
    return f"{route.release_base}v{match.version}/{match.filename}"


def resolve(path: str, route: ArtifactRoute = DEFAULT_ROUTE) -> Redirect | NotFound:
    """Map a pool request path to the release asset it should redirect to.

    Deterministic and side-effect free; the upstream asset is never checked.
    """
    match = parse_artifact_filename(filename_of(path), route)
    if match is None:
        return NOT_FOUND
    return Redirect(url=release_url(match, route), match=match)


def to_gate_response(resolution: Redirect | NotFound) -> GateResponse:
    if isinstance(resolution, Redirect):
        return redirect(resolution.url)
    return not_found(resolution.body)
