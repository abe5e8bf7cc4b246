from __future__ import annotations

from aptgate.domain.artifacts import DEFAULT_ROUTE, ArtifactRoute
from aptgate.domain.responses import BLOCKED_BODY, NOT_FOUND_BODY
from probe.types import Case

# Typical development files that sit next to the published tree.
BLOCKED_PATHS = (
    "/Makefile",
    "/packages.yml",
    "/scripts/build.sh",
    "/docs/index.md",
    "/.github/workflows/ci.yml",
    "/distsx",
)

ALLOWED_PATHS = (
    "/",
    "/index.html",
    "/PUBLIC.KEY",
    "/dists/stable/Release",
)


def default_cases(version: str, route: ArtifactRoute = DEFAULT_ROUTE) -> list[Case]:
    """Build the expectation table for a gate serving ``route``."""
    cases: list[Case] = []
    for path in ALLOWED_PATHS:
        cases.append(Case(name=f"allow {path}", path=path, status=None))
    for path in BLOCKED_PATHS:
        cases.append(Case(name=f"block {path}", path=path, status=404, body=BLOCKED_BODY))

    for arch in route.architectures:
        filename = f"{route.package}_{version}_{arch}.deb"
        cases.append(
            Case(
                name=f"redirect {arch}",
                path=f"{route.pool_prefix}{filename}",
                status=302,
                location=f"{route.release_base}v{version}/{filename}",
            )
        )

    for filename in (
        f"{route.package}_{version}_riscv.deb",
        f"other-package_{version}_amd64.deb",
        "",
    ):
        cases.append(
            Case(
                name=f"not found {filename or '<dir>'}",
                path=f"{route.pool_prefix}{filename}",
                status=404,
                body=NOT_FOUND_BODY,
            )
        )
    return cases
