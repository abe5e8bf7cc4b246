#!/usr/bin/env python3
"""Write a sample published apt tree (plus colocated dev files) under ./site.

    python tools/fixtures.py
    APTGATE_STATIC_ROOT=site uvicorn aptgate.main:app
"""
from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SITE = ROOT / "site"

_RELEASE = b"""Origin: knight-owl-dev
Label: knight-owl-dev
Suite: stable
Codename: stable
Architectures: amd64 arm64
Components: main
"""

_PACKAGES = b"""Package: keystone-cli
Version: 0.1.9
Architecture: amd64
Filename: pool/main/k/keystone-cli/keystone-cli_0.1.9_amd64.deb
"""

# Served: everything the allow-set covers.
PUBLISHED = [
    (SITE / "index.html", b"<!doctype html><title>apt</title><p>apt repository</p>"),
    (SITE / "PUBLIC.KEY", b"-----BEGIN PGP PUBLIC KEY BLOCK-----\nplaceholder\n-----END PGP PUBLIC KEY BLOCK-----\n"),
    (SITE / "dists" / "stable" / "Release", _RELEASE),
    (SITE / "dists" / "stable" / "main" / "binary-amd64" / "Packages", _PACKAGES),
]

# Blocked: repository tooling that lives in the same checkout.
DEVELOPMENT = [
    (SITE / "Makefile", b"publish:\n\t./scripts/build.sh\n"),
    (SITE / "packages.yml", b"packages:\n  - keystone-cli\n"),
    (SITE / "scripts" / "build.sh", b"#!/bin/sh\necho build\n"),
    (SITE / "docs" / "index.md", b"# internal notes\n"),
]


def main() -> None:
    for path, data in PUBLISHED + DEVELOPMENT:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    created = [str(p.relative_to(ROOT)) for p, _ in PUBLISHED + DEVELOPMENT if p.exists()]
    print("Created fixtures:")
    for c in created:
        print(" -", c)
    expected = len(PUBLISHED) + len(DEVELOPMENT)
    if len(created) != expected:
        raise SystemExit(f"Expected {expected} fixtures, found {len(created)}")


if __name__ == "__main__":
    main()
