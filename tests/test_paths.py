"""Tests for reading the undecoded request path from an ASGI scope."""

from __future__ import annotations

from aptgate.api.paths import raw_request_path


class TestRawRequestPath:
    def test_keeps_percent_escapes(self) -> None:
        scope = {
            "type": "http",
            "path": "/pool/../scripts/build.sh",
            "raw_path": b"/pool/%2E%2E/scripts/build.sh",
        }
        assert raw_request_path(scope) == "/pool/%2E%2E/scripts/build.sh"

    def test_query_string_cut(self) -> None:
        scope = {"type": "http", "path": "/index.html", "raw_path": b"/index.html?v=2"}
        assert raw_request_path(scope) == "/index.html"

    def test_falls_back_to_path(self) -> None:
        assert raw_request_path({"type": "http", "path": "/dists/stable/Release"}) == "/dists/stable/Release"
        assert raw_request_path({"type": "http", "path": "/", "raw_path": b""}) == "/"
