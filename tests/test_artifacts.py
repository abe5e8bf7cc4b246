"""Tests for the pool artifact redirector."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from aptgate.domain.artifacts import (
    DEFAULT_ROUTE,
    NOT_FOUND,
    ArtifactMatch,
    ArtifactRoute,
    NotFound,
    Redirect,
    VersionGrammar,
    filename_of,
    parse_artifact_filename,
    release_url,
    resolve,
    to_gate_response,
)

POOL = "/pool/main/k/keystone-cli/"
RELEASES = "https://github.com/knight-owl-dev/keystone-cli/releases/download/"
PERMISSIVE = DEFAULT_ROUTE.model_copy(update={"grammar": VersionGrammar.permissive})


class TestFilenameOf:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/pool/main/k/keystone-cli/keystone-cli_0.1.9_amd64.deb", "keystone-cli_0.1.9_amd64.deb"),
            ("/pool/main/k/keystone-cli/", ""),
            ("/", ""),
            ("", ""),
            ("keystone-cli_0.1.9_amd64.deb", "keystone-cli_0.1.9_amd64.deb"),
        ],
    )
    def test_last_segment(self, path: str, expected: str) -> None:
        assert filename_of(path) == expected


class TestResolveStrict:
    """Strict semver grammar (the default route)."""

    def test_release_redirect(self) -> None:
        result = resolve(POOL + "keystone-cli_0.1.9_amd64.deb")
        assert result == Redirect(url=RELEASES + "v0.1.9/keystone-cli_0.1.9_amd64.deb")

    def test_prerelease_redirect(self) -> None:
        result = resolve(POOL + "keystone-cli_1.0.0-beta.1_arm64.deb")
        assert result == Redirect(url=RELEASES + "v1.0.0-beta.1/keystone-cli_1.0.0-beta.1_arm64.deb")

    @pytest.mark.parametrize(
        "filename",
        [
            "keystone-cli_bogus_amd64.deb",
            "other-package_1.0.0_amd64.deb",
            "keystone-cli_1.0.0_riscv.deb",
            "keystone-cli_1.0_amd64.deb",
            "keystone-cli_1.0.0_amd64.deb.asc",
            "keystone-cli_1.0.0_amd64.deb\n",
            "keystone-cli_1.0.0-_amd64.deb",
            "keystone-cli_1.0.0-rc_1_amd64.deb",
            "Keystone-cli_1.0.0_amd64.deb",
            "keystone-cli_1.0.0_AMD64.deb",
            "xkeystone-cli_1.0.0_amd64.deb",
            "",
        ],
    )
    def test_not_found(self, filename: str) -> None:
        assert resolve(POOL + filename) == NOT_FOUND

    def test_only_last_segment_matters(self) -> None:
        result = resolve("/anything/else/keystone-cli_2.3.4_amd64.deb")
        assert result == Redirect(url=RELEASES + "v2.3.4/keystone-cli_2.3.4_amd64.deb")

    def test_root_and_empty_paths(self) -> None:
        assert resolve("/") == NOT_FOUND
        assert resolve("") == NOT_FOUND

    def test_idempotent(self) -> None:
        path = POOL + "keystone-cli_0.1.9_amd64.deb"
        assert len({resolve(path) for _ in range(5)}) == 1


class TestResolvePermissive:
    """Permissive grammar: any run of non-underscore characters."""

    def test_non_semver_version_redirects(self) -> None:
        result = resolve(POOL + "keystone-cli_bogus_amd64.deb", PERMISSIVE)
        assert result == Redirect(url=RELEASES + "vbogus/keystone-cli_bogus_amd64.deb")

    def test_prerelease_still_redirects(self) -> None:
        result = resolve(POOL + "keystone-cli_1.0.0-beta.1_arm64.deb", PERMISSIVE)
        assert result == Redirect(url=RELEASES + "v1.0.0-beta.1/keystone-cli_1.0.0-beta.1_arm64.deb")

    def test_debian_epoch_version(self) -> None:
        result = resolve(POOL + "keystone-cli_1:2.0+dfsg~1_amd64.deb", PERMISSIVE)
        assert isinstance(result, Redirect)
        assert result.url == RELEASES + "v1:2.0+dfsg~1/keystone-cli_1:2.0+dfsg~1_amd64.deb"

    @pytest.mark.parametrize(
        "filename",
        [
            "keystone-cli_1.0 0_amd64.deb",
            "keystone-cli_1.0?x=1_amd64.deb",
            "keystone-cli_1.0#frag_amd64.deb",
            "keystone-cli_%2e%2e_amd64.deb",
            "keystone-cli_a_b_amd64.deb",
            "keystone-cli__amd64.deb",
            "other-package_1.0.0_amd64.deb",
            "keystone-cli_1.0.0_riscv.deb",
        ],
    )
    def test_unsafe_or_malformed_tokens_not_found(self, filename: str) -> None:
        assert resolve(POOL + filename, PERMISSIVE) == NOT_FOUND


class TestParseArtifactFilename:
    def test_fields(self) -> None:
        match = parse_artifact_filename("keystone-cli_1.2.3_arm64.deb")
        assert match == ArtifactMatch(
            package="keystone-cli",
            version="1.2.3",
            arch="arm64",
            filename="keystone-cli_1.2.3_arm64.deb",
        )

    def test_release_url(self) -> None:
        match = parse_artifact_filename("keystone-cli_1.2.3_arm64.deb")
        assert match is not None
        assert release_url(match) == RELEASES + "v1.2.3/keystone-cli_1.2.3_arm64.deb"

    def test_redirect_carries_match(self) -> None:
        result = resolve(POOL + "keystone-cli_1.2.3_arm64.deb")
        assert isinstance(result, Redirect)
        assert result.match == parse_artifact_filename("keystone-cli_1.2.3_arm64.deb")


class TestArtifactRoute:
    """Route configuration and its derived values."""

    def test_default_route(self) -> None:
        assert DEFAULT_ROUTE.pool_prefix == POOL
        assert DEFAULT_ROUTE.release_base == RELEASES
        assert DEFAULT_ROUTE.architectures == ("amd64", "arm64")
        assert DEFAULT_ROUTE.grammar is VersionGrammar.strict

    def test_custom_route(self) -> None:
        route = ArtifactRoute(package="tool", org="acme", architectures=("riscv64",))
        assert route.pool_prefix == "/pool/main/t/tool/"
        result = resolve("/pool/main/t/tool/tool_3.0.0_riscv64.deb", route)
        assert result == Redirect(
            url="https://github.com/acme/tool/releases/download/v3.0.0/tool_3.0.0_riscv64.deb"
        )
        assert resolve("/pool/main/t/tool/tool_3.0.0_amd64.deb", route) == NOT_FOUND

    def test_package_name_is_literal(self) -> None:
        """Regex metacharacters in the package name don't widen the match."""
        route = ArtifactRoute(package="lib.x", org="acme")
        assert isinstance(resolve("lib.x_1.0.0_amd64.deb", route), Redirect)
        assert resolve("libzx_1.0.0_amd64.deb", route) == NOT_FOUND

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"package": "Bad_Name", "org": "acme"},
            {"package": "tool", "org": "acme/evil"},
            {"package": "tool", "org": "acme", "host": "evil.example/x"},
            {"package": "tool", "org": "acme", "architectures": ()},
            {"package": "tool", "org": "acme", "architectures": ("amd64|.*",)},
            {"package": "tool", "org": "acme", "grammar": "loose"},
        ],
    )
    def test_invalid_routes_rejected(self, kwargs: dict) -> None:
        with pytest.raises(ValidationError):
            ArtifactRoute(**kwargs)


class TestToGateResponse:
    def test_redirect(self) -> None:
        resp = to_gate_response(Redirect(url=RELEASES + "v0.1.9/x.deb"))
        assert resp.status == 302
        assert resp.location == RELEASES + "v0.1.9/x.deb"
        assert resp.body == ""

    def test_not_found(self) -> None:
        resp = to_gate_response(NotFound())
        assert resp.status == 404
        assert resp.body == "Not found"
        assert resp.location is None
