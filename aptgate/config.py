from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from .domain.artifacts import DEFAULT_ROUTE, ArtifactRoute, VersionGrammar
from .domain.pathgate import DEFAULT_ALLOW_SET, AllowSet

__all__ = [
    "ConfigError",
    "InvalidGrammarError",
    "InvalidStaticRootError",
    "Settings",
    "get_grammar_from_env",
    "get_static_root_from_env",
    "load_settings",
]


class ConfigError(ValueError):
    """Base class for startup configuration errors.

    ``code`` is a stable machine identifier for the failure.
    """

    code: str = "invalid_config"


class InvalidGrammarError(ConfigError):
    code = "invalid_grammar"


class InvalidStaticRootError(ConfigError):
    code = "invalid_static_root"


class Settings(BaseModel):
    """Everything the app factory needs, resolved once at startup."""

    model_config = ConfigDict(frozen=True)

    app_version: str = "0.1.0"
    log_level: str = "INFO"
    static_root: Path | None = None
    allow_set: AllowSet = DEFAULT_ALLOW_SET
    artifact_routes: tuple[ArtifactRoute, ...] = (DEFAULT_ROUTE,)


def get_grammar_from_env() -> VersionGrammar:
    """Read APTGATE_VERSION_GRAMMAR, defaulting to strict semver."""
    raw = os.getenv("APTGATE_VERSION_GRAMMAR", VersionGrammar.strict.value).strip().lower()
    try:
        return VersionGrammar(raw)
    except ValueError as e:
        choices = ", ".join(g.value for g in VersionGrammar)
        raise InvalidGrammarError(
            f"APTGATE_VERSION_GRAMMAR must be one of: {choices} (got {raw!r})"
        ) from e


def get_static_root_from_env() -> Path | None:
    """Read APTGATE_STATIC_ROOT; unset or empty means no static tree is served."""
    raw = os.getenv("APTGATE_STATIC_ROOT")
    if not raw:
        return None
    root = Path(raw).expanduser()
    if not root.is_dir():
        raise InvalidStaticRootError(f"APTGATE_STATIC_ROOT is not a directory: {raw}")
    return root


def load_settings() -> Settings:
    grammar = get_grammar_from_env()
    return Settings(
        app_version=os.getenv("APP_VERSION", "0.1.0"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        static_root=get_static_root_from_env(),
        artifact_routes=(DEFAULT_ROUTE.model_copy(update={"grammar": grammar}),),
    )
