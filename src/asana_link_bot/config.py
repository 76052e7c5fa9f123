"""
Configuration helpers and defaults.

GitHub Actions exposes `with:` inputs as INPUT_<NAME> (upper-cased, hyphens kept),
so each input is looked up under a few aliases.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


class LinkBotError(Exception):
    """Base class for errors raised before any Asana call is made."""


class ConfigError(LinkBotError):
    pass


def _env(name: str, default: str | None = None) -> str | None:
    v = os.getenv(name)
    return v if v is not None else default


def _first_env(*names: str) -> str | None:
    for name in names:
        v = os.getenv(name)
        if v:
            return v
    return None


def _flag(name: str, default: str) -> bool:
    return (_env(name, default) or default).strip().lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class Settings:
    asana_pat: str | None
    asana_pat_secret_name: str | None
    comment_prefix: str | None
    asana_base_url: str
    asana_timeout_seconds: int
    event_path: str | None
    event_name: str | None
    fail_on_error: bool


def load_settings() -> Settings:
    """Load settings from environment with safe defaults for local tests."""

    try:
        timeout = int(_env("ASANA_TIMEOUT_SECONDS", "10") or 10)
    except ValueError as e:
        raise ConfigError(f"ASANA_TIMEOUT_SECONDS must be an integer: {e}") from e

    return Settings(
        asana_pat=_first_env("INPUT_ASANA-PAT", "INPUT_ASANA_PAT", "ASANA_PAT"),
        asana_pat_secret_name=_env("ASANA_PAT_SECRET_NAME") or None,
        comment_prefix=_first_env(
            "INPUT_COMMENT-PREFIX", "INPUT_COMMENT_PREFIX", "COMMENT_PREFIX"
        ),
        asana_base_url=_env("ASANA_BASE_URL") or "https://app.asana.com",
        asana_timeout_seconds=timeout,
        event_path=_env("GITHUB_EVENT_PATH") or None,
        event_name=_env("GITHUB_EVENT_NAME") or None,
        fail_on_error=_flag("FAIL_ON_ERROR", "true"),
    )
