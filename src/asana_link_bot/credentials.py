"""
Asana access token lookup.

The token normally arrives as the `asana-pat` action input; self-hosted runners
may instead point ASANA_PAT_SECRET_NAME at an AWS Secrets Manager entry.
"""

from __future__ import annotations

import importlib
import json

from .config import ConfigError, Settings


def _boto3():
    # Allow tests to monkeypatch module-level `boto3` symbol.
    return globals().get("boto3") or importlib.import_module("boto3")


def _from_secrets_manager(secret_name: str) -> str | None:
    sm = _boto3().client("secretsmanager")
    resp = sm.get_secret_value(SecretId=secret_name)
    raw = resp.get("SecretString") or ""
    try:
        data = json.loads(raw)
    except ValueError:
        return raw.strip() or None
    if isinstance(data, dict):
        return data.get("ASANA_PAT") or None
    if isinstance(data, str):
        return data or None
    return raw.strip() or None


def resolve_asana_pat(settings: Settings) -> str:
    if settings.asana_pat:
        return settings.asana_pat
    if settings.asana_pat_secret_name:
        try:
            pat = _from_secrets_manager(settings.asana_pat_secret_name)
        except ImportError as e:
            raise ConfigError(
                f"ASANA_PAT_SECRET_NAME needs boto3 (install asana-link-bot[aws]): {e}"
            ) from e
        except Exception as e:
            raise ConfigError(
                f"cannot read secret {settings.asana_pat_secret_name}: {e}"
            ) from e
        if pat:
            return pat
    raise ConfigError("Asana personal access token (asana-pat) not specified")
