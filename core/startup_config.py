"""Startup configuration validation helpers.

Provides strict/non-strict YAML settings parsing used by the extraction
pipeline before any symbol graph is loaded.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Iterable, Optional

import yaml

logger = logging.getLogger(__name__)


class ConfigValidationError(RuntimeError):
    """Raised when strict startup validation fails."""


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def resolve_strict_config_validation(default: bool = False) -> bool:
    """Resolve strict validation mode from ``STRICT_CONFIG_VALIDATION`` env."""
    return _env_flag("STRICT_CONFIG_VALIDATION", default=default)


def load_settings_file(
    settings_path: str,
    strict: bool = False,
    allowed_keys: Optional[Iterable[str]] = None,
) -> dict[str, Any]:
    """Load and parse a YAML settings file.

    In non-strict mode this returns an empty dict on parse/read failures.
    In strict mode this raises ``ConfigValidationError``.

    When ``allowed_keys`` is given, every entry must be one of those keys
    with a non-empty string value; values come back stripped. Invalid
    entries raise in strict mode and are dropped with a warning otherwise.
    """
    try:
        with open(settings_path, "r", encoding="utf-8") as f:
            payload = yaml.safe_load(f)
    except FileNotFoundError as exc:
        msg = f"Settings file not found: {settings_path}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return {}
    except yaml.YAMLError as exc:
        msg = f"Failed to parse settings YAML at {settings_path}: {exc}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return {}

    if payload is None:
        msg = f"Settings file is empty: {settings_path}"
        if strict:
            raise ConfigValidationError(msg)
        logger.warning("%s; continuing with defaults", msg)
        return {}

    if not isinstance(payload, dict):
        msg = f"Unexpected settings payload type: {type(payload).__name__}"
        if strict:
            raise ConfigValidationError(msg)
        logger.warning("%s; continuing with defaults", msg)
        return {}

    if allowed_keys is None:
        return payload
    return _validated_settings(payload, frozenset(allowed_keys), strict)


def _validated_settings(
    payload: dict[str, Any],
    allowed_keys: frozenset[str],
    strict: bool,
) -> dict[str, str]:
    values: dict[str, str] = {}
    for key, raw in payload.items():
        if key not in allowed_keys:
            msg = f"Unknown setting '{key}'"
            if strict:
                raise ConfigValidationError(msg)
            logger.warning("%s; ignoring", msg)
            continue
        if not isinstance(raw, str) or not raw.strip():
            msg = f"Setting '{key}' must be a non-empty string"
            if strict:
                raise ConfigValidationError(msg)
            logger.warning("%s; using default", msg)
            continue
        values[key] = raw.strip()
    return values
