"""
Configuration constants for type-model extraction.

Defines the annotation names and type-name markers that drive naming,
visibility and primitive classification, plus the runtime options that
can be overridden from the environment (a .env file is loaded at import
time via python-dotenv) or from a YAML settings file.
"""

import logging
import os
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

from core.startup_config import (
    load_settings_file,
    resolve_strict_config_validation,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Load .env file (idempotent; does nothing if already loaded or missing)
# ---------------------------------------------------------------------------
load_dotenv()

# ---------------------------------------------------------------------------
# Generated artifact extension
# ---------------------------------------------------------------------------
TYPESCRIPT_EXTENSION: str = ".d.ts"

# ---------------------------------------------------------------------------
# Namespace resolution
# ---------------------------------------------------------------------------
DEFAULT_MODULE_NAME: str = "server"

# Matched as a case-insensitive suffix so the attribute may live in any namespace
MODULE_ATTRIBUTE_MARKER: str = "TypeScriptModule"

# ---------------------------------------------------------------------------
# Property visibility and naming
# ---------------------------------------------------------------------------
IGNORE_ATTRIBUTE_NAME: str = "IgnoreDataMember"

# Attribute simple name -> argument names that carry the exported name.
# "" is the positional argument.
NAME_ATTRIBUTES: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "DataMember": ("Name",),
        "JsonProperty": ("", "PropertyName"),
    }
)

# ---------------------------------------------------------------------------
# Type classification
# ---------------------------------------------------------------------------
COLLECTION_NAMESPACE_PREFIX: str = "System.Collections"

# Named structs that export as primitives
DATETIME_TYPE_MARKER: str = "DateTime"

# ---------------------------------------------------------------------------
# Environment overrides
# ---------------------------------------------------------------------------
ENV_ARTIFACT_EXTENSION: str = "TYPESHAPE_ARTIFACT_EXTENSION"
ENV_DEFAULT_MODULE: str = "TYPESHAPE_DEFAULT_MODULE"

SETTINGS_KEYS: Tuple[str, ...] = (
    "default_module_name",
    "artifact_extension",
    "module_attribute_marker",
)


@dataclass(frozen=True)
class ExtractionOptions:
    """Knobs shared by every component of one extraction run."""

    default_module_name: str = DEFAULT_MODULE_NAME
    artifact_extension: str = TYPESCRIPT_EXTENSION
    module_attribute_marker: str = MODULE_ATTRIBUTE_MARKER

    @classmethod
    def from_env(cls) -> "ExtractionOptions":
        return cls(
            default_module_name=os.getenv(ENV_DEFAULT_MODULE, DEFAULT_MODULE_NAME).strip()
            or DEFAULT_MODULE_NAME,
            artifact_extension=os.getenv(ENV_ARTIFACT_EXTENSION, TYPESCRIPT_EXTENSION).strip()
            or TYPESCRIPT_EXTENSION,
        )


def load_extraction_options(
    settings_path: Optional[str] = None,
    strict: Optional[bool] = None,
) -> ExtractionOptions:
    """Build options from the environment, then a YAML settings file on top.

    Args:
        settings_path: Optional YAML file with keys from ``SETTINGS_KEYS``.
        strict: Raise on invalid settings instead of warning. Defaults to the
            ``STRICT_CONFIG_VALIDATION`` environment flag.

    Raises:
        ConfigValidationError: In strict mode, for a missing/invalid file or
            invalid keys.
    """
    if strict is None:
        strict = resolve_strict_config_validation(default=False)

    options = ExtractionOptions.from_env()
    if settings_path is None:
        return options

    values = load_settings_file(settings_path, strict=strict, allowed_keys=SETTINGS_KEYS)
    if not values:
        return options

    logger.debug("Extraction settings from %s: %s", settings_path, values)
    return ExtractionOptions(
        default_module_name=values.get("default_module_name", options.default_module_name),
        artifact_extension=values.get("artifact_extension", options.artifact_extension),
        module_attribute_marker=values.get(
            "module_attribute_marker", options.module_attribute_marker
        ),
    )
