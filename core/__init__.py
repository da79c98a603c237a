"""Core shared utilities: logging context, settings validation, run artifacts."""

from core.structured_logging import (
    configure_structured_logging,
    get_phase,
    get_run_id,
    phase_scope,
    set_run_id,
)
from core.startup_config import (
    ConfigValidationError,
    load_settings_file,
    resolve_strict_config_validation,
)
from core.run_artifacts import write_descriptor_document, write_run_report

__all__ = [
    "configure_structured_logging",
    "get_phase",
    "get_run_id",
    "phase_scope",
    "set_run_id",
    "ConfigValidationError",
    "load_settings_file",
    "resolve_strict_config_validation",
    "write_descriptor_document",
    "write_run_report",
]
