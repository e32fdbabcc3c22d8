# SPDX-License-Identifier: BUSL-1.1
"""Configuration system: settings loading, validation, and derived names."""

from rpm2img.config.resources import WorkflowSettings
from rpm2img.config.loader import ConfigStore, ConfigError
from rpm2img.config.validation import (
    validate_settings, ValidationError, ValidationResult,
)

__all__ = [
    "WorkflowSettings", "ConfigStore", "ConfigError",
    "validate_settings", "ValidationError", "ValidationResult",
]
