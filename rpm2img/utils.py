# SPDX-License-Identifier: BUSL-1.1
"""Shared utilities for rpm2img."""

import sys

from rpm2img.config import (
    ConfigError, ConfigStore, ValidationError, WorkflowSettings, validate_settings,
)

# Command-line options that override settings, by attribute name
OVERRIDE_OPTIONS = (
    "registry", "package_name", "tag", "container_name", "max_wait", "build_dir",
)


def die(msg: str, code: int = 1):
    """Print error message and exit."""
    print(f"Error: {msg}")
    sys.exit(code)


def confirm(prompt: str, default: bool = False) -> bool:
    """Ask a yes/no question. Returns True for yes."""
    suffix = "[Y/n]" if default else "[y/N]"
    answer = input(f"{prompt} {suffix}: ").strip().lower()
    if not answer:
        return default
    return answer in ("y", "yes")


def store_for_args(args) -> ConfigStore:
    return ConfigStore(config_file=getattr(args, "config", None))


def load_settings(args) -> WorkflowSettings:
    """Resolve and validate settings for a command, exiting on errors."""
    store = store_for_args(args)
    overrides = {name: getattr(args, name, None) for name in OVERRIDE_OPTIONS}
    try:
        settings = store.resolve(**overrides)
    except ConfigError as e:
        die(str(e))

    result = validate_settings(settings)
    for w in result.warnings:
        print(f"Warning: {w}")
    try:
        result.raise_if_invalid()
    except ValidationError as e:
        for err in e.errors:
            print(f"Error: {err}")
        sys.exit(1)
    return settings
