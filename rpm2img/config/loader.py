# SPDX-License-Identifier: BUSL-1.1
"""Settings file loading and saving, plus environment overrides."""

import os
from pathlib import Path
from typing import Optional

import yaml

from rpm2img.config.resources import (
    WorkflowSettings,
    settings_from_dict,
    settings_to_dict,
)


CONFIG_DIR = Path.home() / ".config" / "rpm2img"

# Environment variables that override the settings file
ENV_VARS = {
    "REGISTRY": "registry",
    "PACKAGENAME": "package_name",
    "TAG": "tag",
    "CONTAINER_NAME": "container_name",
    "CONTAINER_HTTP_PROXY": "http_proxy",
    "MAXWAIT": "max_wait",
    "BROWSER": "browser",
}


class ConfigError(Exception):
    """Raised when the settings file or environment cannot be used."""


class ConfigStore:
    """Manages the rpm2img settings file on disk.

    Layout:
        ~/.config/rpm2img/
        └── config.yaml              # persistent overrides of the defaults

    Resolution order, highest first: explicit overrides (command line),
    environment variables, config.yaml, built-in defaults.
    """

    def __init__(self, config_dir: Optional[Path] = None,
                 config_file: Optional[Path] = None, environ=None):
        self.config_dir = Path(config_dir) if config_dir else CONFIG_DIR
        self.config_file = Path(config_file) if config_file else self.config_dir / "config.yaml"
        self.environ = os.environ if environ is None else environ
        self._cache = None

    def ensure_dirs(self):
        self.config_file.parent.mkdir(parents=True, exist_ok=True)

    def is_initialized(self) -> bool:
        return self.config_file.exists()

    # ── File ─────────────────────────────────────────────────────────

    def load(self) -> dict:
        """Load config.yaml as a dict; an absent file is empty."""
        if self._cache is not None:
            return self._cache
        if not self.config_file.exists():
            self._cache = {}
            return self._cache
        try:
            with open(self.config_file) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"cannot parse {self.config_file}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{self.config_file} must contain a mapping of settings")
        self._cache = data
        return self._cache

    def save(self, data: dict):
        """Write config.yaml."""
        self.ensure_dirs()
        with open(self.config_file, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
        self._cache = data

    def save_settings(self, settings: WorkflowSettings):
        self.save(settings_to_dict(settings))

    # ── Resolution ───────────────────────────────────────────────────

    def defaults(self) -> WorkflowSettings:
        """Built-in defaults; the registry defaults to the login name."""
        return WorkflowSettings(registry=self.environ.get("USER", ""))

    def env_overrides(self) -> dict:
        """Return settings taken from environment variables."""
        overrides = {}
        for var, field_name in ENV_VARS.items():
            value = self.environ.get(var)
            if value is None or value == "":
                continue
            if field_name == "max_wait":
                try:
                    value = int(value)
                except ValueError:
                    raise ConfigError(f"{var} must be an integer, got {value!r}") from None
            overrides[field_name] = value
        return overrides

    def resolve(self, **overrides) -> WorkflowSettings:
        """Return the effective settings for one invocation."""
        try:
            settings = settings_from_dict(self.load(), base=self.defaults())
        except ValueError as e:
            raise ConfigError(f"{self.config_file}: {e}") from e
        settings = settings.with_overrides(**self.env_overrides())
        return settings.with_overrides(**overrides)
