# SPDX-License-Identifier: BUSL-1.1
"""Validation of workflow settings against docker's naming rules."""

import re

CONTAINER_NAME_RE = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9_.-]*$")
TAG_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]{0,127}$")
# One lowercase path component of a repository name
REPOSITORY_COMPONENT_RE = re.compile(r"^[a-z0-9]+(?:(?:[._]|__|-+)[a-z0-9]+)*$")
REGISTRY_HOST_RE = re.compile(r"^[a-zA-Z0-9.-]+(?::[0-9]+)?$")


class ValidationError(Exception):
    """Raised when settings validation fails."""
    def __init__(self, errors: list, warnings: list = None):
        self.errors = errors
        self.warnings = warnings or []
        msg = "; ".join(errors)
        super().__init__(msg)


class ValidationResult:
    """Collects errors and warnings from validation."""
    def __init__(self):
        self.errors = []
        self.warnings = []

    def error(self, msg: str):
        self.errors.append(msg)

    def warn(self, msg: str):
        self.warnings.append(msg)

    @property
    def valid(self) -> bool:
        return len(self.errors) == 0

    def raise_if_invalid(self):
        if not self.valid:
            raise ValidationError(self.errors, self.warnings)


def _is_port(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 65535


def _valid_registry(registry: str) -> bool:
    parts = registry.split("/")
    first = parts[0]
    # A first component with '.' or ':' (or "localhost") is a registry host
    if "." in first or ":" in first or first == "localhost":
        if not REGISTRY_HOST_RE.match(first):
            return False
        parts = parts[1:]
    return all(REPOSITORY_COMPONENT_RE.match(p) for p in parts)


def validate_names(settings) -> ValidationResult:
    """Check that the derived image and container names are usable by docker."""
    result = ValidationResult()
    s = settings

    if not s.package_name:
        result.error("packageName must not be empty")
    elif not REPOSITORY_COMPONENT_RE.match(s.package_name):
        result.error(
            f"packageName '{s.package_name}' is not a valid repository name; "
            "use lowercase letters, digits, and separators '.', '_', '-'"
        )

    if not s.registry:
        result.warn("registry is empty; images will be named without a registry prefix")
    elif not _valid_registry(s.registry):
        result.error(
            f"registry '{s.registry}' is not a valid repository prefix; "
            "docker repository names must be lowercase"
        )

    if not TAG_RE.match(str(s.tag or "")):
        result.error(f"tag '{s.tag}' is not a valid docker tag")
    elif s.tag == "latest":
        result.warn("tag 'latest' makes the tag step retag the base image onto itself")

    if not s.container_name:
        result.error("containerName must not be empty")
    elif not CONTAINER_NAME_RE.match(s.container_name):
        result.error(
            f"containerName '{s.container_name}' must match "
            "[a-zA-Z0-9][a-zA-Z0-9_.-]*"
        )

    return result


def validate_limits(settings) -> ValidationResult:
    """Check wait budget and port numbers."""
    result = ValidationResult()
    s = settings

    if not isinstance(s.max_wait, int) or isinstance(s.max_wait, bool) or s.max_wait < 1:
        result.error(f"maxWait must be a positive integer, got {s.max_wait!r}")

    for label, port in (("cliPort", s.cli_port), ("guiPort", s.gui_port)):
        if not _is_port(port):
            result.error(f"{label} must be a port number between 1 and 65535, got {port!r}")

    if not s.run_flags:
        result.warn("runFlags is empty; the container will run without --privileged")

    return result


def validate_settings(settings) -> ValidationResult:
    """Full validation of workflow settings."""
    result = ValidationResult()
    for check in (validate_names, validate_limits):
        partial = check(settings)
        result.errors.extend(partial.errors)
        result.warnings.extend(partial.warnings)
    return result
