# SPDX-License-Identifier: BUSL-1.1
"""Workflow settings for rpm2img.

Settings are immutable: every workflow step receives the same
``WorkflowSettings`` instance, and overrides produce a new one.
"""

from dataclasses import dataclass, fields, replace


DEFAULT_RUN_FLAGS = ("--restart=on-failure", "--privileged", "-P")


@dataclass(frozen=True)
class WorkflowSettings:
    """Names, ports and limits shared by every workflow step."""
    registry: str = ""
    package_name: str = "datapower"
    tag: str = "0.1"
    container_name: str = "datapower"
    http_proxy: str = ""
    max_wait: int = 120
    run_flags: tuple = DEFAULT_RUN_FLAGS
    build_dir: str = "."
    cli_port: int = 2200                # appliance CLI (telnet)
    gui_port: int = 9090                # appliance WebGUI (https)
    browser: str = "firefox"

    # ── Derived names ────────────────────────────────────────────────

    @property
    def factory_repository(self) -> str:
        return f"{self.package_name}-factory"

    @property
    def base_repository(self) -> str:
        return f"{self.package_name}-base"

    def image_ref(self, repository: str, tag: str = "") -> str:
        """Return ``registry/repository:tag``, omitting an empty registry."""
        ref = f"{self.registry}/{repository}" if self.registry else repository
        return f"{ref}:{tag or self.tag}"

    @property
    def factory_image(self) -> str:
        return self.image_ref(self.factory_repository)

    @property
    def base_image(self) -> str:
        return self.image_ref(self.base_repository)

    @property
    def latest_image(self) -> str:
        return self.image_ref(self.base_repository, "latest")

    def with_overrides(self, **overrides) -> "WorkflowSettings":
        """Return a copy with the non-None overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "run_flags" in changes:
            flags = changes["run_flags"]
            if isinstance(flags, str):
                flags = flags.split()
            changes["run_flags"] = tuple(flags)
        return replace(self, **changes)


# ── Serialization helpers ────────────────────────────────────────────────

API_VERSION = "rpm2img/v1"


def _camel(name: str) -> str:
    parts = name.split("_")
    return parts[0] + "".join(p.capitalize() for p in parts[1:])


FIELD_ALIASES = {}
FIELD_TYPES = {}
CAMEL_KEYS = {}
for _f in fields(WorkflowSettings):
    FIELD_TYPES[_f.name] = _f.type
    CAMEL_KEYS[_f.name] = _camel(_f.name)
    FIELD_ALIASES[_f.name] = _f.name
    FIELD_ALIASES[_camel(_f.name)] = _f.name


def settings_to_dict(settings: WorkflowSettings) -> dict:
    """Convert settings to a YAML-serializable dict with camelCase keys."""
    result = {}
    for f in fields(settings):
        val = getattr(settings, f.name)
        if isinstance(val, tuple):
            val = list(val)
        result[_camel(f.name)] = val
    return result


def _check_run_flags(value):
    if value is None or isinstance(value, str):
        return value
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ValueError("runFlags must be a list of strings")
    return value


def settings_from_dict(data: dict, base: WorkflowSettings = None) -> WorkflowSettings:
    """Build settings from a camelCase or snake_case dict.

    Raises ValueError for keys that name no setting and for values of the
    wrong shape.
    """
    base = base or WorkflowSettings()
    if not data:
        return base
    if not isinstance(data, dict):
        raise ValueError(f"expected a mapping of settings, got {type(data).__name__}")
    kwargs = {}
    unknown = []
    for key, val in data.items():
        field_name = FIELD_ALIASES.get(key)
        if field_name is None:
            unknown.append(str(key))
            continue
        if FIELD_TYPES[field_name] is str:
            # YAML reads "tag: 1.10" as the float 1.1
            if isinstance(val, float):
                raise ValueError(
                    f"{CAMEL_KEYS[field_name]} {val!r} was read as a number; "
                    f"quote it, e.g. {CAMEL_KEYS[field_name]}: \"{val}\""
                )
            if isinstance(val, int):
                val = str(val)
        elif field_name == "run_flags":
            val = _check_run_flags(val)
        kwargs[field_name] = val
    if unknown:
        raise ValueError(f"unknown setting(s): {', '.join(sorted(unknown))}")
    return base.with_overrides(**kwargs)


def describe_images(settings: WorkflowSettings) -> dict:
    """Return the image names the workflow produces, keyed by role."""
    return {
        "factory": settings.factory_image,
        "base": settings.base_image,
        "latest": settings.latest_image,
    }


def resource_to_dict(settings: WorkflowSettings) -> dict:
    """Wrap settings in the apiVersion/kind/spec envelope used by describe."""
    return {
        "apiVersion": API_VERSION,
        "kind": "Workflow",
        "metadata": {"name": settings.container_name},
        "spec": settings_to_dict(settings),
        "status": {"images": describe_images(settings)},
    }
