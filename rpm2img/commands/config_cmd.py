# SPDX-License-Identifier: BUSL-1.1
"""rpm2img config: show or edit the settings file."""

import yaml

from rpm2img.config import ConfigError
from rpm2img.config.resources import (
    CAMEL_KEYS, FIELD_ALIASES, FIELD_TYPES, settings_from_dict, settings_to_dict,
)
from rpm2img.utils import die, store_for_args


def _config_key(key: str) -> str:
    """Return the camelCase spelling of a setting, as stored in config.yaml."""
    field_name = FIELD_ALIASES.get(key.strip())
    if field_name is None:
        die(f"unknown setting '{key}'")
    return CAMEL_KEYS[field_name]


def _parse_assignment(text: str) -> tuple:
    """Split KEY=VALUE, parsing non-string VALUEs as YAML so lists and numbers work."""
    if "=" not in text:
        die(f"expected KEY=VALUE, got '{text}'")
    key, raw = text.split("=", 1)
    key = _config_key(key)
    if FIELD_TYPES[FIELD_ALIASES[key]] is str:
        return key, raw.strip()
    try:
        value = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        die(f"cannot parse value for '{key}': {e}")
    return key, value


def cmd_config(args):
    store = store_for_args(args)
    try:
        data = dict(store.load())
    except ConfigError as e:
        die(str(e))
    changed = False

    for assignment in getattr(args, "set", None) or []:
        key, value = _parse_assignment(assignment)
        data[key] = value
        changed = True
    for key in getattr(args, "unset", None) or []:
        data.pop(_config_key(key), None)
        changed = True

    if changed:
        try:
            settings_from_dict(data)
        except ValueError as e:
            die(str(e))
        store.save(data)
        print("Config updated.")

    try:
        effective = settings_to_dict(store.resolve())
        from_env = {CAMEL_KEYS[name] for name in store.env_overrides()}
    except ConfigError as e:
        die(str(e))

    print(f"\nConfig file ({store.config_file}):")
    for key, value in effective.items():
        if key in from_env:
            source = "  (environment)"
        elif key in data:
            source = ""
        else:
            source = "  (default)"
        print(f"  {key + ':':<15} {value}{source}")
