# SPDX-License-Identifier: BUSL-1.1
"""rpm2img stop / rm: stop and remove the appliance container."""

from rpm2img.config import WorkflowSettings
from rpm2img.docker import remove_container, stop_container
from rpm2img.utils import load_settings


def stop(settings: WorkflowSettings) -> bool:
    """Stop the container. A container that is not running is not an error."""
    if not stop_container(settings.container_name, settings.max_wait):
        print(f"Warning: Could not stop '{settings.container_name}'; continuing.")
    return True


def rm(settings: WorkflowSettings) -> bool:
    """Stop, then remove the container, tolerating either failing."""
    stop(settings)
    if not remove_container(settings.container_name):
        print(f"Warning: Could not remove '{settings.container_name}'; continuing.")
    return True


def cmd_stop(args):
    stop(load_settings(args))


def cmd_rm(args):
    rm(load_settings(args))
