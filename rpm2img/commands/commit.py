# SPDX-License-Identifier: BUSL-1.1
"""rpm2img commit / tag: promote the license-accepted container to an image."""

import sys

from rpm2img.config import WorkflowSettings
from rpm2img.docker import commit_container, remove_image, tag_image
from rpm2img.utils import load_settings


def commit(settings: WorkflowSettings) -> bool:
    """Replace the base image with the container's current state."""
    # An older base image with the same tag may or may not exist
    remove_image(settings.base_image)
    if not commit_container(settings.container_name, settings.base_image):
        print(
            f"Error: Failed to commit '{settings.container_name}' "
            f"as '{settings.base_image}'."
        )
        return False
    return True


def tag(settings: WorkflowSettings) -> bool:
    """Tag the base image as latest."""
    if not tag_image(settings.base_image, settings.latest_image):
        print(f"Error: Failed to tag '{settings.base_image}' as '{settings.latest_image}'.")
        return False
    return True


def cmd_commit(args):
    if not commit(load_settings(args)):
        sys.exit(1)


def cmd_tag(args):
    if not tag(load_settings(args)):
        sys.exit(1)
