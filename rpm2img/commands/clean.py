# SPDX-License-Identifier: BUSL-1.1
"""rpm2img clean: remove the workflow's container and images."""

from rpm2img.commands.stop import rm
from rpm2img.docker import container_exists, image_exists, remove_image
from rpm2img.utils import confirm, load_settings


def cmd_clean(args):
    settings = load_settings(args)

    has_container = container_exists(settings.container_name)
    images = [
        image for image in (
            settings.latest_image, settings.base_image, settings.factory_image,
        )
        if image_exists(image)
    ]
    if not has_container and not images:
        print("Nothing to clean.")
        return

    print("Cleanup targets:")
    if has_container:
        print(f"  Container: {settings.container_name}")
    for image in images:
        print(f"  Image:     {image}")

    if not getattr(args, "yes", False) and not confirm("Remove these?"):
        print("Clean cancelled.")
        return

    if has_container:
        rm(settings)
    for image in images:
        if not remove_image(image):
            print(f"Warning: Could not remove image '{image}'.")
    print("Clean complete.")
