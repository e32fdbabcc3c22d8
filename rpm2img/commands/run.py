# SPDX-License-Identifier: BUSL-1.1
"""rpm2img run / evolve: start the appliance container."""

import sys

from rpm2img.config import WorkflowSettings
from rpm2img.docker import run_container
from rpm2img.utils import load_settings


EVOLVE_BANNER = """\
#############################################################
## It is a manual process to turn a factory image into a   ##
## base image.  You must perform the following steps:      ##
##                                                         ##
## 1) In the CLI, answer the initial questions DataPower   ##
## normally asks upon reinitialization, such as enabling   ##
## secure backup and common criteria mode.  As soon as     ##
## you receive a DataPower prompt, type 'exit'.            ##
##                                                         ##
## 2) In the WebGUI, accept the license. When you are      ##
## again presented with the DataPower login screen, close  ##
## the browser.                                            ##
#############################################################"""


def run(settings: WorkflowSettings, image: str = "") -> bool:
    """Run ``image`` (the base image by default) as a detached container."""
    image = image or settings.base_image
    if not run_container(settings, image):
        print(f"Error: Failed to start container '{settings.container_name}' from '{image}'.")
        print("  Tip: container names must be unique; 'rpm2img rm' removes an old one.")
        return False
    return True


def evolve(settings: WorkflowSettings) -> bool:
    """Run the factory image so it can be turned into a base image."""
    if not run(settings, settings.factory_image):
        return False
    print(EVOLVE_BANNER)
    return True


def cmd_run(args):
    settings = load_settings(args)
    image = settings.factory_image if getattr(args, "factory", False) else ""
    if not run(settings, image):
        sys.exit(1)


def cmd_evolve(args):
    if not evolve(load_settings(args)):
        sys.exit(1)
