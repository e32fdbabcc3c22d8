# SPDX-License-Identifier: BUSL-1.1
"""rpm2img build: build the factory image from the vendor RPMs."""

import sys

from rpm2img.config import WorkflowSettings
from rpm2img.docker import build_image, missing_build_inputs
from rpm2img.utils import load_settings


def build(settings: WorkflowSettings) -> bool:
    missing = missing_build_inputs(settings.build_dir)
    if missing:
        print(f"Error: missing build inputs in {settings.build_dir}:")
        for name in missing:
            print(f"  - {name}")
        print("Place the DataPower RPM packages next to the Dockerfile and rename them")
        print("ibm-datapower-common.rpm and ibm-datapower-image.rpm.")
        return False

    print(f"Building factory image '{settings.factory_image}'...")
    if not build_image(settings):
        print(f"Error: Failed to build '{settings.factory_image}'.")
        return False
    return True


def cmd_build(args):
    settings = load_settings(args)
    if not build(settings):
        sys.exit(1)
