# SPDX-License-Identifier: BUSL-1.1
"""rpm2img logs: show the appliance container's output."""

import sys

from rpm2img.docker import container_logs
from rpm2img.utils import load_settings


def cmd_logs(args):
    settings = load_settings(args)
    if not container_logs(settings.container_name):
        sys.exit(1)
