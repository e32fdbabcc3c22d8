# SPDX-License-Identifier: BUSL-1.1
"""rpm2img wait: wait for a TCP listener inside the container."""

import sys

from rpm2img.utils import die, load_settings
from rpm2img.waiter import Outcome, wait_for_listener


def cmd_wait(args):
    settings = load_settings(args)
    port = args.port
    if not 1 <= port <= 65535:
        die(f"port must be between 1 and 65535, got {port}")

    outcome = wait_for_listener(settings.container_name, port, settings.max_wait)
    if outcome is Outcome.READY:
        print(f"Port {port} is listening in '{settings.container_name}'.")
        return
    print(f"Timed out waiting for port {port} after {settings.max_wait} attempts.")
    sys.exit(1)
