# SPDX-License-Identifier: BUSL-1.1
"""rpm2img cli / gui / shell: connect to the running appliance."""

import subprocess
import sys
import time

from rpm2img.config import WorkflowSettings
from rpm2img.docker import (
    exec_interactive, exec_shell, is_container_running, published_host_port,
)
from rpm2img.utils import load_settings
from rpm2img.waiter import Outcome, wait_for_listener


def _await_port(settings: WorkflowSettings, port: int, sleep=time.sleep) -> bool:
    """Wait for ``port`` to listen inside the container, reporting a timeout."""
    if not is_container_running(settings.container_name):
        print(f"Error: Container '{settings.container_name}' is not running.")
        return False
    outcome = wait_for_listener(settings.container_name, port, settings.max_wait, sleep=sleep)
    if outcome is Outcome.TIMED_OUT:
        print(
            f"Error: No listener on port {port} in '{settings.container_name}' "
            f"after {settings.max_wait} attempts."
        )
        return False
    return True


def cli(settings: WorkflowSettings, sleep=time.sleep) -> bool:
    """Open the appliance CLI over telnet once it is listening."""
    if not _await_port(settings, settings.cli_port, sleep=sleep):
        return False
    # The telnet session's exit status carries no meaning
    exec_interactive(
        settings.container_name,
        ["telnet", "127.0.0.1", str(settings.cli_port)],
    )
    return True


def _close_browser(browser: str):
    try:
        subprocess.run(
            ["killall", browser],
            stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL,
        )
    except FileNotFoundError:
        pass


def gui(settings: WorkflowSettings, sleep=time.sleep) -> bool:
    """Open the appliance WebGUI in a browser once it is listening.

    Running instances of the browser are closed first so the new window
    belongs to this process, which blocks until the browser exits.
    """
    if not _await_port(settings, settings.gui_port, sleep=sleep):
        return False

    host_port = published_host_port(settings.container_name, settings.gui_port)
    if not host_port:
        print(
            f"Error: Port {settings.gui_port}/tcp of '{settings.container_name}' "
            "is not published on the host."
        )
        return False

    _close_browser(settings.browser)
    url = f"https://127.0.0.1:{host_port}"
    print(f"Opening {url} in {settings.browser}...")
    try:
        result = subprocess.run(
            [settings.browser, url],
            stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL,
        )
    except FileNotFoundError:
        print(f"Error: Browser '{settings.browser}' not found. Set BROWSER or browser in config.")
        return False
    return result.returncode == 0


def cmd_cli(args):
    if not cli(load_settings(args)):
        sys.exit(1)


def cmd_gui(args):
    if not gui(load_settings(args)):
        sys.exit(1)


def cmd_shell(args):
    settings = load_settings(args)
    exec_shell(settings.container_name)
