# SPDX-License-Identifier: BUSL-1.1
"""Command implementations for the rpm2img CLI."""

from rpm2img.commands.all_cmd import cmd_all
from rpm2img.commands.build import cmd_build
from rpm2img.commands.clean import cmd_clean
from rpm2img.commands.commit import cmd_commit, cmd_tag
from rpm2img.commands.config_cmd import cmd_config
from rpm2img.commands.console import cmd_cli, cmd_gui, cmd_shell
from rpm2img.commands.describe import cmd_describe
from rpm2img.commands.init import cmd_init
from rpm2img.commands.logs import cmd_logs
from rpm2img.commands.run import cmd_evolve, cmd_run
from rpm2img.commands.stop import cmd_rm, cmd_stop
from rpm2img.commands.wait_cmd import cmd_wait
__all__ = [
    "cmd_all", "cmd_build", "cmd_clean", "cmd_commit", "cmd_tag",
    "cmd_config", "cmd_cli", "cmd_gui", "cmd_shell", "cmd_describe",
    "cmd_init", "cmd_logs", "cmd_evolve", "cmd_run", "cmd_rm", "cmd_stop",
    "cmd_wait",
]
