# SPDX-License-Identifier: BUSL-1.1
"""CLI argument parsing and command dispatch."""

import argparse
import sys

from rpm2img import __version__


def _settings_parent() -> argparse.ArgumentParser:
    """Options shared by every command that reads workflow settings."""
    parent = argparse.ArgumentParser(add_help=False)
    group = parent.add_argument_group("settings overrides")
    group.add_argument("--config", help="Settings file (default: ~/.config/rpm2img/config.yaml)")
    group.add_argument("--registry", help="Registry prefix for image names (default: $USER)")
    group.add_argument("--package-name", help="Package name the repositories derive from")
    group.add_argument("--tag", help="Image tag")
    group.add_argument("--container-name", help="Name of the appliance container")
    group.add_argument("--max-wait", type=int,
                       help="Listener wait attempts, and seconds allowed for docker stop")
    group.add_argument("--build-dir", help="Directory holding the Dockerfile and RPMs")
    return parent


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rpm2img",
        description="rpm2img - build a license-accepted appliance base image with docker",
    )
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")
    common = _settings_parent()

    # workflow steps, in order
    sub.add_parser("build", parents=[common], help="Build the factory image from the RPMs")
    sub.add_parser("evolve", parents=[common],
                   help="Run the factory image so the license can be accepted")
    sub.add_parser("cli", parents=[common],
                   help="Wait for the appliance CLI, then connect over telnet")
    sub.add_parser("gui", parents=[common],
                   help="Wait for the WebGUI, then open it in a browser")
    sub.add_parser("stop", parents=[common], help="Stop the container (keeps it)")
    sub.add_parser("commit", parents=[common],
                   help="Commit the stopped container as the base image")
    sub.add_parser("rm", parents=[common], help="Stop and remove the container")
    sub.add_parser("tag", parents=[common], help="Tag the base image as latest")
    sub.add_parser("all", parents=[common],
                   help="build evolve cli gui stop commit rm tag")

    # run
    p_run = sub.add_parser("run", parents=[common], help="Run the base image detached")
    p_run.add_argument("--factory", action="store_true",
                       help="Run the factory image instead of the base image")

    # inspection
    sub.add_parser("shell", parents=[common], help="Open a bash shell in the container")
    sub.add_parser("logs", parents=[common], help="Show container logs")
    p_wait = sub.add_parser("wait", parents=[common],
                            help="Wait for a TCP port to listen inside the container")
    p_wait.add_argument("port", type=int, help="TCP port inside the container")
    sub.add_parser("describe", parents=[common],
                   help="Show resolved settings and image names")

    # clean
    p_clean = sub.add_parser("clean", parents=[common],
                             help="Remove the container and the workflow's images")
    p_clean.add_argument("--yes", action="store_true", help="Skip confirmation prompt")

    # init
    p_init = sub.add_parser("init", help="Write a settings file")
    p_init.add_argument("--config", help="Settings file to write")
    p_init.add_argument("--force", action="store_true",
                        help="Re-initialize even if already configured")
    p_init.add_argument("--defaults", action="store_true",
                        help="Accept all defaults without prompting")

    # config
    p_cfg = sub.add_parser("config", help="Show or edit the settings file")
    p_cfg.add_argument("--config", help="Settings file to show or edit")
    p_cfg.add_argument("--set", action="append", default=[], metavar="KEY=VALUE",
                       help="Set a setting (repeatable), e.g. --set tag=0.2")
    p_cfg.add_argument("--unset", action="append", default=[], metavar="KEY",
                       help="Remove a setting from the file (repeatable)")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Lazy import commands to keep startup fast
    from rpm2img.commands import (
        cmd_all, cmd_build, cmd_clean, cmd_cli, cmd_commit, cmd_config,
        cmd_describe, cmd_evolve, cmd_gui, cmd_init, cmd_logs, cmd_rm,
        cmd_run, cmd_shell, cmd_stop, cmd_tag, cmd_wait,
    )

    commands = {
        "build": cmd_build,
        "evolve": cmd_evolve,
        "cli": cmd_cli,
        "gui": cmd_gui,
        "stop": cmd_stop,
        "commit": cmd_commit,
        "rm": cmd_rm,
        "tag": cmd_tag,
        "all": cmd_all,
        "run": cmd_run,
        "shell": cmd_shell,
        "logs": cmd_logs,
        "wait": cmd_wait,
        "describe": cmd_describe,
        "clean": cmd_clean,
        "init": cmd_init,
        "config": cmd_config,
    }
    try:
        commands[args.command](args)
    except KeyboardInterrupt:
        print()
        sys.exit(130)


if __name__ == "__main__":
    main()
