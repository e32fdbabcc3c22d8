#!/usr/bin/env python3
# SPDX-License-Identifier: BUSL-1.1
"""Tests for CLI parsing and dispatch."""

import io
import sys
import unittest
from pathlib import Path
from unittest import mock

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from rpm2img.cli import build_parser, main


class TestParser(unittest.TestCase):
    def test_settings_overrides_on_workflow_commands(self):
        args = build_parser().parse_args(
            ["build", "--registry", "team", "--tag", "0.2", "--max-wait", "30"]
        )
        self.assertEqual(args.command, "build")
        self.assertEqual(args.registry, "team")
        self.assertEqual(args.tag, "0.2")
        self.assertEqual(args.max_wait, 30)
        self.assertIsNone(args.container_name)

    def test_wait_takes_port(self):
        args = build_parser().parse_args(["wait", "9090"])
        self.assertEqual(args.port, 9090)

    def test_config_set_is_repeatable(self):
        args = build_parser().parse_args(["config", "--set", "tag=1", "--set", "maxWait=5"])
        self.assertEqual(args.set, ["tag=1", "maxWait=5"])


class TestMain(unittest.TestCase):
    def test_no_command_prints_help(self):
        out = io.StringIO()
        with mock.patch("sys.stdout", out):
            with self.assertRaises(SystemExit) as ctx:
                main([])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("rpm2img", out.getvalue())

    def test_dispatches_to_command(self):
        with mock.patch("rpm2img.commands.cmd_tag") as mock_tag:
            main(["tag", "--tag", "0.5"])
        mock_tag.assert_called_once()
        self.assertEqual(mock_tag.call_args.args[0].tag, "0.5")

    def test_interrupt_exits_130(self):
        with mock.patch("rpm2img.commands.cmd_cli", side_effect=KeyboardInterrupt):
            with mock.patch("sys.stdout", io.StringIO()):
                with self.assertRaises(SystemExit) as ctx:
                    main(["cli"])
        self.assertEqual(ctx.exception.code, 130)


if __name__ == "__main__":
    unittest.main()
