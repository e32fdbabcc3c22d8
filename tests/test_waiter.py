#!/usr/bin/env python3
# SPDX-License-Identifier: BUSL-1.1
"""Tests for the bounded readiness wait and the listener condition."""

import io
import sys
import unittest
from pathlib import Path
from unittest import mock

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from rpm2img.waiter import (
    Outcome,
    ProgressPrinter,
    WaitSpec,
    is_listening,
    listener_condition,
    run_wait,
    wait,
    wait_for_listener,
)


NETSTAT_CLI_UP = """\
Active Internet connections (only servers)
Proto Recv-Q Send-Q Local Address           Foreign Address         State
tcp        0      0 127.0.0.1:5550          0.0.0.0:*               LISTEN
tcp6       0      0 :::2200                 :::*                    LISTEN
udp        0      0 0.0.0.0:161             0.0.0.0:*
"""

NETSTAT_NOTHING = """\
Active Internet connections (only servers)
Proto Recv-Q Send-Q Local Address           Foreign Address         State
tcp        0      0 127.0.0.1:5550          0.0.0.0:*               LISTEN
"""


class ScriptedCondition:
    """Condition returning queued results and recording the targets it saw."""

    def __init__(self, results):
        self.results = list(results)
        self.calls = []

    def __call__(self, target):
        self.calls.append(target)
        return self.results.pop(0)


class TestWait(unittest.TestCase):
    def test_ready_on_first_attempt_does_not_sleep(self):
        condition = ScriptedCondition([True])
        sleep = mock.Mock()
        self.assertIs(wait("dp", condition, timeout=120, sleep=sleep), Outcome.READY)
        self.assertEqual(condition.calls, ["dp"])
        sleep.assert_not_called()

    def test_never_ready_evaluates_timeout_times(self):
        condition = ScriptedCondition([False] * 5)
        sleep = mock.Mock()
        self.assertIs(wait("dp", condition, interval=1, timeout=5, sleep=sleep), Outcome.TIMED_OUT)
        self.assertEqual(len(condition.calls), 5)
        self.assertEqual(sleep.call_args_list, [mock.call(1)] * 4)

    def test_ready_on_attempt_k(self):
        for k in range(1, 7):
            with self.subTest(k=k):
                condition = ScriptedCondition([False] * (k - 1) + [True])
                sleep = mock.Mock()
                outcome = wait("dp", condition, interval=0.5, timeout=6, sleep=sleep)
                self.assertIs(outcome, Outcome.READY)
                self.assertEqual(len(condition.calls), k)
                self.assertEqual(sleep.call_count, k - 1)
                for call in sleep.call_args_list:
                    self.assertEqual(call, mock.call(0.5))

    def test_single_attempt_budget_never_sleeps(self):
        for result, expected in ((True, Outcome.READY), (False, Outcome.TIMED_OUT)):
            with self.subTest(result=result):
                condition = ScriptedCondition([result])
                sleep = mock.Mock()
                self.assertIs(wait("dp", condition, timeout=1, sleep=sleep), expected)
                self.assertEqual(len(condition.calls), 1)
                sleep.assert_not_called()

    def test_repeated_waits_on_unchanging_target_agree(self):
        def never(target):
            return False

        def always(target):
            return True

        sleep = mock.Mock()
        outcomes = {wait("dp", never, timeout=3, sleep=sleep) for _ in range(3)}
        self.assertEqual(outcomes, {Outcome.TIMED_OUT})
        outcomes = {wait("dp", always, timeout=3, sleep=sleep) for _ in range(3)}
        self.assertEqual(outcomes, {Outcome.READY})

    def test_progress_reports_each_failed_attempt(self):
        condition = ScriptedCondition([False, False, True])
        progress = mock.Mock()
        wait("dp", condition, timeout=5, sleep=mock.Mock(), progress=progress)
        self.assertEqual(progress.call_args_list, [mock.call(1), mock.call(2)])

    def test_condition_errors_propagate(self):
        def broken(target):
            raise RuntimeError("boom")

        with self.assertRaises(RuntimeError):
            wait("dp", broken, timeout=3, sleep=mock.Mock())

    def test_run_wait_uses_spec(self):
        condition = ScriptedCondition([False, True])
        sleep = mock.Mock()
        spec = WaitSpec(target="c1", condition=condition, interval=2, timeout=3)
        self.assertIs(run_wait(spec, sleep=sleep), Outcome.READY)
        self.assertEqual(condition.calls, ["c1", "c1"])
        sleep.assert_called_once_with(2)


class TestWaitSpecValidation(unittest.TestCase):
    def _cond(self, target):
        return True

    def test_rejects_non_positive_timeout(self):
        for timeout in (0, -1):
            with self.subTest(timeout=timeout):
                with self.assertRaises(ValueError):
                    WaitSpec("dp", self._cond, 1, timeout)

    def test_rejects_non_integer_timeout(self):
        for timeout in (1.5, "10", True):
            with self.subTest(timeout=timeout):
                with self.assertRaises(ValueError):
                    WaitSpec("dp", self._cond, 1, timeout)

    def test_rejects_non_positive_interval(self):
        for interval in (0, -0.5):
            with self.subTest(interval=interval):
                with self.assertRaises(ValueError):
                    WaitSpec("dp", self._cond, interval, 5)

    def test_wait_validates_before_polling(self):
        condition = ScriptedCondition([])
        with self.assertRaises(ValueError):
            wait("dp", condition, timeout=0)
        self.assertEqual(condition.calls, [])


class TestProgressPrinter(unittest.TestCase):
    def test_message_then_dots_then_newline(self):
        out = io.StringIO()
        printer = ProgressPrinter("Waiting for port 2200 listener", stream=out)
        printer(1)
        printer(2)
        printer(3)
        printer.finish()
        self.assertEqual(out.getvalue(), "Waiting for port 2200 listener..\n")

    def test_finish_without_output_prints_nothing(self):
        out = io.StringIO()
        printer = ProgressPrinter("Waiting", stream=out)
        printer.finish()
        self.assertEqual(out.getvalue(), "")


class TestListenerMatching(unittest.TestCase):
    def test_ipv6_listener_matches(self):
        self.assertTrue(is_listening(NETSTAT_CLI_UP, 2200))

    def test_absent_port_does_not_match(self):
        self.assertFalse(is_listening(NETSTAT_NOTHING, 9090))

    def test_udp_line_does_not_match(self):
        self.assertFalse(is_listening(NETSTAT_CLI_UP, 161))

    def test_non_listen_state_does_not_match(self):
        output = "tcp        0      0 10.0.0.2:9090     10.0.0.9:51234     ESTABLISHED\n"
        self.assertFalse(is_listening(output, 9090))

    def test_port_prefix_also_matches(self):
        # ":220" followed by anything then LISTEN, as grep would see it
        self.assertTrue(is_listening(NETSTAT_CLI_UP, 220))

    def test_empty_output(self):
        self.assertFalse(is_listening("", 2200))
        self.assertFalse(is_listening(None, 2200))


class TestListenerCondition(unittest.TestCase):
    @mock.patch("rpm2img.waiter.netstat_listeners")
    def test_queries_target_container(self, mock_netstat):
        mock_netstat.return_value = NETSTAT_CLI_UP
        check = listener_condition(2200)
        self.assertTrue(check("datapower"))
        mock_netstat.assert_called_once_with("datapower")

    @mock.patch("rpm2img.waiter.netstat_listeners", return_value=None)
    def test_unreachable_container_counts_as_not_listening(self, mock_netstat):
        self.assertFalse(listener_condition(2200)("gone"))

    @mock.patch("rpm2img.waiter.netstat_listeners")
    def test_condition_agrees_with_is_listening(self, mock_netstat):
        mock_netstat.return_value = NETSTAT_CLI_UP
        for port in (2200, 220, 9090):
            self.assertEqual(
                listener_condition(port)("datapower"),
                is_listening(NETSTAT_CLI_UP, port),
            )

    @mock.patch("rpm2img.waiter.netstat_listeners")
    def test_wait_for_listener_ready_after_one_check(self, mock_netstat):
        mock_netstat.return_value = NETSTAT_CLI_UP
        sleep = mock.Mock()
        out = io.StringIO()
        with mock.patch("sys.stdout", out):
            outcome = wait_for_listener("datapower", 2200, 120, sleep=sleep)
        self.assertIs(outcome, Outcome.READY)
        self.assertEqual(mock_netstat.call_count, 1)
        sleep.assert_not_called()
        self.assertEqual(out.getvalue(), "")

    @mock.patch("rpm2img.waiter.netstat_listeners")
    def test_wait_for_listener_times_out(self, mock_netstat):
        mock_netstat.return_value = NETSTAT_NOTHING
        sleep = mock.Mock()
        out = io.StringIO()
        with mock.patch("sys.stdout", out):
            outcome = wait_for_listener("datapower", 9090, 5, sleep=sleep)
        self.assertIs(outcome, Outcome.TIMED_OUT)
        self.assertEqual(mock_netstat.call_count, 5)
        self.assertEqual(sleep.call_args_list, [mock.call(1)] * 4)
        self.assertEqual(out.getvalue(), "Waiting for port 9090 listener....\n")


if __name__ == "__main__":
    unittest.main()
