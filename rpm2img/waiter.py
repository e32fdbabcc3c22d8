# SPDX-License-Identifier: BUSL-1.1
"""Bounded polling for container readiness.

A wait evaluates a condition against a target up to ``timeout`` times,
sleeping ``interval`` seconds between attempts. The budget counts attempts,
not wall-clock time: the latency of each check is not deducted from it.
"""

import re
import sys
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from rpm2img.docker import netstat_listeners


class Outcome(Enum):
    READY = "ready"
    TIMED_OUT = "timed-out"


@dataclass(frozen=True)
class WaitSpec:
    """One readiness wait: what to poll, how often, and how many times."""
    target: str
    condition: Callable[[str], bool]
    interval: float = 1.0
    timeout: int = 120

    def __post_init__(self):
        if (isinstance(self.timeout, bool) or not isinstance(self.timeout, int)
                or self.timeout < 1):
            raise ValueError(f"timeout must be a positive integer, got {self.timeout!r}")
        if not self.interval > 0:
            raise ValueError(f"interval must be positive, got {self.interval!r}")


def run_wait(spec: WaitSpec, sleep=time.sleep,
             progress: Optional[Callable[[int], None]] = None) -> Outcome:
    """Poll ``spec.condition`` until it holds or the attempt budget is spent.

    The first true evaluation returns immediately. Each false evaluation is
    reported to ``progress`` with its 1-based attempt number and, when
    another attempt remains, followed by one blocking ``sleep(interval)``.
    """
    for attempt in range(1, spec.timeout + 1):
        if spec.condition(spec.target):
            return Outcome.READY
        if progress is not None:
            progress(attempt)
        if attempt < spec.timeout:
            sleep(spec.interval)
    return Outcome.TIMED_OUT


def wait(target: str, condition: Callable[[str], bool], interval: float = 1.0,
         timeout: int = 120, sleep=time.sleep,
         progress: Optional[Callable[[int], None]] = None) -> Outcome:
    """Wait for ``condition(target)`` to hold; see :func:`run_wait`."""
    return run_wait(WaitSpec(target, condition, interval, timeout),
                    sleep=sleep, progress=progress)


class ProgressPrinter:
    """Print a message on the first failed attempt and a dot on each later one."""

    def __init__(self, message: str, stream=None):
        self.message = message
        self.stream = stream
        self.printed = False

    def _out(self):
        return self.stream if self.stream is not None else sys.stdout

    def __call__(self, attempt: int):
        out = self._out()
        out.write("." if self.printed else self.message)
        out.flush()
        self.printed = True

    def finish(self):
        """End the progress line, if one was started."""
        if self.printed:
            out = self._out()
            out.write("\n")
            out.flush()


# ── Listener readiness ───────────────────────────────────────────────────

def listener_pattern(port) -> "re.Pattern":
    """Return the netstat line pattern for a TCP listener on ``port``."""
    return re.compile(rf"^tcp.*:{re.escape(str(port))}.*LISTEN", re.MULTILINE)


def is_listening(netstat_output: str, port) -> bool:
    """Return True if ``netstat -ln`` output shows a TCP listener on ``port``."""
    return bool(listener_pattern(port).search(netstat_output or ""))


def listener_condition(port) -> Callable[[str], bool]:
    """Return a condition checking a container's listener table for ``port``.

    A container that cannot be queried counts as not listening.
    """
    def check(container_name: str) -> bool:
        output = netstat_listeners(container_name)
        return output is not None and is_listening(output, port)

    return check


def wait_for_listener(container_name: str, port: int, max_wait: int,
                      sleep=time.sleep) -> Outcome:
    """Wait up to ``max_wait`` one-second attempts for ``port`` to listen."""
    progress = ProgressPrinter(f"Waiting for port {port} listener")
    try:
        return wait(
            container_name,
            listener_condition(port),
            interval=1,
            timeout=max_wait,
            sleep=sleep,
            progress=progress,
        )
    finally:
        progress.finish()
