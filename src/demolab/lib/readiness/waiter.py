"""
waiter.py
- Blocks until a HealthCheck reports ready, the timeout expires, or the run is cancelled.
- Polls with exponential backoff (1s, 2s, 4s ... capped) driven by tenacity.
- Cancellation is a threading.Event; setting it interrupts the current sleep.
"""

import threading
import time
from dataclasses import dataclass
from enum import Enum

from loguru import logger
from tenacity import (
    Retrying,
    retry_if_result,
    stop_after_delay,
    stop_any,
    stop_when_event_set,
    wait_exponential,
)

from demolab.core.config import READY_MAX_INTERVAL, READY_POLL_INTERVAL, READY_TIMEOUT


class ReadinessState(Enum):
    WAITING = "waiting"
    READY = "ready"
    TIMED_OUT = "timed out"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class WaitResult:
    state: ReadinessState
    attempts: int
    elapsed: float

    @property
    def ready(self):
        return self.state is ReadinessState.READY


class ReadinessWaiter:
    """
    Wait for one service to become ready.

    Args:
        check (HealthCheck): The probe to poll.
        name (str): Display name used in log messages.
        timeout (float or None): Give up after this many seconds; None waits forever.
        interval (float): First delay between polls, doubled after every miss.
        max_interval (float): Upper bound for the delay between polls.
        cancel_event (threading.Event): Set to abort the wait.
    """

    def __init__(self, check, name, timeout=None, interval=1, max_interval=30, cancel_event=None):
        self.check = check
        self.name = name
        self.timeout = timeout
        self.interval = interval
        self.max_interval = max(max_interval, interval)
        self.cancel_event = cancel_event or threading.Event()
        self.state = ReadinessState.WAITING
        self.attempts = 0

    def _poll(self):
        if self.cancel_event.is_set():
            return False
        self.attempts += 1
        return self.check.is_ready()

    def _log_still_waiting(self, retry_state):
        delay = retry_state.next_action.sleep if retry_state.next_action else self.interval
        message = (
            f"[readiness] Still waiting on {self.name} ({self.check.description}), "
            f"attempt {self.attempts}, next check in {delay:.0f}s"
        )
        if self.attempts == 1:
            logger.info(message)
        else:
            logger.debug(message)

    def wait(self) -> WaitResult:
        logger.info(f"[readiness] Waiting on {self.name} to come up online...")
        started = time.monotonic()

        stops = [stop_when_event_set(self.cancel_event)]
        if self.timeout:
            stops.append(stop_after_delay(self.timeout))

        retrying = Retrying(
            retry=retry_if_result(lambda ready: not ready),
            wait=wait_exponential(multiplier=self.interval, min=self.interval, max=self.max_interval),
            stop=stop_any(*stops),
            sleep=self.cancel_event.wait,
            before_sleep=self._log_still_waiting,
            retry_error_callback=lambda retry_state: False,
        )
        ready = retrying(self._poll)

        if ready:
            self.state = ReadinessState.READY
        elif self.cancel_event.is_set():
            self.state = ReadinessState.CANCELLED
        else:
            self.state = ReadinessState.TIMED_OUT

        result = WaitResult(self.state, self.attempts, time.monotonic() - started)
        if result.ready:
            logger.success(f"[readiness] {self.name} is ready after {result.elapsed:.0f}s")
        elif self.state is ReadinessState.CANCELLED:
            logger.warning(f"[readiness] Stopped waiting on {self.name}: cancelled")
        else:
            logger.error(f"[readiness] {self.name} did not become ready within {self.timeout}s")
        return result


def wait_until_ready(check, name, cancel_event=None, timeout=None, interval=None, max_interval=None):
    """Wait with the process-wide defaults (READY_TIMEOUT=0 means no timeout)."""
    if timeout is None:
        timeout = READY_TIMEOUT or None
    waiter = ReadinessWaiter(
        check,
        name,
        timeout=timeout,
        interval=interval or READY_POLL_INTERVAL,
        max_interval=max_interval or READY_MAX_INTERVAL,
        cancel_event=cancel_event,
    )
    return waiter.wait()
