"""
Wait Helpers

Polling utilities and the scenario-wide time budget.

All sleeping goes through an injectable ``sleep(ms)`` callable. Page objects
pass ``page.wait_for_timeout`` so Playwright keeps dispatching events (dialogs,
responses) while a poll is idle; ``time.sleep`` would starve the sync API.
"""

from __future__ import annotations

import time
from typing import Callable, TypeVar

from .errors import ScenarioTimeout

T = TypeVar("T")


def _default_sleep(ms: float) -> None:
    time.sleep(ms / 1000)


def wait_for_condition(
    action: Callable[[], T],
    condition: Callable[[T], bool],
    timeout_ms: float = 10_000,
    poll_interval_ms: float = 500,
    sleep: Callable[[float], None] | None = None,
    error_message: str = "Condition not met within timeout",
) -> T:
    """
    Poll an action until condition is met.

    Args:
        action: Function to call repeatedly
        condition: Function that returns True when condition is met
        timeout_ms: Maximum time to wait
        poll_interval_ms: Time between polls
        sleep: Callable taking milliseconds; defaults to ``time.sleep``
        error_message: Message for timeout error

    Returns:
        The result of action() when condition is met

    Raises:
        TimeoutError: If condition not met within timeout

    Example:
        count = wait_for_condition(
            action=cart.item_count,
            condition=lambda n: n == 0,
            timeout_ms=5_000,
            sleep=page.wait_for_timeout,
        )
    """
    sleep = sleep or _default_sleep
    deadline = time.monotonic() + timeout_ms / 1000
    last_result: T | None = None

    while True:
        last_result = action()

        if condition(last_result):
            return last_result

        if time.monotonic() >= deadline:
            break

        sleep(poll_interval_ms)

    raise TimeoutError(f"{error_message}. Last result: {last_result}")


def wait_until_stable(
    action: Callable[[], T],
    timeout_ms: float = 10_000,
    poll_interval_ms: float = 500,
    stable_polls: int = 2,
    sleep: Callable[[float], None] | None = None,
) -> T:
    """
    Poll until ``action`` returns the same value on consecutive polls.

    ``stable_polls`` is the number of consecutive equal readings required,
    so the default of 2 means "unchanged across two polls one interval
    apart".

    Raises:
        TimeoutError: If the value keeps changing until the timeout
    """
    sleep = sleep or _default_sleep
    deadline = time.monotonic() + timeout_ms / 1000

    previous = action()
    streak = 1

    while streak < stable_polls:
        if time.monotonic() >= deadline:
            raise TimeoutError(f"Value did not settle within {timeout_ms}ms. Last value: {previous}")
        sleep(poll_interval_ms)
        current = action()
        streak = streak + 1 if current == previous else 1
        previous = current

    return previous


class Deadline:
    """Scenario-wide time budget.

    Page objects clamp every wait to the remaining budget, so once a
    scenario runs out of time its pending waits stop early and the next one
    raises ``ScenarioTimeout`` instead of starting.
    """

    def __init__(self, seconds: float, clock: Callable[[], float] = time.monotonic):
        self.seconds = seconds
        self._clock = clock
        self._expires_at = clock() + seconds

    @property
    def remaining_ms(self) -> float:
        return max(0.0, (self._expires_at - self._clock()) * 1000)

    @property
    def expired(self) -> bool:
        return self.remaining_ms <= 0

    def check(self) -> None:
        if self.expired:
            raise ScenarioTimeout(
                f"Scenario exceeded its {self.seconds}s budget", self.seconds * 1000
            )

    def clamp(self, timeout_ms: float) -> float:
        """Return ``timeout_ms`` limited to the remaining budget."""
        self.check()
        return min(timeout_ms, self.remaining_ms)
