"""Shared waiting and error translation for all page components."""

import re

from playwright.sync_api import Locator, Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from ..config import Config, load_config
from ..errors import NavigationTimeout, NotVisible, ScenarioTimeout
from ..log import get_logger
from ..waits import Deadline


class BasePage:
    """Base class holding the driver handle and the bounded-wait helpers.

    Components never cache what they read from the page; every query goes
    back to the DOM.
    """

    def __init__(self, page: Page, config: Config | None = None, deadline: Deadline | None = None):
        self.page = page
        self.config = config or load_config()
        self.timeouts = self.config.timeouts
        self.deadline = deadline
        self.logger = get_logger(type(self).__module__, component=type(self).__name__)

    def _timeout(self, timeout_ms: float | None = None) -> float:
        timeout_ms = self.timeouts.standard if timeout_ms is None else timeout_ms
        if self.deadline is None:
            return timeout_ms
        return self.deadline.clamp(timeout_ms)

    def _raise_if_out_of_time(self, exc: Exception) -> None:
        if self.deadline is not None and self.deadline.expired:
            raise ScenarioTimeout(
                f"Scenario exceeded its {self.deadline.seconds}s budget",
                self.deadline.seconds * 1000,
            ) from exc

    def _sleep(self, ms: float) -> None:
        self.page.wait_for_timeout(ms)

    def _locator(self, selector: str) -> Locator:
        return self.page.locator(selector)

    def _visible(self, selector: str, timeout: float | None = None) -> Locator:
        """Wait for the first match of ``selector`` to be visible."""
        timeout = self._timeout(timeout)
        locator = self._locator(selector).first
        try:
            locator.wait_for(state="visible", timeout=timeout)
        except PlaywrightTimeoutError as exc:
            self._raise_if_out_of_time(exc)
            raise NotVisible(selector, timeout) from exc
        return locator

    def _hidden(self, selector: str, timeout: float | None = None) -> None:
        timeout = self._timeout(timeout)
        try:
            self._locator(selector).first.wait_for(state="hidden", timeout=timeout)
        except PlaywrightTimeoutError as exc:
            self._raise_if_out_of_time(exc)
            raise NavigationTimeout(f"Element '{selector}' still visible after {timeout}ms", timeout) from exc

    def _probe(self, selector: str, timeout: float | None = None) -> bool:
        """Bounded visibility probe. A timeout means "absent", not failure."""
        timeout = self._timeout(self.timeouts.probe if timeout is None else timeout)
        try:
            self._locator(selector).first.wait_for(state="visible", timeout=timeout)
        except PlaywrightTimeoutError:
            return False
        return True

    def _wait_url(self, pattern: str, timeout: float | None = None) -> None:
        timeout = self._timeout(timeout)
        try:
            self.page.wait_for_url(re.compile(pattern), timeout=timeout)
        except PlaywrightTimeoutError as exc:
            self._raise_if_out_of_time(exc)
            raise NavigationTimeout(
                f"URL did not match /{pattern}/ within {timeout}ms (at {self.page.url})", timeout
            ) from exc

    def _click(self, selector: str, index: int = 0, timeout: float | None = None) -> None:
        """Click the ``index``-th match; ``NotVisible`` if it never becomes actionable."""
        timeout = self._timeout(timeout)
        try:
            self._locator(selector).nth(index).click(timeout=timeout)
        except PlaywrightTimeoutError as exc:
            self._raise_if_out_of_time(exc)
            raise NotVisible(selector, timeout) from exc

    def _fill(self, selector: str, value: str, timeout: float | None = None) -> None:
        timeout = self._timeout(timeout)
        try:
            self._locator(selector).first.fill(value, timeout=timeout)
        except PlaywrightTimeoutError as exc:
            self._raise_if_out_of_time(exc)
            raise NotVisible(selector, timeout) from exc

    def _clear(self, selector: str, timeout: float | None = None) -> None:
        timeout = self._timeout(timeout)
        try:
            self._locator(selector).first.clear(timeout=timeout)
        except PlaywrightTimeoutError as exc:
            self._raise_if_out_of_time(exc)
            raise NotVisible(selector, timeout) from exc

    def _text(self, selector: str, timeout: float | None = None) -> str:
        """Blocking read of the first match's text; ``NotVisible`` if it never renders."""
        return (self._visible(selector, timeout).text_content() or "").strip()
