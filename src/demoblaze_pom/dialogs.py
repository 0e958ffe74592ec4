"""One-shot observers for native browser dialogs (alert/confirm)."""

from typing import Callable

from playwright.sync_api import Dialog, Page

from .errors import DialogTimeout
from .log import get_logger
from .models import DialogResult
from .waits import wait_for_condition

logger = get_logger(__name__)


class DialogObserver:
    """Capture exactly one dialog raised while the observer is armed.

    The observer must be armed before the triggering action; arming after
    the click can miss a dialog that fires immediately. It deregisters
    itself after the first dialog, and on scope exit if none fired, so a
    stale handler never consumes an unrelated later dialog.

    Usage:
        with DialogObserver(page, timeout_ms=5_000) as observer:
            page.locator("#send").click()
            result = observer.wait()
    """

    def __init__(
        self,
        page: Page,
        timeout_ms: float = 5_000,
        poll_interval_ms: float = 100,
        accept: bool = True,
    ):
        self.page = page
        self.timeout_ms = timeout_ms
        self.poll_interval_ms = poll_interval_ms
        self.accept = accept
        self._result: DialogResult | None = None
        self._armed = False

    def __enter__(self) -> "DialogObserver":
        self.arm()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disarm()

    @property
    def fired(self) -> bool:
        return self._result is not None

    @property
    def result(self) -> DialogResult | None:
        return self._result

    def arm(self) -> None:
        if self._armed or self.fired:
            return
        self.page.once("dialog", self._on_dialog)
        self._armed = True

    def disarm(self) -> None:
        if self._armed:
            self.page.remove_listener("dialog", self._on_dialog)
            self._armed = False

    def _on_dialog(self, dialog: Dialog) -> None:
        # page.once already dropped the listener
        self._armed = False
        self._result = DialogResult(message=dialog.message, type=dialog.type)
        logger.debug("dialog_captured", type=dialog.type, message=dialog.message)
        if self.accept:
            dialog.accept()
        else:
            dialog.dismiss()

    def wait(self) -> DialogResult:
        """Block until the dialog fired; raise ``DialogTimeout`` otherwise."""
        try:
            wait_for_condition(
                action=lambda: self._result,
                condition=lambda result: result is not None,
                timeout_ms=self.timeout_ms,
                poll_interval_ms=self.poll_interval_ms,
                sleep=self.page.wait_for_timeout,
                error_message="No dialog appeared",
            )
        except TimeoutError as exc:
            raise DialogTimeout(
                f"No dialog appeared within {self.timeout_ms}ms", self.timeout_ms
            ) from exc
        return self._result


def capture_dialog(
    page: Page,
    trigger: Callable[[], None],
    timeout_ms: float = 5_000,
    poll_interval_ms: float = 100,
) -> DialogResult:
    """Arm an observer, run ``trigger`` and return the dialog it raised."""
    with DialogObserver(page, timeout_ms, poll_interval_ms) as observer:
        trigger()
        return observer.wait()
