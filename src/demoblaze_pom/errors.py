"""Error taxonomy raised by the page components."""


class PageError(Exception):
    """Base class for every failure raised by a page component."""


class WaitTimeout(PageError):
    """A bounded wait expired.

    Mixed into every timeout-flavoured error so callers can catch all of
    them with a single ``except WaitTimeout``.
    """

    def __init__(self, message: str, timeout_ms: float | None = None):
        super().__init__(message)
        self.timeout_ms = timeout_ms


class NavigationError(PageError):
    """The browser did not reach the expected page."""


class NavigationTimeout(WaitTimeout, NavigationError):
    """A URL pattern or page landmark was not reached in time."""


class NotVisible(WaitTimeout):
    """An element never became visible."""

    def __init__(self, selector: str, timeout_ms: float | None = None):
        super().__init__(f"Element '{selector}' not visible after {timeout_ms}ms", timeout_ms)
        self.selector = selector


class NotFound(PageError):
    """A named element or cart row is absent."""


class InvalidArgument(PageError, ValueError):
    """A caller passed a value outside a closed set (category, direction)."""


class UnexpectedDialog(PageError):
    """A native dialog appeared with text other than the expected one."""

    def __init__(self, expected: str, actual: str):
        super().__init__(f"Expected dialog containing '{expected}', got '{actual}'")
        self.expected = expected
        self.actual = actual


class PreconditionFailed(PageError):
    """An operation was called from a state that does not allow it."""


class PurchaseTimeout(WaitTimeout):
    """The purchase confirmation panel never appeared."""


class DialogTimeout(WaitTimeout):
    """No native dialog fired within the observer's timeout."""


class CartUpdateTimeout(WaitTimeout):
    """The cart table did not reach the expected row count."""


class RemovalLimitExceeded(PreconditionFailed):
    """Emptying the cart hit its iteration guard without reaching zero rows."""


class ScenarioTimeout(WaitTimeout):
    """The scenario-wide time budget ran out."""
