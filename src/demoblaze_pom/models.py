"""Core data models for the DemoBlaze page objects."""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

from .errors import InvalidArgument

_PRICE_NUMBER = re.compile(r"\d+(?:\.\d+)?")


def parse_price(text: str) -> float:
    """Parse a displayed price such as ``$360 *includes tax`` into a float.

    Thousands separators are dropped and the first number is taken, so
    stray dots or trailing text never break parsing; no number means 0.
    """
    match = _PRICE_NUMBER.search((text or "").replace(",", ""))
    return float(match.group()) if match else 0.0


class Category(Enum):
    """Product categories offered by the storefront sidebar."""

    PHONES = "Phones"
    LAPTOPS = "Laptops"
    MONITORS = "Monitors"

    @classmethod
    def parse(cls, value: "Category | str") -> "Category":
        """Accept a member or its display name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if value.strip().lower() == member.value.lower():
                    return member
        raise InvalidArgument(f"Invalid category: {value!r}")


class CarouselDirection(Enum):
    """Directions accepted by the home page carousel."""

    NEXT = "next"
    PREVIOUS = "previous"

    @classmethod
    def parse(cls, value: "CarouselDirection | str") -> "CarouselDirection":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if value.strip().lower() == member.value:
                    return member
        raise InvalidArgument(f"Invalid carousel direction: {value!r}")


class CheckoutState(Enum):
    """Progress of the cart checkout flow."""

    VIEWING = "viewing"
    ORDER_MODAL_OPEN = "order_modal_open"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"


class FailureKind(Enum):
    """Classification of a failed scenario, derived from its error."""

    NAVIGATION = "navigation"
    NOT_VISIBLE = "not_visible"
    NOT_FOUND = "not_found"
    DIALOG = "dialog"
    PURCHASE = "purchase"
    PRECONDITION = "precondition"
    TIMEOUT = "timeout"
    ASSERTION_FAILED = "assertion_failed"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class CartLine:
    """One row of the cart table."""

    name: str
    price: str

    @property
    def amount(self) -> float:
        return parse_price(self.price)


@dataclass(frozen=True)
class OrderDetails:
    """Payload for the Place Order form. Never validated locally."""

    name: str
    country: str
    city: str
    card_number: str
    expiry_month: str
    expiry_year: str


@dataclass(frozen=True)
class ContactMessage:
    """Payload for the contact modal."""

    email: str
    name: str
    message: str


@dataclass(frozen=True)
class Credentials:
    """Username/password pair."""

    username: str
    password: str


@dataclass(frozen=True)
class DialogResult:
    """Text of a native browser dialog captured by a one-shot observer."""

    message: str
    type: str = "alert"


@dataclass(frozen=True)
class ProductDetails:
    """Title, price and description read from the product view."""

    title: str
    price: str
    description: str


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of a sign-up attempt.

    Rejections (duplicate username, empty fields) are valid outcomes and are
    returned, not raised.
    """

    success: bool
    message: str


@dataclass
class ValidationResult:
    """Local presence/format check of the contact form."""

    valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass
class ScenarioFailure:
    """A failed scenario, as reported by the runner or the capture plugin."""

    test_id: str
    test_name: str
    test_file: Path
    kind: FailureKind
    error_message: str
    url: str | None = None
    screenshot_path: Path | None = None
    html_path: Path | None = None
    timestamp: datetime = field(default_factory=datetime.now)
