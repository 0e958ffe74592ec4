"""Contact modal ("New message")."""

from playwright.sync_api import expect

from ..dialogs import capture_dialog
from ..models import ContactMessage, ValidationResult
from .base import BasePage

CONTACT_MODAL = "#exampleModal"
MODAL_TITLE = "#exampleModal .modal-title"
EMAIL_INPUT = "#recipient-email"
NAME_INPUT = "#recipient-name"
MESSAGE_INPUT = "#message-text"
SEND_BUTTON = 'button[onclick="send()"]'
CLOSE_BUTTON = '#exampleModal .close, #exampleModal button[data-dismiss="modal"]'


def validate_message(message: ContactMessage) -> ValidationResult:
    """Check presence and email format, reporting every violated rule."""
    errors = []
    if not message.email:
        errors.append("Email is required")
    if not message.name:
        errors.append("Name is required")
    if not message.message:
        errors.append("Message is required")
    if message.email and "@" not in message.email:
        errors.append("Invalid email format")
    return ValidationResult(valid=not errors, errors=errors)


class ContactPage(BasePage):
    """Stateless wrapper around the contact modal. The modal must be open."""

    def wait_for_modal(self) -> None:
        self._visible(CONTACT_MODAL)
        self._visible(EMAIL_INPUT)

    def fill(self, message: ContactMessage) -> None:
        self.wait_for_modal()
        self._fill(EMAIL_INPUT, message.email)
        self._fill(NAME_INPUT, message.name)
        self._fill(MESSAGE_INPUT, message.message)

    def send(self, message: ContactMessage) -> str:
        """Fill, submit and return the alert text for the caller to judge."""
        self.fill(message)
        return self._submit()

    def send_empty(self) -> str:
        self.wait_for_modal()
        self.clear()
        return self._submit()

    def send_partial(self, email: str | None = None, name: str | None = None, message: str | None = None) -> str:
        self.wait_for_modal()
        self.clear()
        for selector, value in ((EMAIL_INPUT, email), (NAME_INPUT, name), (MESSAGE_INPUT, message)):
            if value:
                self._fill(selector, value)
        return self._submit()

    def _submit(self) -> str:
        result = capture_dialog(
            self.page,
            lambda: self._click(SEND_BUTTON),
            timeout_ms=self._timeout(self.timeouts.dialog),
            poll_interval_ms=self.timeouts.dialog_poll_interval,
        )
        self.logger.info("contact_sent", dialog=result.message)
        return result.message

    def clear(self) -> None:
        for selector in (EMAIL_INPUT, NAME_INPUT, MESSAGE_INPUT):
            self._clear(selector)

    def form_data(self) -> ContactMessage:
        return ContactMessage(
            email=self._locator(EMAIL_INPUT).input_value(),
            name=self._locator(NAME_INPUT).input_value(),
            message=self._locator(MESSAGE_INPUT).input_value(),
        )

    def is_form_empty(self) -> bool:
        data = self.form_data()
        return not (data.email or data.name or data.message)

    def validate(self) -> ValidationResult:
        return validate_message(self.form_data())

    def modal_title(self) -> str:
        return self._text(MODAL_TITLE)

    def verify_form_fields(self) -> None:
        timeout = self._timeout()
        for selector in (EMAIL_INPUT, NAME_INPUT, MESSAGE_INPUT, SEND_BUTTON):
            expect(self._locator(selector)).to_be_visible(timeout=timeout)

    def close(self) -> None:
        self._click(CLOSE_BUTTON)
        self._hidden(CONTACT_MODAL)
