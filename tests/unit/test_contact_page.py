"""Tests for the contact modal and its local validation."""

import pytest

from demoblaze_pom.data import (
    CONTACT_MODAL_TITLE,
    INVALID_CONTACT,
    LONG_MESSAGE_CONTACT,
    MESSAGE_THANKS,
    SPECIAL_CHARACTERS_CONTACT,
    VALID_CONTACT,
)
from demoblaze_pom.models import ContactMessage
from demoblaze_pom.pages import contact
from demoblaze_pom.pages.contact import validate_message


@pytest.fixture
def contact_modal(fake_page):
    fake_page.show(contact.CONTACT_MODAL)
    fake_page.show(contact.MODAL_TITLE, CONTACT_MODAL_TITLE)
    for selector in (contact.EMAIL_INPUT, contact.NAME_INPUT, contact.MESSAGE_INPUT):
        fake_page.show(selector)
    fake_page.show(contact.SEND_BUTTON, "Send message")
    fake_page.on_click(contact.SEND_BUTTON, lambda i: fake_page.raise_dialog(MESSAGE_THANKS))
    return fake_page


class TestValidateMessage:
    def test_valid_message(self):
        result = validate_message(VALID_CONTACT)
        assert result.valid
        assert result.errors == []

    @pytest.mark.parametrize("message", [LONG_MESSAGE_CONTACT, SPECIAL_CHARACTERS_CONTACT])
    def test_long_and_special_character_messages_are_valid(self, message):
        assert validate_message(message).valid

    def test_reports_every_violated_rule(self):
        result = validate_message(ContactMessage(email="", name="", message=""))
        assert not result.valid
        assert result.errors == ["Email is required", "Name is required", "Message is required"]

    def test_bad_email_format_alongside_missing_fields(self):
        result = validate_message(INVALID_CONTACT)
        assert result.errors == ["Name is required", "Message is required", "Invalid email format"]

    def test_format_only_checked_for_non_empty_email(self):
        result = validate_message(ContactMessage(email="", name="QA", message="hi"))
        assert result.errors == ["Email is required"]


class TestContactPage:
    def test_send_returns_alert_text(self, pages, contact_modal):
        assert pages.contact.send(VALID_CONTACT) == MESSAGE_THANKS
        assert contact_modal.fills == [
            (contact.EMAIL_INPUT, VALID_CONTACT.email),
            (contact.NAME_INPUT, VALID_CONTACT.name),
            (contact.MESSAGE_INPUT, VALID_CONTACT.message),
        ]
        assert contact_modal.listener_count("dialog") == 0

    def test_send_empty_clears_then_submits(self, pages, contact_modal):
        pages.contact.fill(VALID_CONTACT)
        assert not pages.contact.is_form_empty()
        assert pages.contact.send_empty() == MESSAGE_THANKS
        assert pages.contact.is_form_empty()

    def test_send_partial_fills_only_given_fields(self, pages, contact_modal):
        pages.contact.send_partial(email="qa@example.com")
        assert contact_modal.fills == [(contact.EMAIL_INPUT, "qa@example.com")]
        assert pages.contact.form_data() == ContactMessage(email="qa@example.com", name="", message="")

    def test_validate_reads_current_form(self, pages, contact_modal):
        pages.contact.fill(INVALID_CONTACT)
        assert pages.contact.validate().errors == validate_message(INVALID_CONTACT).errors

    def test_modal_title(self, pages, contact_modal):
        assert pages.contact.modal_title() == CONTACT_MODAL_TITLE

    def test_close_hides_modal(self, pages, contact_modal):
        contact_modal.show(contact.CLOSE_BUTTON, "Close")
        contact_modal.on_click(contact.CLOSE_BUTTON, lambda i: contact_modal.hide(contact.CONTACT_MODAL))
        pages.contact.close()
        assert not contact_modal.locator(contact.CONTACT_MODAL).is_visible()
