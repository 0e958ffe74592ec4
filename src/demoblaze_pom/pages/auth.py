"""Sign-up and log-in modals plus the session indicators in the navbar."""

from playwright.sync_api import expect

from ..data import SIGNUP_SUCCESS
from ..dialogs import capture_dialog
from ..errors import PreconditionFailed
from ..models import DialogResult, RegistrationResult
from .base import BasePage

# Log in modal
LOGIN_MODAL = "#logInModal"
LOGIN_USERNAME = "#loginusername"
LOGIN_PASSWORD = "#loginpassword"
LOGIN_BUTTON = 'button[onclick="logIn()"]'
LOGIN_CLOSE = '#logInModal .close, #logInModal button[data-dismiss="modal"]'

# Sign up modal
SIGNUP_MODAL = "#signInModal"
SIGNUP_USERNAME = "#sign-username"
SIGNUP_PASSWORD = "#sign-password"
SIGNUP_BUTTON = 'button[onclick="register()"]'
SIGNUP_CLOSE = '#signInModal .close, #signInModal button[data-dismiss="modal"]'

# Navbar
WELCOME = "#nameofuser"
LOGOUT_LINK = "#logout2"
LOGIN_LINK = "#login2"

WELCOME_PREFIX = "Welcome "


class AuthPage(BasePage):
    """Registration, login and logout.

    The modals are opened from the home page; every method here expects
    the relevant modal to be open already and raises ``NotVisible``
    otherwise.
    """

    def wait_for_login_modal(self) -> None:
        self._visible(LOGIN_MODAL)
        self._visible(LOGIN_USERNAME)

    def wait_for_signup_modal(self) -> None:
        self._visible(SIGNUP_MODAL)
        self._visible(SIGNUP_USERNAME)

    def register(self, username: str, password: str) -> RegistrationResult:
        """Submit the sign-up form and classify the resulting alert.

        A rejection (e.g. "This user already exist.") is returned with
        ``success=False`` rather than raised.
        """
        result = self._submit_with_dialog(
            SIGNUP_USERNAME, SIGNUP_PASSWORD, SIGNUP_BUTTON, username, password, self.wait_for_signup_modal
        )
        success = SIGNUP_SUCCESS in result.message
        self.logger.info("register", username=username, success=success, dialog=result.message)
        if success:
            self._hidden(SIGNUP_MODAL)
        return RegistrationResult(success=success, message=result.message)

    sign_up = register

    def login(self, username: str, password: str) -> bool:
        """Submit the log-in form.

        Returns whether the logged-in landmark appeared. A missing landmark
        is reported, not raised; callers assert on it.
        """
        self.wait_for_login_modal()
        self._fill(LOGIN_USERNAME, username)
        self._fill(LOGIN_PASSWORD, password)
        self._click(LOGIN_BUTTON)
        logged_in = self._probe(WELCOME, timeout=self.timeouts.standard)
        self.logger.info("login", username=username, logged_in=logged_in)
        return logged_in

    def attempt_login(self, username: str, password: str) -> DialogResult:
        """Log in expecting a rejection alert and return it."""
        return self._submit_with_dialog(
            LOGIN_USERNAME, LOGIN_PASSWORD, LOGIN_BUTTON, username, password, self.wait_for_login_modal
        )

    def _submit_with_dialog(self, user_field, password_field, button, username, password, wait_for_modal) -> DialogResult:
        wait_for_modal()
        self._fill(user_field, username)
        self._fill(password_field, password)
        return capture_dialog(
            self.page,
            lambda: self._click(button),
            timeout_ms=self._timeout(self.timeouts.dialog),
            poll_interval_ms=self.timeouts.dialog_poll_interval,
        )

    def logout(self) -> None:
        if not self.is_logged_in():
            raise PreconditionFailed("Cannot log out: no user is logged in")
        self._click(LOGOUT_LINK)
        self._visible(LOGIN_LINK)
        self._hidden(WELCOME)
        self.logger.info("logout")

    def is_logged_in(self) -> bool:
        return self._probe(WELCOME)

    def welcome_text(self) -> str:
        if not self.is_logged_in():
            return ""
        return (self._locator(WELCOME).first.text_content() or "").strip()

    def logged_in_username(self) -> str:
        return self.welcome_text().replace(WELCOME_PREFIX, "", 1).strip()

    def close_login_modal(self) -> None:
        self._click(LOGIN_CLOSE)
        self._hidden(LOGIN_MODAL)

    def close_signup_modal(self) -> None:
        self._click(SIGNUP_CLOSE)
        self._hidden(SIGNUP_MODAL)

    def verify_login_success(self, username: str) -> None:
        timeout = self._timeout()
        expect(self._locator(WELCOME)).to_contain_text(username, timeout=timeout)
        expect(self._locator(LOGOUT_LINK)).to_be_visible(timeout=timeout)

    def verify_logged_out(self) -> None:
        timeout = self._timeout()
        expect(self._locator(WELCOME)).to_be_hidden(timeout=timeout)
        expect(self._locator(LOGOUT_LINK)).to_be_hidden(timeout=timeout)
        expect(self._locator(LOGIN_LINK)).to_be_visible(timeout=timeout)
