"""Product detail view."""

from playwright.sync_api import expect

from ..data import PRODUCT_ADDED
from ..dialogs import capture_dialog
from ..errors import UnexpectedDialog
from ..models import DialogResult, ProductDetails
from .base import BasePage

TITLE = ".name"
PRICE = ".price-container"
DESCRIPTION = "#more-information p"
IMAGE = ".item.active img"
ADD_TO_CART_BUTTON = ".btn.btn-success.btn-lg"
HOME_LINK = '.nav-link[href="index.html"]'
CART_LINK = "#cartur"

TAX_SUFFIX = "*includes tax"


class ProductPage(BasePage):
    """Single product view reached from the catalogue."""

    def title(self) -> str:
        return self._text(TITLE)

    def price(self) -> str:
        return self._text(PRICE).replace(TAX_SUFFIX, "").strip()

    def description(self) -> str:
        return self._text(DESCRIPTION)

    def details(self) -> ProductDetails:
        return ProductDetails(title=self.title(), price=self.price(), description=self.description())

    def is_image_visible(self) -> bool:
        return self._probe(IMAGE)

    def verify_loaded(self, expected_name: str | None = None) -> None:
        timeout = self._timeout()
        expect(self._locator(TITLE)).to_be_visible(timeout=timeout)
        expect(self._locator(PRICE)).to_be_visible(timeout=timeout)
        expect(self._locator(ADD_TO_CART_BUTTON)).to_be_visible(timeout=timeout)
        if expected_name:
            expect(self._locator(TITLE)).to_contain_text(expected_name, timeout=timeout)

    def add_to_cart(self) -> DialogResult:
        """Add the product and accept the confirmation alert.

        Raises:
            UnexpectedDialog: if the alert is not the "Product added" one
        """
        self._visible(ADD_TO_CART_BUTTON)
        result = capture_dialog(
            self.page,
            lambda: self._click(ADD_TO_CART_BUTTON),
            timeout_ms=self._timeout(self.timeouts.dialog),
            poll_interval_ms=self.timeouts.dialog_poll_interval,
        )
        if PRODUCT_ADDED not in result.message:
            raise UnexpectedDialog(PRODUCT_ADDED, result.message)
        self.logger.info("added_to_cart", dialog=result.message)
        return result

    def go_home(self) -> None:
        self._click(HOME_LINK)
        self._wait_url(r"index\.html")

    go_back_to_home = go_home

    def go_to_cart(self) -> None:
        self._click(CART_LINK)
        self._wait_url(r"cart\.html")
