"""Cart listing, totals and the Place Order checkout flow."""

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from ..errors import CartUpdateTimeout, NavigationTimeout, NotFound, PurchaseTimeout, RemovalLimitExceeded
from ..models import CartLine, CheckoutState, OrderDetails, parse_price
from ..waits import wait_for_condition, wait_until_stable
from .base import BasePage

# Cart table
CART_BODY = "#tbodyid"
ROWS = "#tbodyid tr"
ROW_NAMES = "#tbodyid tr td:nth-child(2)"
ROW_PRICES = "#tbodyid tr td:nth-child(3)"
ROW_DELETE_LINKS = "#tbodyid tr td:nth-child(4) a"
TOTAL = "#totalp"
PLACE_ORDER_BUTTON = 'button[data-target="#orderModal"]'

# Order modal
ORDER_MODAL = "#orderModal"
NAME_INPUT = "#name"
COUNTRY_INPUT = "#country"
CITY_INPUT = "#city"
CARD_INPUT = "#card"
MONTH_INPUT = "#month"
YEAR_INPUT = "#year"
PURCHASE_BUTTON = 'button[onclick="purchaseOrder()"]'
ORDER_CLOSE_BUTTON = '#orderModal button[data-dismiss="modal"]'

# Confirmation panel (in-page, not a native dialog)
SUCCESS_PANEL = ".sweet-alert"
SUCCESS_TEXT = ".sweet-alert h2"
SUCCESS_OK = ".sweet-alert .confirm"

PRICE_TOLERANCE = 0.01


class CartPage(BasePage):
    """Cart screen.

    ``state`` follows Viewing -> OrderModalOpen -> Submitted -> Confirmed and
    is kept for diagnostics only; the remote page stays the source of truth.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.state = CheckoutState.VIEWING

    def load(self) -> None:
        """Confirm the cart URL and wait for the table to stop changing.

        The table is filled by an XHR after the page renders, so the row
        count is polled until it is unchanged across consecutive polls.
        """
        self._wait_url(r"cart\.html")
        self._visible(PLACE_ORDER_BUTTON)
        try:
            count = wait_until_stable(
                self.item_count,
                timeout_ms=self._timeout(),
                poll_interval_ms=self.config.cart.poll_interval_ms,
                stable_polls=self.config.cart.stable_polls,
                sleep=self._sleep,
            )
        except TimeoutError as exc:
            self._raise_if_out_of_time(exc)
            raise NavigationTimeout("Cart rows kept changing", self._timeout()) from exc
        self.state = CheckoutState.VIEWING
        self.logger.info("cart_loaded", items=count)

    verify_loaded = load

    # Reads

    def item_count(self) -> int:
        rows = self._locator(ROWS)
        count = rows.count()
        if count == 0:
            return 0
        # The remote app renders a single empty row for an empty cart
        if count == 1 and not (rows.first.text_content() or "").strip():
            return 0
        return count

    def items(self) -> list[CartLine]:
        names = self._locator(ROW_NAMES)
        prices = self._locator(ROW_PRICES)
        return [
            CartLine(
                name=(names.nth(i).text_content() or "").strip(),
                price=(prices.nth(i).text_content() or "").strip(),
            )
            for i in range(self.item_count())
        ]

    def is_empty(self) -> bool:
        return self.item_count() == 0

    def verify_item_in_cart(self, name: str) -> bool:
        return any(name in line.name for line in self.items())

    def total_text(self) -> str:
        total = self._locator(TOTAL)
        if total.count() == 0:
            return ""
        return (total.first.text_content() or "").strip()

    def calculate_expected_total(self) -> float:
        return sum(line.amount for line in self.items())

    def verify_total_price(self) -> bool:
        expected = self.calculate_expected_total()
        displayed = parse_price(self.total_text())
        return abs(expected - displayed) < PRICE_TOLERANCE

    # Mutations

    def remove_by_name(self, name: str) -> None:
        """Delete the first row whose name equals ``name``.

        Rows are addressed by position; duplicate names are allowed.
        """
        names = [line.name for line in self.items()]
        try:
            index = names.index(name)
        except ValueError:
            raise NotFound(f"Item '{name}' not found in cart {names}") from None
        before = len(names)
        self.logger.info("remove_item", item=name, row=index)
        self._click(ROW_DELETE_LINKS, index)
        self._wait_for_count(before - 1)

    remove_item_by_name = remove_by_name

    def remove_all(self, max_iterations: int | None = None) -> None:
        """Delete the first row until the cart is empty.

        Raises:
            RemovalLimitExceeded: (a ``PreconditionFailed``) if rows remain
                after ``max_iterations``
        """
        limit = self.config.cart.remove_all_max_iterations if max_iterations is None else max_iterations
        for _ in range(limit):
            count = self.item_count()
            if count == 0:
                return
            self._click(ROW_DELETE_LINKS)
            self._wait_for_count(count - 1)

        remaining = self.item_count()
        if remaining:
            raise RemovalLimitExceeded(f"{remaining} items left after {limit} removals")

    remove_all_items = remove_all

    def _wait_for_count(self, expected: int) -> None:
        timeout = self._timeout()
        try:
            wait_for_condition(
                action=self.item_count,
                condition=lambda count: count == expected,
                timeout_ms=timeout,
                poll_interval_ms=self.timeouts.dialog_poll_interval,
                sleep=self._sleep,
                error_message=f"Cart did not reach {expected} items",
            )
        except TimeoutError as exc:
            self._raise_if_out_of_time(exc)
            raise CartUpdateTimeout(f"Cart did not reach {expected} items within {timeout}ms", timeout) from exc

    # Checkout

    def place_order(self) -> None:
        self._click(PLACE_ORDER_BUTTON)
        self._visible(ORDER_MODAL)
        self.state = CheckoutState.ORDER_MODAL_OPEN

    def fill_order_form(self, details: OrderDetails) -> None:
        self._visible(NAME_INPUT)
        self._fill(NAME_INPUT, details.name)
        self._fill(COUNTRY_INPUT, details.country)
        self._fill(CITY_INPUT, details.city)
        self._fill(CARD_INPUT, details.card_number)
        self._fill(MONTH_INPUT, details.expiry_month)
        self._fill(YEAR_INPUT, details.expiry_year)

    def complete_purchase(self) -> None:
        self._click(PURCHASE_BUTTON)
        timeout = self._timeout(self.timeouts.purchase)
        try:
            self._locator(SUCCESS_PANEL).first.wait_for(state="visible", timeout=timeout)
        except PlaywrightTimeoutError as exc:
            self._raise_if_out_of_time(exc)
            raise PurchaseTimeout(f"Purchase confirmation not shown within {timeout}ms", timeout) from exc
        self.state = CheckoutState.SUBMITTED

    def confirm_purchase(self) -> str:
        """Read the confirmation text, dismiss the panel and return the text."""
        self._visible(SUCCESS_OK, self.timeouts.purchase)
        text = self._text(SUCCESS_TEXT)
        self.logger.info("purchase_confirmed", message=text)
        self._click(SUCCESS_OK)
        self.state = CheckoutState.CONFIRMED
        return text

    def close_order_modal(self) -> None:
        self._click(ORDER_CLOSE_BUTTON)
        self._hidden(ORDER_MODAL)
        self.state = CheckoutState.VIEWING
