"""Home page: catalogue grid, category sidebar, carousel and top navigation."""

import re

from playwright.sync_api import expect
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from ..errors import NavigationError, NavigationTimeout, NotFound
from ..models import CarouselDirection, Category
from ..waits import wait_for_condition, wait_until_stable
from .base import BasePage

# Navigation
HOME_LINK = 'a.nav-link[href="index.html"]'
CONTACT_LINK = 'a[data-target="#exampleModal"]'
ABOUT_LINK = 'a[data-target="#videoModal"]'
CART_LINK = "a#cartur"
LOGIN_LINK = "a#login2"
SIGNUP_LINK = "a#signin2"
LOGOUT_LINK = "a#logout2"

# Modals opened from the navbar
LOGIN_MODAL = "#logInModal"
SIGNUP_MODAL = "#signInModal"
CONTACT_MODAL = "#exampleModal"
ABOUT_MODAL = "#videoModal"
ABOUT_CLOSE = "#videoModal .close"

# Catalogue
PRODUCT_GRID = "#tbodyid"
PRODUCT_CARDS = ".card"
PRODUCT_TITLES = ".card-title a"
PRODUCT_PRICES = ".card-text"
CATEGORY_LINKS = {
    Category.PHONES: 'a[onclick*="phone"]',
    Category.LAPTOPS: 'a[onclick*="notebook"]',
    Category.MONITORS: 'a[onclick*="monitor"]',
}

# Carousel
CAROUSEL_NEXT = ".carousel-control-next"
CAROUSEL_PREV = ".carousel-control-prev"
CAROUSEL_ACTIVE_IMAGE = ".carousel-item.active img"

TITLE_PATTERN = re.compile(r"STORE")


def product_link(name: str) -> str:
    """Selector for a product link with exactly this visible text."""
    escaped = name.replace('"', '\\"')
    return f'{PRODUCT_TITLES}:text-is("{escaped}")'


class HomePage(BasePage):
    """Entry point of the store."""

    def load(self) -> None:
        """Open the store root and block until the product grid is shown."""
        url = self.config.base_url
        timeout = self._timeout(self.timeouts.navigation)
        self.logger.info("navigate", url=url)
        try:
            self.page.goto(url, wait_until="domcontentloaded", timeout=timeout)
            self._locator(PRODUCT_GRID).wait_for(state="visible", timeout=timeout)
        except PlaywrightTimeoutError as exc:
            self._raise_if_out_of_time(exc)
            raise NavigationTimeout(f"Product grid not shown within {timeout}ms of opening {url}", timeout) from exc
        except PlaywrightError as exc:
            raise NavigationError(f"Could not open {url}: {exc}") from exc

        title = self.page.title()
        if not TITLE_PATTERN.search(title):
            raise NavigationError(f"Unexpected page title {title!r} at {self.page.url}")
        self.logger.info("home_loaded", url=self.page.url)

    open = load

    def verify_loaded(self) -> None:
        for selector in (HOME_LINK, LOGIN_LINK, SIGNUP_LINK, CART_LINK):
            expect(self._locator(selector)).to_be_visible(timeout=self._timeout())

    # Catalogue

    def select_category(self, category: Category | str) -> None:
        """Filter the grid and block until it has re-populated."""
        category = Category.parse(category)
        self.logger.info("select_category", category=category.value)
        before = self.product_titles()
        self._click(CATEGORY_LINKS[category])
        self._visible(PRODUCT_CARDS)
        try:
            # Re-selecting the current category leaves the grid unchanged
            wait_for_condition(
                action=self.product_titles,
                condition=lambda titles: titles != before,
                timeout_ms=self._timeout(self.timeouts.probe),
                poll_interval_ms=self.timeouts.dialog_poll_interval,
                sleep=self._sleep,
            )
        except TimeoutError:
            self.logger.debug("grid_unchanged", category=category.value)
        try:
            wait_until_stable(
                self.product_titles,
                timeout_ms=self._timeout(),
                poll_interval_ms=self.config.cart.poll_interval_ms,
                stable_polls=self.config.cart.stable_polls,
                sleep=self._sleep,
            )
        except TimeoutError as exc:
            self._raise_if_out_of_time(exc)
            raise NavigationTimeout(f"Grid for {category.value} kept changing", self._timeout()) from exc

    filter_by_category = select_category

    def product_count(self) -> int:
        return self._locator(PRODUCT_CARDS).count()

    def product_titles(self) -> list[str]:
        return [title.strip() for title in self._locator(PRODUCT_TITLES).all_text_contents()]

    def product_prices(self) -> list[str]:
        return [price.strip() for price in self._locator(PRODUCT_PRICES).all_text_contents()]

    def open_product(self, name: str) -> None:
        if not self._probe(product_link(name), timeout=self.timeouts.standard):
            raise NotFound(f"Product '{name}' is not listed on {self.page.url}")
        self.logger.info("open_product", product=name)
        self._click(product_link(name))
        self._wait_url(r"prod\.html")

    # Navigation

    def open_cart(self) -> None:
        self._click(CART_LINK)
        self._wait_url(r"cart\.html")

    def open_login(self) -> None:
        self._click(LOGIN_LINK)
        self._visible(LOGIN_MODAL)

    def open_signup(self) -> None:
        self._click(SIGNUP_LINK)
        self._visible(SIGNUP_MODAL)

    def open_contact(self) -> None:
        self._click(CONTACT_LINK)
        self._visible(CONTACT_MODAL)

    def open_about(self) -> None:
        self._click(ABOUT_LINK)
        self._visible(ABOUT_MODAL)

    def close_about(self) -> None:
        self._click(ABOUT_CLOSE)
        self._hidden(ABOUT_MODAL)

    def navigate_carousel(self, direction: CarouselDirection | str) -> bool:
        """Move the carousel one slide.

        Returns True once the active slide changed, False if it stayed put
        within the standard timeout (a static carousel is not an error).
        """
        direction = CarouselDirection.parse(direction)
        before = self._active_slide()
        button = CAROUSEL_NEXT if direction is CarouselDirection.NEXT else CAROUSEL_PREV
        self._click(button)
        try:
            wait_for_condition(
                action=self._active_slide,
                condition=lambda src: src != before,
                timeout_ms=self._timeout(),
                poll_interval_ms=self.timeouts.dialog_poll_interval,
                sleep=self._sleep,
            )
        except TimeoutError:
            self.logger.debug("carousel_unchanged", direction=direction.value)
            return False
        return True

    def _active_slide(self) -> str | None:
        images = self._locator(CAROUSEL_ACTIVE_IMAGE)
        if images.count() == 0:
            return None
        return images.first.get_attribute("src")

    # Session

    def is_logged_in(self) -> bool:
        return self._probe(LOGOUT_LINK)
