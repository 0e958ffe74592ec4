"""Tests for HomePage against the in-memory page."""

import pytest
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from demoblaze_pom.errors import (
    InvalidArgument,
    NavigationError,
    NavigationTimeout,
    NotFound,
    NotVisible,
    ScenarioTimeout,
)
from demoblaze_pom.models import Category
from demoblaze_pom.pages import Pages, home
from demoblaze_pom.waits import Deadline
from tests.unit.fakes import FakeElement, FakeLocator

PHONES = ["Samsung galaxy s6", "Nokia lumia 1520", "Nexus 6"]
LAPTOPS = ["Sony vaio i5", "MacBook air"]


class ExpiringLocator(FakeLocator):
    """Locator whose click times out only once the scenario clock is past its budget."""

    def __init__(self, page, selector, now, index=None):
        super().__init__(page, selector, index)
        self.now = now

    def nth(self, index):
        return ExpiringLocator(self.page, self.selector, self.now, index)

    def click(self, timeout=None):
        self.now[0] += 1.0
        raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for '{self.selector}'")


@pytest.fixture
def catalogue(fake_page):
    """Home page showing the full grid, with working category links."""

    def show(titles):
        fake_page.set_texts(home.PRODUCT_TITLES, titles)
        fake_page.set_texts(home.PRODUCT_CARDS, titles)
        fake_page.set_texts(home.PRODUCT_PRICES, ["$360"] * len(titles))

    fake_page.show(home.PRODUCT_GRID)
    show(PHONES + LAPTOPS)
    fake_page.show(home.CATEGORY_LINKS[Category.PHONES], "Phones")
    fake_page.show(home.CATEGORY_LINKS[Category.LAPTOPS], "Laptops")
    fake_page.on_click(home.CATEGORY_LINKS[Category.PHONES], lambda i: show(PHONES))
    fake_page.on_click(home.CATEGORY_LINKS[Category.LAPTOPS], lambda i: show(LAPTOPS))
    return fake_page


class TestLoad:
    def test_opens_base_url_and_waits_for_grid(self, pages, fake_page):
        fake_page.navigations["https://store.test/"] = lambda: fake_page.show(home.PRODUCT_GRID)
        pages.home.load()
        assert fake_page.goto_calls == ["https://store.test/"]
        assert (home.PRODUCT_GRID, "visible", 50) in fake_page.waits

    def test_missing_grid_is_navigation_timeout(self, pages):
        with pytest.raises(NavigationTimeout) as excinfo:
            pages.home.load()
        assert excinfo.value.timeout_ms == 50

    def test_wrong_title_is_navigation_error(self, pages, fake_page):
        fake_page._title = "Something else"
        fake_page.show(home.PRODUCT_GRID)
        with pytest.raises(NavigationError, match="Unexpected page title"):
            pages.home.load()


class TestCatalogue:
    def test_counts_and_titles(self, pages, catalogue):
        assert pages.home.product_count() == 5
        assert pages.home.product_titles()[0] == "Samsung galaxy s6"
        assert pages.home.product_prices() == ["$360"] * 5

    def test_select_category_waits_for_new_grid(self, pages, catalogue):
        pages.home.select_category("Laptops")
        assert pages.home.product_titles() == LAPTOPS
        assert home.CATEGORY_LINKS[Category.LAPTOPS] in catalogue.clicks

    def test_reselecting_same_category_does_not_fail(self, pages, catalogue):
        pages.home.select_category(Category.PHONES)
        pages.home.select_category(Category.PHONES)
        assert pages.home.product_titles() == PHONES

    def test_unknown_category_is_rejected_before_clicking(self, pages, catalogue):
        with pytest.raises(InvalidArgument):
            pages.home.select_category("Tablets")
        assert catalogue.clicks == []

    def test_open_product_follows_link(self, pages, catalogue):
        link = home.product_link("Nexus 6")
        catalogue.show(link, "Nexus 6")
        catalogue.on_click(link, lambda i: setattr(catalogue, "url", "https://store.test/prod.html?idp_=3"))
        pages.home.open_product("Nexus 6")
        assert catalogue.clicks == [link]

    def test_open_missing_product_is_not_found(self, pages, catalogue):
        with pytest.raises(NotFound, match="Unicorn phone"):
            pages.home.open_product("Unicorn phone")

    def test_product_link_selects_exact_text(self):
        assert home.product_link("MacBook air") == '.card-title a:text-is("MacBook air")'


class TestNavigation:
    def test_open_login_waits_for_modal(self, pages, fake_page):
        fake_page.show(home.LOGIN_LINK, "Log in")
        fake_page.on_click(home.LOGIN_LINK, lambda i: fake_page.show(home.LOGIN_MODAL))
        pages.home.open_login()
        assert fake_page.clicks == [home.LOGIN_LINK]

    def test_modal_that_never_opens_is_not_visible(self, pages, fake_page):
        fake_page.show(home.CONTACT_LINK, "Contact")
        with pytest.raises(NotVisible) as excinfo:
            pages.home.open_contact()
        assert excinfo.value.selector == home.CONTACT_MODAL

    def test_open_cart_waits_for_cart_url(self, pages, fake_page):
        fake_page.show(home.CART_LINK, "Cart")
        fake_page.on_click(home.CART_LINK, lambda i: setattr(fake_page, "url", "https://store.test/cart.html"))
        pages.home.open_cart()
        assert fake_page.action_timeouts == [50]

    def test_missing_link_is_not_visible(self, pages, fake_page):
        with pytest.raises(NotVisible) as excinfo:
            pages.home.open_cart()
        assert excinfo.value.selector == home.CART_LINK
        assert fake_page.clicks == []

    def test_about_modal_opens_and_closes(self, pages, fake_page):
        fake_page.show(home.ABOUT_LINK, "About us")
        fake_page.show(home.ABOUT_CLOSE, "x")
        fake_page.on_click(home.ABOUT_LINK, lambda i: fake_page.show(home.ABOUT_MODAL))
        fake_page.on_click(home.ABOUT_CLOSE, lambda i: fake_page.hide(home.ABOUT_MODAL))
        pages.home.open_about()
        pages.home.close_about()
        assert not fake_page.locator(home.ABOUT_MODAL).is_visible()


class TestScenarioBudget:
    def test_clicks_are_clamped_to_remaining_budget(self, fake_page, fast_config):
        now = [0.0]
        pages = Pages(fake_page, fast_config, Deadline(0.02, clock=lambda: now[0]))
        fake_page.show(home.LOGIN_LINK, "Log in")
        fake_page.on_click(home.LOGIN_LINK, lambda i: fake_page.show(home.LOGIN_MODAL))
        pages.home.open_login()
        assert fake_page.action_timeouts == [pytest.approx(20)]

    def test_spent_budget_stops_before_clicking(self, fake_page, fast_config):
        now = [0.0]
        pages = Pages(fake_page, fast_config, Deadline(0.02, clock=lambda: now[0]))
        fake_page.show(home.CART_LINK, "Cart")
        now[0] = 1.0
        with pytest.raises(ScenarioTimeout):
            pages.home.open_cart()
        assert fake_page.clicks == []

    def test_missing_link_after_budget_ran_out_is_scenario_timeout(self, fake_page, fast_config):
        now = [0.0]
        pages = Pages(fake_page, fast_config, Deadline(0.02, clock=lambda: now[0]))
        # The click itself uses up the budget before failing
        fake_page.locator = lambda selector: ExpiringLocator(fake_page, selector, now)
        with pytest.raises(ScenarioTimeout):
            pages.home.open_cart()


class TestCarousel:
    @pytest.fixture
    def carousel(self, fake_page):
        slides = ["first.jpg", "second.jpg", "third.jpg"]
        position = [0]

        def move(step):
            position[0] = (position[0] + step) % len(slides)
            fake_page.set(home.CAROUSEL_ACTIVE_IMAGE, FakeElement(attrs={"src": slides[position[0]]}))

        move(0)
        fake_page.show(home.CAROUSEL_NEXT)
        fake_page.show(home.CAROUSEL_PREV)
        fake_page.on_click(home.CAROUSEL_NEXT, lambda i: move(1))
        fake_page.on_click(home.CAROUSEL_PREV, lambda i: move(-1))
        return fake_page

    def test_next_and_previous_change_slide(self, pages, carousel):
        assert pages.home.navigate_carousel("next") is True
        assert carousel.locator(home.CAROUSEL_ACTIVE_IMAGE).get_attribute("src") == "second.jpg"
        assert pages.home.navigate_carousel("previous") is True
        assert carousel.locator(home.CAROUSEL_ACTIVE_IMAGE).get_attribute("src") == "first.jpg"

    def test_static_carousel_reports_false(self, pages, carousel):
        carousel.on_click(home.CAROUSEL_NEXT, lambda i: None)
        assert pages.home.navigate_carousel("next") is False


class TestSession:
    def test_is_logged_in_probes_logout_link(self, pages, fake_page):
        assert pages.home.is_logged_in() is False
        fake_page.show(home.LOGOUT_LINK, "Log out")
        assert pages.home.is_logged_in() is True
