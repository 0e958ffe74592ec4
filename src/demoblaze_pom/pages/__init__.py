"""
Page Objects

One class per screen or modal of the store, all built on the same driver
handle.

Usage:
    from demoblaze_pom.pages import Pages

    pages = Pages(page)
    pages.home.load()
    pages.home.open_product("Samsung galaxy s6")
    pages.product.add_to_cart()
"""

from functools import cached_property

from playwright.sync_api import Page

from ..config import Config, load_config
from ..waits import Deadline
from .auth import AuthPage
from .base import BasePage
from .cart import CartPage
from .contact import ContactPage
from .home import HomePage
from .product import ProductPage


class Pages:
    """Lazily builds every page component for one browser page."""

    def __init__(self, page: Page, config: Config | None = None, deadline: Deadline | None = None):
        self.page = page
        self.config = config or load_config()
        self.deadline = deadline

    def _build(self, cls):
        return cls(self.page, self.config, self.deadline)

    @cached_property
    def home(self) -> HomePage:
        return self._build(HomePage)

    @cached_property
    def product(self) -> ProductPage:
        return self._build(ProductPage)

    @cached_property
    def cart(self) -> CartPage:
        return self._build(CartPage)

    @cached_property
    def auth(self) -> AuthPage:
        return self._build(AuthPage)

    @cached_property
    def contact(self) -> ContactPage:
        return self._build(ContactPage)


__all__ = ["AuthPage", "BasePage", "CartPage", "ContactPage", "HomePage", "Pages", "ProductPage"]
