"""Fixtures for the page object unit tests."""

import pytest

from demoblaze_pom.config import CartConfig, Config, TimeoutConfig
from demoblaze_pom.pages import Pages
from tests.unit.fakes import FakeCart, FakePage


@pytest.fixture
def fast_config(tmp_path) -> Config:
    """Config with millisecond timeouts so failing waits end quickly."""
    return Config(
        base_url="https://store.test/",
        timeouts=TimeoutConfig(
            probe=20,
            standard=50,
            dialog=50,
            purchase=50,
            navigation=50,
            dialog_poll_interval=1,
        ),
        cart=CartConfig(poll_interval_ms=1, stable_polls=2, remove_all_max_iterations=20),
        artifacts={"dir": tmp_path / "failures"},
    )


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage(url="https://store.test/")


@pytest.fixture
def pages(fake_page, fast_config) -> Pages:
    return Pages(fake_page, fast_config)


@pytest.fixture
def cart_page_at(fake_page):
    """Put the fake page on cart.html with the given rows."""

    def _build(rows=None, **kwargs) -> FakeCart:
        fake_page.url = "https://store.test/cart.html"
        fake_page.show('button[data-target="#orderModal"]', "Place Order")
        return FakeCart(fake_page, rows, **kwargs)

    return _build
