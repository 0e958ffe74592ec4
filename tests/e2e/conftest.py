"""
Fixtures for the live-store scenarios.

Browsers come from pytest-playwright (``page``, ``--browser``, ``--headed``).
Every scenario gets its own browser context, so cart and session state
never leak between scenarios; the remote user table is shared, which is
why generated usernames are unique per run.
"""

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page

from demoblaze_pom.config import Config, load_config
from demoblaze_pom.errors import PageError
from demoblaze_pom.log import get_logger
from demoblaze_pom.pages import AuthPage, Pages
from demoblaze_pom.waits import Deadline

logger = get_logger(__name__)


@pytest.fixture(scope="session")
def config() -> Config:
    return load_config()


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args):
    """Desktop viewport so the navbar is never collapsed."""
    return {
        **browser_context_args,
        "viewport": {"width": 1280, "height": 720},
        "ignore_https_errors": True,
    }


@pytest.fixture
def deadline(config) -> Deadline:
    return Deadline(config.scenario_timeout_s)


@pytest.fixture
def pages(request, page: Page, config, deadline):
    """Page components sharing the scenario budget.

    Teardown makes a best-effort logout so a failing scenario leaves no
    session behind.
    """
    page.set_default_timeout(config.timeouts.standard)
    page.set_default_navigation_timeout(config.timeouts.navigation)
    yield Pages(page, config, deadline)

    # Outside the scenario budget, which may already be spent
    auth = AuthPage(page, config)
    try:
        if auth.is_logged_in():
            auth.logout()
    except (PageError, PlaywrightError) as exc:
        logger.warning("teardown_logout_failed", test=request.node.nodeid, error=str(exc))


@pytest.fixture
def home(pages):
    """Pages with the store already open on the home screen."""
    pages.home.load()
    return pages

