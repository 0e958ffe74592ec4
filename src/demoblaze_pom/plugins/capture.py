"""Pytest plugin that attaches diagnostics to failing scenarios.

For every failed test that used a Playwright ``page`` it writes a
screenshot, the HTML snapshot and a JSON sidecar with the last known URL
into the configured artifacts directory.
"""

import json
from datetime import datetime
from pathlib import Path

from playwright.sync_api import Error as PlaywrightError

from ..config import load_config
from ..log import bind_scenario, clear_scenario, configure_logging, get_logger

logger = get_logger(__name__)

PAGE_FIXTURE_NAMES = ["page", "driver", "browser_page"]


def pytest_configure(config):
    """Configure logging and register the suite's markers."""
    configure_logging(load_config())
    config.addinivalue_line("markers", "e2e: scenario that drives a real browser against the live store")


def pytest_runtest_setup(item):
    """Tag everything logged during the test with its node id."""
    bind_scenario(item.nodeid)


def pytest_runtest_logfinish(nodeid, location):
    clear_scenario()


def pytest_runtest_makereport(item, call):
    """Hook to execute after each test phase."""
    if call.when == "call":
        if call.excinfo is not None:
            logger.info("scenario_failed", test=item.nodeid)
            _capture_failure(item, call)


def _find_page(item):
    for name in PAGE_FIXTURE_NAMES:
        if name in item.funcargs:
            return item.funcargs[name]
    return None


def _capture_failure(item, call) -> Path | None:
    """Capture artifacts from the scenario's page; returns the sidecar path."""
    page = _find_page(item)
    if page is None:
        return None

    settings = load_config().artifacts
    failure_dir = settings.dir
    failure_dir.mkdir(parents=True, exist_ok=True)

    # Generate filename
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    clean_name = item.name.replace("::", "_").replace("/", "_").replace("[", "_").replace("]", "")
    stem = failure_dir / f"{clean_name}_{timestamp}"

    record = {
        "test_id": item.nodeid,
        "test_name": item.name,
        "test_file": str(item.fspath),
        "error_type": call.excinfo.typename,
        "error_message": str(call.excinfo.value)[:1000],
        "timestamp": datetime.now().isoformat(),
        "url": None,
        "screenshot_path": None,
        "html_path": None,
    }

    try:
        record["url"] = page.url
        if settings.screenshot_on_failure:
            screenshot = stem.with_suffix(".png")
            page.screenshot(path=str(screenshot), full_page=settings.full_page)
            record["screenshot_path"] = str(screenshot)
        if settings.html_on_failure:
            html = stem.with_suffix(".html")
            html.write_text(page.content(), encoding="utf-8")
            record["html_path"] = str(html)
    except (PlaywrightError, OSError) as exc:
        # The page may already be closed; keep whatever was captured
        logger.warning("capture_incomplete", test=item.nodeid, error=str(exc))

    sidecar = stem.with_suffix(".json")
    sidecar.write_text(json.dumps(record, indent=2), encoding="utf-8")

    # Attach paths to the item for reporting
    for key in ("url", "screenshot_path", "html_path"):
        if record[key]:
            item.user_properties.append((key, record[key]))
    return sidecar
