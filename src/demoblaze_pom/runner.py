"""Run the end-to-end suite through pytest and collect its failures."""

import os
import re
import shlex
import subprocess
from pathlib import Path

from .config import Config
from .log import get_logger
from .models import FailureKind, ScenarioFailure

logger = get_logger(__name__)

DEFAULT_SUITE = Path("tests/e2e")
CAPTURE_PLUGIN = "demoblaze_pom.plugins.capture"

# Ordered: the first matching marker wins
_FAILURE_MARKERS = [
    (("scenariotimeout",), FailureKind.TIMEOUT),
    (("navigationtimeout", "navigationerror"), FailureKind.NAVIGATION),
    (("notvisible", "not visible"), FailureKind.NOT_VISIBLE),
    (("notfound", "not found"), FailureKind.NOT_FOUND),
    (("unexpecteddialog", "dialogtimeout", "no dialog"), FailureKind.DIALOG),
    (("purchasetimeout",), FailureKind.PURCHASE),
    (("preconditionfailed",), FailureKind.PRECONDITION),
    (("timeout", "timed out"), FailureKind.TIMEOUT),
    (("assert", "expected"), FailureKind.ASSERTION_FAILED),
]


def classify_failure(error: str) -> FailureKind:
    """Classify the type of failure from error message."""
    error_lower = error.lower()
    for markers, kind in _FAILURE_MARKERS:
        if any(marker in error_lower for marker in markers):
            return kind
    return FailureKind.UNKNOWN


class TestRunner:
    """Run scenarios using the configured test command."""

    __test__ = False

    def __init__(self, config: Config):
        self.config = config
        self.test_command = config.test_command

    def build_command(
        self,
        suite: Path | None = None,
        browsers: tuple[str, ...] = (),
        headed: bool = False,
        keyword: str | None = None,
        include_e2e: bool = True,
    ) -> list[str]:
        # Auto-inject our capture plugin
        cmd = [*shlex.split(self.test_command), "-p", CAPTURE_PLUGIN]
        cmd.append(str(suite or DEFAULT_SUITE))
        if include_e2e:
            cmd.extend(["-m", "e2e"])
        for browser in browsers:
            cmd.extend(["--browser", browser])
        if headed:
            cmd.append("--headed")
        if keyword:
            cmd.extend(["-k", keyword])
        # Add verbosity if needed
        if "-v" not in cmd:
            cmd.append("-v")
        return cmd

    def run_tests(self, suite: Path | None = None, **options) -> tuple[bool, str, list[ScenarioFailure]]:
        """Run scenarios and return success status, output, and failures."""
        cmd = self.build_command(suite, **options)
        logger.info("run_suite", command=" ".join(cmd))

        result = subprocess.run(
            cmd,
            capture_output=True,
            cwd=Path.cwd(),
            text=True,
            env={**os.environ, "PYTHONPATH": f"{os.getcwd()}:{os.environ.get('PYTHONPATH', '')}"},
        )

        output = result.stdout + "\n" + result.stderr
        failures = self.parse_failures(output)
        logger.info("suite_finished", returncode=result.returncode, failures=len(failures))
        return result.returncode == 0, output, failures

    def parse_failures(self, output: str) -> list[ScenarioFailure]:
        """Parse pytest's short test summary lines.

        FAILED tests/e2e/test_cart.py::TestCart::test_total[chromium] - NotVisible: ...
        """
        failures = []
        summary_pattern = r"^(?:FAILED|ERROR)\s+(\S+?)::(\S+)(?:\s+-\s+(.+))?$"

        for match in re.finditer(summary_pattern, output, re.MULTILINE):
            file_path = match.group(1)
            test_name = match.group(2)
            error = (match.group(3) or "").strip()

            failures.append(ScenarioFailure(
                test_id=f"{file_path}::{test_name}",
                test_file=Path(file_path),
                test_name=test_name,
                kind=classify_failure(error),
                error_message=error[:500],
            ))

        return failures
