"""Read back the failure artifacts written by the capture plugin."""

import json
from datetime import datetime
from pathlib import Path

from ..models import ScenarioFailure
from ..runner import classify_failure


class FailureArtifacts:
    """Extract failure information from a captured artifacts directory."""

    def __init__(self, results_dir: Path = Path("test-results/failures")):
        self.results_dir = results_dir

    def get_failures(self) -> list[ScenarioFailure]:
        """Parse every JSON sidecar, newest first."""
        failures = []

        if not self.results_dir.exists():
            return failures

        for sidecar in self.results_dir.glob("*.json"):
            try:
                record = json.loads(sidecar.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError):
                continue
            failures.append(self._to_failure(record))

        return sorted(failures, key=lambda f: f.timestamp, reverse=True)

    @staticmethod
    def _to_failure(record: dict) -> ScenarioFailure:
        error = f"{record.get('error_type', '')}: {record.get('error_message', '')}"
        screenshot = record.get("screenshot_path")
        html = record.get("html_path")
        timestamp = record.get("timestamp")
        return ScenarioFailure(
            test_id=record.get("test_id", ""),
            test_name=record.get("test_name", ""),
            test_file=Path(record.get("test_file", "")),
            kind=classify_failure(error),
            error_message=record.get("error_message", ""),
            url=record.get("url"),
            screenshot_path=Path(screenshot) if screenshot else None,
            html_path=Path(html) if html else None,
            timestamp=datetime.fromisoformat(timestamp) if timestamp else datetime.now(),
        )
