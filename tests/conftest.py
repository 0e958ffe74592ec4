"""Shared pytest configuration for the DemoBlaze suite.

Unit tests under tests/unit/ run against in-memory page doubles.
Scenarios under tests/e2e/ drive a real browser and are marked ``e2e``;
they are deselected by default, run them with ``pytest -m e2e``.
The failure capture plugin is loaded through ``addopts`` in pyproject.toml.
"""
