"""Page Object Model and end-to-end suite for the DemoBlaze demo store."""

__version__ = "0.1.0"
