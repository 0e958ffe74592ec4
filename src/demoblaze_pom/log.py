"""Logging configuration using structlog.

Every record emitted while a scenario runs carries the scenario's node id
(bound by the capture plugin through structlog's contextvars), so
interleaved output from page components can be traced back to its test.
"""

import logging
import sys

import structlog
from structlog.typing import EventDict, WrappedLogger

from .config import Config, load_config

SCENARIO_KEY = "scenario"
MAX_VALUE_LENGTH = 200


def truncate_values(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Shorten long string values such as dialog texts or page HTML."""
    for key, value in event_dict.items():
        if key != "event" and isinstance(value, str) and len(value) > MAX_VALUE_LENGTH:
            event_dict[key] = f"{value[:MAX_VALUE_LENGTH]}... ({len(value)} chars)"
    return event_dict


def configure_logging(config: Config | None = None) -> None:
    """Configure structlog for the page objects and the suite."""
    config = config or load_config()
    log_level = getattr(logging, config.logging.level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            truncate_values,
            # Pretty print while debugging, JSON for CI logs
            structlog.dev.ConsoleRenderer()
            if config.logging.debug
            else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Third-party libraries log through the standard library
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )


def bind_scenario(nodeid: str) -> None:
    """Attach ``nodeid`` to every record logged until ``clear_scenario``."""
    structlog.contextvars.bind_contextvars(**{SCENARIO_KEY: nodeid})


def clear_scenario() -> None:
    structlog.contextvars.unbind_contextvars(SCENARIO_KEY)


def get_logger(name: str, **initial_values) -> structlog.stdlib.BoundLogger:
    """Get a logger, optionally pre-bound with ``initial_values``."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name, **initial_values)
    return logger
