"""structlog configuration: JSON lines on stderr with secret redaction."""

import logging
import sys
from collections.abc import Mapping
from typing import Any

import structlog

ROOT_LOGGER_NAME = "stripe-mcp"

SECRET_KEYS = frozenset({"api_key", "apikey", "stripe_api_key", "authorization", "token", "secret"})
REDACTED = "[REDACTED]"

# structlog reserves the `logger` keyword in get_logger, so the name travels
# under this key and is renamed on output.
LOGGER_NAME_KEY = "logger_name"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def logger_name(*parts: str) -> str:
    """Build a hierarchical logger name, e.g. ``stripe-mcp:tools:stripe_raw_request``."""
    return ":".join((ROOT_LOGGER_NAME, *parts))


def get_logger(*parts: str) -> Any:
    """Lazy structlog logger whose events carry ``logger=<hierarchical name>``."""
    return structlog.get_logger(**{LOGGER_NAME_KEY: logger_name(*parts)})


def _sanitize(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {
            key: REDACTED if str(key).lower() in SECRET_KEYS else _sanitize(item)
            for key, item in value.items()
        }
    return value


def redact_secrets(_logger: Any, _method_name: str, event_dict: dict) -> dict:
    """structlog processor that masks secret values anywhere in the event."""
    return _sanitize(event_dict)


def name_logger(_logger: Any, _method_name: str, event_dict: dict) -> dict:
    if LOGGER_NAME_KEY in event_dict:
        event_dict["logger"] = event_dict.pop(LOGGER_NAME_KEY)
    return event_dict


def level_number(level: str) -> int:
    try:
        return _LEVELS[level.lower()]
    except KeyError:
        raise ValueError(f"Unknown log level: {level}") from None


def setup_logging(level: str = "info") -> None:
    """Configure structlog for the whole process.

    Output goes to stderr because stdout carries the stdio MCP transport.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            name_logger,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
            redact_secrets,
            structlog.processors.format_exc_info,
            structlog.processors.EventRenamer("message"),
            structlog.processors.JSONRenderer(default=str),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_number(level)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
