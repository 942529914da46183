"""Structured logging for ledgerstore.

Stores log through structlog. Every store gets a logger bound with its
record kind and path, so entries from several stores in one process can be
told apart without extra work at the call site.

Payload contents never reach the output: :func:`redact_payloads` runs once
context variables are merged, so payload fields bound through
:func:`bind_context` are replaced with their size too.

Environment Variables:
    LEDGERSTORE_LOG_FORMAT: "json" or "console" (default: console)
    LEDGERSTORE_LOG_LEVEL: Standard level name (default: INFO)

Usage:
    from ledgerstore.logging import configure_logging, get_logger

    configure_logging(json_format=True)

    logger = get_logger(__name__)
    logger.info("store_opened", store_path="./events.db")
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog
from structlog.types import Processor

from ledgerstore.errors import ConfigurationError

# Event keys that may carry record payloads
PAYLOAD_KEYS = frozenset({"data", "data_bytes", "req_ctx"})

_configured = False


def redact_payloads(_logger: Any, _method: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """Replace payload values with a size marker."""
    for key in PAYLOAD_KEYS & event_dict.keys():
        value = event_dict[key]
        size = len(value) if isinstance(value, (bytes, str)) else None
        event_dict[key] = f"<redacted {size} bytes>" if size is not None else "<redacted>"
    return event_dict


def _level_from_env(default: int) -> int:
    name = os.getenv("LEDGERSTORE_LOG_LEVEL")
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"LEDGERSTORE_LOG_LEVEL must be a level name, got {name!r}")
    return level


def _json_from_env(default: bool) -> bool:
    value = os.getenv("LEDGERSTORE_LOG_FORMAT")
    if not value:
        return default
    normalized = value.strip().lower()
    if normalized not in ("json", "console"):
        raise ConfigurationError(f"LEDGERSTORE_LOG_FORMAT must be 'json' or 'console', got {value!r}")
    return normalized == "json"


def build_processors(json_format: bool) -> list[Processor]:
    """Processor chain shared by every ledgerstore logger."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        redact_payloads,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if json_format:
        processors.extend([structlog.processors.format_exc_info, structlog.processors.JSONRenderer()])
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    return processors


def configure_logging(
    json_format: bool | None = None,
    level: int | None = None,
    logger_factory: Any = None,
) -> None:
    """Configure structured logging for ledgerstore.

    Arguments left as None are read from the environment.

    Args:
        json_format: JSON lines when True, colored console output when False
        level: Minimum log level
        logger_factory: Custom logger factory (for testing)

    Raises:
        ConfigurationError: If an environment variable holds an invalid value
    """
    global _configured

    if json_format is None:
        json_format = _json_from_env(False)
    if level is None:
        level = _level_from_env(logging.INFO)

    logging.basicConfig(level=level, format="%(message)s", stream=sys.stdout)

    structlog.configure(
        processors=build_processors(json_format),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=logger_factory or structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configured = True


def get_logger(name: str) -> Any:
    """Get a structured logger, configuring defaults on first use."""
    if not _configured:
        configure_logging()
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context variables included in every subsequent entry of this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


def store_logger(kind: str, path: str) -> Any:
    """Get a logger pre-bound with store context.

    Args:
        kind: Record kind label ("event" or "command")
        path: Storage path of the store

    Returns:
        Logger with store_kind and store_path bound
    """
    return get_logger("ledgerstore.store").bind(store_kind=kind, store_path=path)
