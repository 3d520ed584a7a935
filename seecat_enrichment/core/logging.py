"""Structured logging for the enrichment pipeline and its command line."""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator

import structlog

from .config import Settings, get_settings

SERVICE_NAME = "seecat"


def use_stderr_defaults() -> None:
    """Keep structlog's default processors but print to stderr instead of stdout."""
    if not structlog.is_configured():
        structlog.configure(logger_factory=structlog.PrintLoggerFactory(file=sys.stderr))


def configure_logging(
    level: str | None = None,
    *,
    settings: Settings | None = None,
    json_output: bool = True,
) -> None:
    """Send structlog events to stderr; stdout is reserved for records."""
    resolved_settings = settings or get_settings()
    effective_level = (level or resolved_settings.log_level).upper()
    numeric_level = getattr(logging, effective_level, logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=numeric_level)
    logging.getLogger().setLevel(numeric_level)
    # httpx logs every request line at INFO.
    logging.getLogger("httpx").setLevel(max(numeric_level, logging.WARNING))

    if json_output:
        renderer: Any = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


@contextmanager
def request_context(**values: Any) -> Iterator[None]:
    """Tag every event logged inside the block with the request identifiers."""
    with structlog.contextvars.bound_contextvars(service=SERVICE_NAME, **values):
        yield


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# Library callers that never configure logging still get a clean stdout.
use_stderr_defaults()
