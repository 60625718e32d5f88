"""structlog setup for the ``mailroom`` command line.

Log lines go to stderr by default so ``--format json`` output on stdout stays
machine-readable.  Production settings render one JSON object per line at
INFO; otherwise a console renderer at DEBUG.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any, TextIO

import structlog

from mailroom.config import Settings

SERVICE_NAME = "mailroom"

# Event keys whose values never reach a log line
SECRET_KEYS = frozenset({"api_key", "brevo_api_key"})


def redact_secrets(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Mask Brevo credentials bound to an event."""
    for key in SECRET_KEYS.intersection(event_dict):
        event_dict[key] = "**********"
    return event_dict


def _pipeline(production: bool) -> tuple[list[structlog.types.Processor], int]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_secrets,
    ]
    if production:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
        return processors, logging.INFO
    processors.append(structlog.dev.ConsoleRenderer())
    return processors, logging.DEBUG


def configure_logging(settings: Settings, file: TextIO | None = None) -> None:
    """Configure structlog for one CLI run.

    Args:
        settings: Application settings; ``production`` selects JSON output.
        file: Stream for log lines.  Defaults to stderr.
    """
    processors, level = _pipeline(settings.production)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=file or sys.stderr),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.bind_contextvars(
        service=SERVICE_NAME,
        database=str(settings.database_path),
    )
