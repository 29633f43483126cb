"""Diagnostics logging for the library itself, using structlog.

Records produced by a ServiceLogger never pass through here. Degraded
emissions and serialization fallbacks are reported through
``get_diagnostics_logger``. Output goes to stderr so it never interleaves
with the stdout record sink, including before the host configures
structlog.
"""

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.typing import Processor


def get_diagnostics_logger() -> Any:
    """Return the logger for library diagnostics.

    Once structlog is configured (by ``configure_logging`` or the host),
    this is a plain ``structlog.get_logger()``. Until then structlog would
    print to stdout, so the default processors are bound to stderr instead.
    """
    if structlog.is_configured():
        return structlog.get_logger()
    return structlog.wrap_logger(structlog.PrintLogger(sys.stderr))


def configure_logging(
    environment: str = "development",
    level: str = "WARNING",
    output: TextIO | None = None,
) -> None:
    """Configure structlog for library diagnostics.

    Args:
        environment: One of "development" or "production". Controls output format.
        level: Minimum diagnostics level name, e.g. "WARNING".
        output: Diagnostics stream, defaults to stderr.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if environment == "production":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level.upper())),
        logger_factory=structlog.PrintLoggerFactory(output or sys.stderr),
        cache_logger_on_first_use=False,
    )
