"""Logger factory — wires streams, sinks and the severity router.

Pretty mode sends every method through one colorized stream on stdout.
Production mode (any other mode) builds two independent JSON-lines
streams: debug, info, metric and warning go to stdout; error and alert
go to stderr.
"""

import sys
from typing import Any, TextIO

from config.settings import LoggerSettings
from pipeline.enricher import ServiceContext
from pipeline.renderers import PrettyRenderer, StructuredRenderer
from pipeline.severity import Severity
from pipeline.stream import LogStream, make_stream
from routing.router import LogMethod, Route, build_routes

PRETTY_MODE = "pretty"
METRIC_EXTRA = {"isMetric": True}


class ServiceLogger:
    """Logging surface of one service.

    Each method takes ``(message=None, context=None)`` and returns None.
    ``metric`` gates on ``info`` and tags records with ``isMetric``;
    ``warn`` is an alias of ``warning``.
    """

    def __init__(self, methods: dict[str, LogMethod], service_context: ServiceContext) -> None:
        self.service_context = service_context
        self.debug = methods[Severity.DEBUG.value]
        self.info = methods[Severity.INFO.value]
        self.metric = methods["metric"]
        self.warning = methods[Severity.WARNING.value]
        self.warn = self.warning
        self.error = methods[Severity.ERROR.value]
        self.alert = methods[Severity.ALERT.value]


def _routes(out: LogStream, err: LogStream) -> list[Route]:
    return [
        Route(Severity.DEBUG.value, out),
        Route(Severity.INFO.value, out),
        Route(Severity.INFO.value, out, alias="metric", extra=METRIC_EXTRA),
        Route(Severity.WARNING.value, out),
        Route(Severity.ERROR.value, err),
        Route(Severity.ALERT.value, err),
    ]


def make_pretty_routes(service_context: ServiceContext, stdout: TextIO) -> list[Route]:
    """Every method on one pretty-rendered stream."""
    out = make_stream(stdout, PrettyRenderer(service_context), service_context)
    return _routes(out, out)


def make_production_routes(
    service_context: ServiceContext,
    stdout: TextIO,
    stderr: TextIO,
) -> list[Route]:
    """JSON-lines streams split between the stdout and stderr sinks."""
    out = make_stream(stdout, StructuredRenderer(), service_context)
    err = make_stream(stderr, StructuredRenderer(), service_context)
    return _routes(out, err)


def create_logger(
    severity: Any,
    service: str,
    version: str,
    mode: str | None = None,
    *,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> ServiceLogger:
    """Create a service logger.

    Args:
        severity: Minimum severity that produces output, or "mute".
        service: Service name stamped on every record.
        version: Service version stamped on every record.
        mode: "pretty" for colorized console output; anything else is production.
        stdout: Sink for the low-severity stream, defaults to ``sys.stdout``.
        stderr: Sink for error and alert in production, defaults to ``sys.stderr``.

    Returns:
        A ServiceLogger exposing debug, info, metric, warning, warn, error and alert.

    Raises:
        InvalidConfiguration: If ``severity`` is neither "mute" nor a known level.
    """
    service_context = ServiceContext(service=service, version=version)
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr

    if mode == PRETTY_MODE:
        routes = make_pretty_routes(service_context, stdout)
    else:
        routes = make_production_routes(service_context, stdout, stderr)

    return ServiceLogger(build_routes(routes, severity), service_context)


def create_logger_from_settings(
    settings: LoggerSettings | None = None,
    *,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> ServiceLogger:
    """Create a service logger from settings, reading the environment by default."""
    if settings is None:
        settings = LoggerSettings()
    return create_logger(
        settings.severity,
        settings.service,
        settings.version,
        settings.mode,
        stdout=stdout,
        stderr=stderr,
    )
