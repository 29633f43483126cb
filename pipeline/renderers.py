"""Final processors of a log stream — record to text.

StructuredRenderer emits one JSON line per record for ingestion;
PrettyRenderer emits colorized multi-line text for local development.
Both terminate their output with a newline and never raise for an
unserializable record.
"""

import json
import os
from collections.abc import Callable, Mapping
from typing import Any

import structlog
from structlog.typing import EventDict, WrappedLogger

from config.logging import get_diagnostics_logger
from pipeline.enricher import ServiceContext
from pipeline.serialization import safe_dumps
from pipeline.severity import SEVERITY_STYLES, plain


class StructuredRenderer:
    """Render a record as a single line of cycle-safe JSON."""

    def __init__(self) -> None:
        self._json = structlog.processors.JSONRenderer(serializer=safe_dumps, default=str)

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
        try:
            return f"{self._json(logger, method_name, event_dict)}\n"
        except (TypeError, ValueError, RecursionError) as exc:
            get_diagnostics_logger().warning(
                "structured_renderer.fallback",
                severity=event_dict.get("severity"),
                error_type=type(exc).__name__,
            )
            return f"{event_dict}\n"


class PrettyRenderer:
    """Render a record as human-readable, ANSI-colorized text.

    The first line carries time, severity, process id, service identity,
    request id and message; ``user`` and ``httpRequest`` context fields
    follow on their own lines.
    """

    def __init__(
        self,
        service_context: ServiceContext | None = None,
        styles: Mapping[str, Callable[[str], str]] = SEVERITY_STYLES,
    ) -> None:
        self.service_context = service_context
        self.styles = styles

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
        return self.format(event_dict)

    def _identity(self, record: Mapping[str, Any]) -> tuple[Any, Any]:
        if self.service_context is not None:
            return self.service_context.service, self.service_context.version
        service_context = record.get("serviceContext")
        if not isinstance(service_context, Mapping):
            return None, None
        return service_context.get("service"), service_context.get("version")

    def format(self, record: Mapping[str, Any]) -> str:
        """Format an enriched record."""
        severity = str(record.get("severity", ""))
        style = self.styles.get(severity, plain)
        service, version = self._identity(record)
        context = record.get("context")
        if not isinstance(context, Mapping):
            context = {}

        text = f"[{record.get('eventTime')}] {style(severity.upper())} {os.getpid()} {service}@{version}"

        if context.get("requestId"):
            text += f" (requestId {context['requestId']})"

        message = record.get("message")
        if message:
            text += f" {style(str(message))}"

        if context.get("user"):
            text += f"\nuser: {context['user']}"

        http_request = context.get("httpRequest")
        if http_request:
            try:
                rendered = safe_dumps(http_request, indent=2)
            except (TypeError, ValueError):
                rendered = str(http_request)
            text += f"\nrequest: {rendered}"

        return text + "\n"

    def render_line(self, line: str) -> str:
        """Format one JSON text line; anything but a JSON object passes through."""
        line = line.rstrip("\n")
        try:
            record = json.loads(line)
        except ValueError:
            return line + "\n"
        if not isinstance(record, dict):
            return line + "\n"
        return self.format(record)
