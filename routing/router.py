"""Severity router — decides once, at construction, which methods emit.

The router turns an ordered route table into a mapping of method name to
callable. Every entry is either the shared ``noop`` or an ``Emitter``
bound to its stream and extra fields, so a logging call never compares
severities at runtime.
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from config.logging import get_diagnostics_logger
from pipeline.severity import MUTE
from pipeline.stream import LogStream
from routing.errors import InvalidConfiguration

LogMethod = Callable[..., None]


@dataclass(frozen=True)
class Route:
    """One logging method of a logger.

    Attributes:
        severity: Severity gate and record severity of the method.
        stream: Pipeline receiving the method's records.
        alias: Method name when it differs from the severity (e.g. ``metric``).
        extra: Fields added to every record of the method.
    """

    severity: str
    stream: LogStream
    alias: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.alias or self.severity


def noop(message: Any = None, context: Any = None) -> None:
    """Inactive logging method."""


class Emitter:
    """Active logging method bound to a stream.

    Calls never raise. If the stream fails, the original message is
    written to the sink unmodified. If the sink itself fails, the record
    is dropped and only the diagnostic remains.
    """

    def __init__(self, severity: str, stream: LogStream, extra: Mapping[str, Any] | None = None) -> None:
        self.severity = severity
        self.stream = stream
        self.extra = dict(extra or {})

    def __call__(self, message: Any = None, context: Any = None) -> None:
        fields: dict[str, Any] = {"severity": self.severity, "message": message}
        if context is not None:
            fields["context"] = context
        fields.update(self.extra)

        try:
            self.stream.emit(**fields)
        except Exception as exc:
            get_diagnostics_logger().warning(
                "emitter.degraded",
                severity=self.severity,
                error_type=type(exc).__name__,
            )
            try:
                self.stream.write_raw(f"{'' if message is None else message}\n")
            except Exception as write_exc:
                get_diagnostics_logger().warning(
                    "emitter.write_failed",
                    severity=self.severity,
                    error_type=type(write_exc).__name__,
                )


def _severity_name(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def build_routes(routes: Sequence[Route], minimum: Any) -> dict[str, LogMethod]:
    """Build the method table for a route list and a minimum severity.

    A severity's rank is the position of its first appearance in
    ``routes``, so entries sharing a severity share activation.

    Args:
        routes: Every method the logger exposes, lowest severity first.
        minimum: Lowest severity that produces output, or ``mute``.

    Returns:
        Mapping of method name to an active or no-op callable.

    Raises:
        InvalidConfiguration: If ``minimum`` is not ``mute`` and no route
            carries that severity.
    """
    minimum = _severity_name(minimum)
    severities = [route.severity for route in routes]

    if minimum != MUTE and minimum not in severities:
        raise InvalidConfiguration(minimum)

    threshold = None if minimum == MUTE else severities.index(minimum)

    methods: dict[str, LogMethod] = {}
    for route in routes:
        active = threshold is not None and severities.index(route.severity) >= threshold
        methods[route.name] = Emitter(route.severity, route.stream, route.extra) if active else noop
    return methods
