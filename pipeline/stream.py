"""Log streams — a structlog processor chain bound to one output sink.

A stream stamps ``eventTime``, enriches the record, renders it, and hands
the text to its sink. The write is not flushed; buffering and
back-pressure belong to the sink.
"""

from typing import Any, TextIO

import structlog
from structlog.typing import Processor

from pipeline.enricher import RecordEnricher, ServiceContext


class SinkWriter:
    """Wrapped logger that writes already-rendered text to a sink verbatim."""

    def __init__(self, file: TextIO) -> None:
        self._file = file

    def msg(self, message: str) -> None:
        self._file.write(message)


class LogStream:
    """One enrichment and rendering pipeline feeding one sink."""

    def __init__(self, sink: TextIO, processors: list[Processor]) -> None:
        self.sink = sink
        self.processors = processors
        self._logger = structlog.wrap_logger(
            SinkWriter(sink),
            processors=processors,
            wrapper_class=structlog.BoundLogger,
            context_class=dict,
        )

    def emit(self, **fields: Any) -> None:
        """Run ``fields`` through the processor chain and write the result."""
        self._logger.msg(**fields)

    def write_raw(self, text: str) -> None:
        """Write ``text`` to the sink, bypassing every processor."""
        self.sink.write(text)


def make_stream(sink: TextIO, renderer: Processor, service_context: ServiceContext) -> LogStream:
    """Build a stream that timestamps, enriches, then renders with ``renderer``.

    Args:
        sink: Text stream receiving rendered records.
        renderer: Final processor returning the record's text form.
        service_context: Identity stamped on every record.

    Returns:
        A ready-to-use LogStream.
    """
    return LogStream(
        sink,
        [
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="eventTime"),
            RecordEnricher(service_context),
            renderer,
        ],
    )
