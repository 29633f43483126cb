"""Record pipeline — enrichment, rendering, and sink streams."""

from pipeline.enricher import RecordEnricher, ServiceContext
from pipeline.renderers import PrettyRenderer, StructuredRenderer
from pipeline.severity import MUTE, Severity
from pipeline.stream import LogStream, make_stream

__all__ = [
    "MUTE",
    "LogStream",
    "PrettyRenderer",
    "RecordEnricher",
    "ServiceContext",
    "Severity",
    "StructuredRenderer",
    "make_stream",
]
