"""service-logger-prettify — render JSON-lines logs as colorized text.

Reads production-mode records from stdin and writes pretty-mode text to
stdout. Lines that are not JSON objects are echoed unchanged.
"""

import io
import os
import sys
from argparse import ArgumentParser
from collections.abc import Iterable
from typing import TextIO

import structlog

from config.logging import configure_logging
from pipeline.enricher import ServiceContext
from pipeline.renderers import PrettyRenderer

log = structlog.get_logger()


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="service-logger-prettify",
        description="Render JSON-lines service logs as colorized console text.",
    )
    parser.add_argument(
        "--service",
        default=os.environ.get("SVCLOG_SERVICE"),
        help="Service name to display (default: $SVCLOG_SERVICE, else each record's own)",
    )
    parser.add_argument(
        "--version",
        default=os.environ.get("SVCLOG_VERSION"),
        help="Service version to display (default: $SVCLOG_VERSION, else each record's own)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Report line counts on stderr when input ends",
    )
    return parser


def prettify(lines: Iterable[str], output: TextIO, renderer: PrettyRenderer) -> int:
    """Render each input line to ``output``.

    Returns:
        Number of lines rendered.
    """
    count = 0
    for line in lines:
        output.write(renderer.render_line(line))
        count += 1
    return count


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level="DEBUG" if args.verbose else "WARNING")

    service_context = None
    if args.service and args.version:
        service_context = ServiceContext(service=args.service, version=args.version)

    if isinstance(sys.stdin, io.TextIOWrapper):
        # undecodable bytes are echoed as U+FFFD instead of ending the stream
        sys.stdin.reconfigure(errors="replace")

    try:
        count = prettify(sys.stdin, sys.stdout, PrettyRenderer(service_context))
    except KeyboardInterrupt:
        log.info("prettify.interrupted")
        return 130

    log.debug("prettify.finished", lines=count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
