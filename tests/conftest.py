"""Shared test fixtures for the service logger."""

import io
import re
from typing import Any

import pytest

from pipeline.enricher import ServiceContext
from pipeline.stream import LogStream

ISO_8601_UTC = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|\+00:00)$")


def echo_renderer(logger: Any, method_name: str, event_dict: dict[str, Any]) -> str:
    """Minimal final processor: ``<severity>:<message>`` per line."""
    return f"{event_dict['severity']}:{event_dict['message']}\n"


def failing_processor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> str:
    """A processor that always blows up."""
    raise RuntimeError("processor failure")


@pytest.fixture
def stdout() -> io.StringIO:
    """In-memory stand-in for the standard-output sink."""
    return io.StringIO()


@pytest.fixture
def stderr() -> io.StringIO:
    """In-memory stand-in for the standard-error sink."""
    return io.StringIO()


@pytest.fixture
def service_context() -> ServiceContext:
    return ServiceContext(service="the-service", version="the-version")


@pytest.fixture
def echo_stream(stdout: io.StringIO) -> LogStream:
    """A stream writing ``<severity>:<message>`` lines to the stdout fixture."""
    return LogStream(stdout, [echo_renderer])


@pytest.fixture
def request_context() -> dict[str, Any]:
    """A framework request context for an authenticated GET request."""
    return {
        "authorized": {"id": "42", "name": "Ada"},
        "authorizedModel": "User",
        "request": {"method": "GET", "url": "/accounts/42", "ip": "10.0.0.7"},
        "headers": {"referer": "https://example.test/", "user-agent": "curl/8.0"},
        "status": 200,
    }
