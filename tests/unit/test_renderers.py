"""Unit tests for the structured and pretty renderers."""

import json
import os

from structlog.testing import capture_logs

from pipeline.enricher import ServiceContext
from pipeline.renderers import PrettyRenderer, StructuredRenderer
from pipeline.serialization import CIRCULAR_PLACEHOLDER
from pipeline.severity import SEVERITY_STYLES

PID = os.getpid()


def base_record(**fields: object) -> dict[str, object]:
    record: dict[str, object] = {
        "severity": "info",
        "message": "hello",
        "eventTime": "the-time",
        "serviceContext": {"service": "the-service", "version": "the-version"},
    }
    record.update(fields)
    return record


class TestStructuredRenderer:
    def test_single_compact_line(self) -> None:
        text = StructuredRenderer()(None, "msg", base_record())
        assert text == (
            '{"severity":"info","message":"hello","eventTime":"the-time",'
            '"serviceContext":{"service":"the-service","version":"the-version"}}\n'
        )

    def test_circular_context_is_placeholdered(self) -> None:
        payload: dict = {"name": "loop"}
        payload["self"] = payload
        text = StructuredRenderer()(None, "msg", base_record(context={"payload": payload}))

        assert text.count("\n") == 1
        parsed = json.loads(text)
        assert parsed["context"]["payload"] == {"name": "loop", "self": CIRCULAR_PLACEHOLDER}

    def test_unserializable_record_falls_back_to_str(self) -> None:
        record = base_record(context={(1, 2): "pair"})
        with capture_logs() as logs:
            text = StructuredRenderer()(None, "msg", record)

        assert text == f"{record}\n"
        assert logs[0]["event"] == "structured_renderer.fallback"
        assert logs[0]["error_type"] == "TypeError"


class TestPrettyRenderer:
    def test_first_line_layout(self) -> None:
        text = PrettyRenderer()(None, "msg", base_record())
        assert text == (
            f"[the-time] \x1b[32mINFO\x1b[39m {PID} the-service@the-version \x1b[32mhello\x1b[39m\n"
        )

    def test_configured_service_context_wins(self) -> None:
        renderer = PrettyRenderer(ServiceContext(service="cli", version="9"))
        assert f" {PID} cli@9 " in renderer.format(base_record())

    def test_request_id(self) -> None:
        text = PrettyRenderer().format(base_record(context={"requestId": "abc"}))
        assert f"the-service@the-version (requestId abc) \x1b[32mhello" in text

    def test_user_and_request_lines(self) -> None:
        context = {"user": "User:42 (Ada)", "httpRequest": {"method": "GET", "url": "/x"}}
        text = PrettyRenderer().format(base_record(severity="warning", context=context))

        lines = text.split("\n")
        assert lines[0].startswith("[the-time] \x1b[33mWARNING\x1b[39m")
        assert lines[1] == "user: User:42 (Ada)"
        assert text.endswith('request: {\n  "method": "GET",\n  "url": "/x"\n}\n')

    def test_null_user_is_skipped(self) -> None:
        text = PrettyRenderer().format(base_record(context={"user": None}))
        assert "user:" not in text
        assert text.count("\n") == 1

    def test_severity_colors(self) -> None:
        renderer = PrettyRenderer()
        assert "\x1b[90mDEBUG\x1b[39m" in renderer.format(base_record(severity="debug"))
        assert "\x1b[31mERROR\x1b[39m" in renderer.format(base_record(severity="error"))
        assert "\x1b[7m\x1b[31mALERT\x1b[39m\x1b[27m" in renderer.format(base_record(severity="alert"))

    def test_swappable_styles(self) -> None:
        styles = {name: (lambda text: f"<{text}>") for name in SEVERITY_STYLES}
        text = PrettyRenderer(styles=styles).format(base_record())
        assert text == f"[the-time] <INFO> {PID} the-service@the-version <hello>\n"


class TestRenderLine:
    def test_json_line_is_prettified(self) -> None:
        line = json.dumps(base_record(severity="debug", message="from json")) + "\n"
        text = PrettyRenderer().render_line(line)
        assert text == (
            f"[the-time] \x1b[90mDEBUG\x1b[39m {PID} the-service@the-version "
            "\x1b[90mfrom json\x1b[39m\n"
        )

    def test_non_json_passes_through(self) -> None:
        assert PrettyRenderer().render_line("plain text\n") == "plain text\n"

    def test_non_object_json_passes_through(self) -> None:
        assert PrettyRenderer().render_line("[1, 2]") == "[1, 2]\n"
