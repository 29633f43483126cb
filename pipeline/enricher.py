"""Record enrichment — turns a raw ``(message, context)`` call into a LogRecord.

Runs as a structlog processor between the timestamper and a renderer.
Caller-supplied context is duck-typed: every lookup goes through
``_field`` so plain dicts and attribute-bearing objects (framework
request objects, exceptions) are treated alike. Enrichment never raises
for a missing optional field; it simply skips the derived output.
"""

import traceback
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from structlog.typing import EventDict, WrappedLogger

DEFAULT_MESSAGE = "No message for this log."
DEFAULT_MODEL_NAME = "undefinedModel"

# Key under which callers embed a framework request-context object.
REQUEST_CONTEXT_KEY = "ctx"


class ServiceContext(BaseModel):
    """Identity attached to every record a logger emits."""

    model_config = ConfigDict(frozen=True)

    service: str
    version: str


class HttpRequest(BaseModel):
    """Request metadata distilled from a framework request context.

    Attributes:
        method: HTTP method of the request.
        url: Requested URL.
        response_status_code: Response status, numeric or enum.
        referrer: Value of the ``referer`` header.
        user_agent: Value of the ``user-agent`` header.
        remote_ip: Client address as seen by the framework.
    """

    model_config = ConfigDict(populate_by_name=True)

    method: Any = None
    url: Any = None
    response_status_code: Any = Field(default=None, alias="responseStatusCode")
    referrer: Any = None
    user_agent: Any = Field(default=None, alias="userAgent")
    remote_ip: Any = Field(default=None, alias="remoteIp")

    def to_dict(self) -> dict[str, Any]:
        """Wire form: camelCase keys, absent fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


def _field(source: Any, name: str) -> Any:
    if source is None:
        return None
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def utc_now_iso() -> str:
    """Current wall-clock time as ISO-8601 UTC text."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def normalize_error(error: Any) -> Any:
    """Normalize an error-like value into a ``{name, message, stack}`` mapping.

    Mappings and plain strings are returned unchanged; exceptions and
    other objects are read through their ``name``/``message``/``stack``
    attributes, with Python exceptions contributing their class name,
    ``str()`` and formatted traceback.
    """
    if error is None or isinstance(error, (Mapping, str)):
        return error
    if isinstance(error, BaseException):
        info: dict[str, Any] = {"name": type(error).__name__, "message": str(error)}
        if error.__traceback__ is not None:
            stack = traceback.format_exception(type(error), error, error.__traceback__)
            info["stack"] = "".join(stack).rstrip("\n")
        return info
    info = {"name": _field(error, "name"), "message": _field(error, "message")}
    stack = _field(error, "stack")
    if stack:
        info["stack"] = stack
    return info


def describe_error(error: Any) -> str:
    """Text folded into a record's message for an error-like value."""
    info = normalize_error(error)
    if isinstance(info, str):
        return info
    stack = _field(info, "stack")
    if stack:
        return str(stack)
    parts = [_field(info, "name"), _field(info, "message")]
    if all(part is None for part in parts):
        return str(info)
    return " ".join(str(part) for part in parts if part is not None)


def fold_message(message: Any, context: Any) -> Any:
    """Apply the error-folding and default-message rules to ``message``."""
    error = _field(context, "error") if isinstance(context, Mapping) else None
    if error is not None and error != "":
        text = describe_error(error)
        return f"{message} {text}" if message else text
    if not message:
        return DEFAULT_MESSAGE
    return message


def _model_name(model: Any) -> str:
    if model is None:
        return DEFAULT_MODEL_NAME
    if isinstance(model, str):
        return model
    for attribute in ("name", "modelName", "__name__"):
        name = _field(model, attribute)
        if isinstance(name, str) and name:
            return name
    return DEFAULT_MODEL_NAME


def derive_user(request_context: Any) -> str | None:
    """Describe the authenticated principal, or ``None`` when anonymous.

    The form is ``<model>:<id>``, with `` (<name>)`` appended when the
    principal carries a display name.
    """
    authorized = _field(request_context, "authorized")
    if not authorized:
        return None
    user = f"{_model_name(_field(request_context, 'authorizedModel'))}:{_field(authorized, 'id')}"
    name = _field(authorized, "name")
    if name:
        user += f" ({name})"
    return user


def derive_http_request(request_context: Any) -> HttpRequest | None:
    """Distill request metadata; ``None`` when no request is attached."""
    request = _field(request_context, "request")
    if request is None:
        return None
    headers = _field(request_context, "headers") or _field(request, "headers")
    return HttpRequest(
        method=_field(request, "method"),
        url=_field(request, "url"),
        response_status_code=_field(request_context, "status"),
        referrer=_field(headers, "referer"),
        user_agent=_field(headers, "user-agent"),
        remote_ip=_field(request, "ip"),
    )


def enrich_context(context: Any) -> Any:
    """Distill the embedded request-context object and normalize ``error``.

    The caller's mapping is never modified: a shallow copy is returned
    when a field changes, the mapping itself otherwise. Non-mapping
    context is opaque and returned as-is.
    """
    if not isinstance(context, Mapping):
        return context

    error = normalize_error(context.get("error"))
    if REQUEST_CONTEXT_KEY not in context and error is context.get("error"):
        return context

    enriched = dict(context)
    if error is not None:
        enriched["error"] = error

    if REQUEST_CONTEXT_KEY in enriched:
        request_context = enriched.pop(REQUEST_CONTEXT_KEY)
        enriched["user"] = derive_user(request_context)
        http_request = derive_http_request(request_context)
        if http_request is not None:
            enriched["httpRequest"] = http_request.to_dict()

    return enriched


class RecordEnricher:
    """structlog processor producing a schema-stable LogRecord.

    Key order of the returned record is ``severity``, ``message``,
    ``eventTime``, ``serviceContext``, ``context``, followed by any
    extra route fields such as ``isMetric``.
    """

    def __init__(self, service_context: ServiceContext) -> None:
        self.service_context = service_context

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        severity = event_dict.pop("severity", method_name)
        message = event_dict.pop("message", None)
        event_time = event_dict.pop("eventTime", None) or utc_now_iso()
        context = event_dict.pop("context", None)

        record: EventDict = {
            "severity": severity,
            "message": fold_message(message, context),
            "eventTime": event_time,
            "serviceContext": self.service_context.model_dump(),
        }
        if context is not None:
            record["context"] = enrich_context(context)
        record.update(event_dict)
        return record
