"""Cycle-safe JSON serialization.

``json.dumps`` refuses self-referencing containers. Records carry
caller-supplied context, so a value that contains itself is replaced with
a fixed placeholder instead of failing the whole record.
"""

import json
from collections.abc import Mapping
from typing import Any

CIRCULAR_PLACEHOLDER = "[Circular ~]"


def decycle(value: Any, _ancestors: frozenset[int] = frozenset()) -> Any:
    """Return a copy of ``value`` with reference cycles replaced.

    Only containers on the current path count as ancestors, so a value
    shared by two siblings is serialized twice rather than flagged.

    Args:
        value: Any JSON-like structure of mappings, lists and tuples.

    Returns:
        A structure safe to hand to ``json.dumps``.
    """
    if isinstance(value, (Mapping, list, tuple)):
        if id(value) in _ancestors:
            return CIRCULAR_PLACEHOLDER
        ancestors = _ancestors | {id(value)}
        if isinstance(value, Mapping):
            return {key: decycle(item, ancestors) for key, item in value.items()}
        return [decycle(item, ancestors) for item in value]
    return value


def safe_dumps(obj: Any, *, indent: int | None = None, default: Any = str, **dumps_kw: Any) -> str:
    """Serialize ``obj`` to JSON text, substituting circular references.

    Compact output uses no whitespace between tokens. Values ``json``
    cannot encode are passed through ``default`` (``str`` unless given).

    Raises:
        TypeError: If a mapping key cannot be encoded.
        ValueError: If the structure still cannot be encoded.
    """
    if indent is None:
        dumps_kw.setdefault("separators", (",", ":"))
    return json.dumps(
        decycle(obj),
        indent=indent,
        default=default,
        ensure_ascii=False,
        **dumps_kw,
    )
