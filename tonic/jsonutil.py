"""JSON encoding with the conventions used by the renderers.

Output is compact, map keys are sorted, non-ASCII text is written as is,
and U+2028/U+2029 are always escaped. HTML-significant characters are
escaped unless asked otherwise.
"""

from __future__ import annotations

import base64
import json
import re
from typing import Any

_HTML_ESCAPES = str.maketrans({"<": "\\u003c", ">": "\\u003e", "&": "\\u0026"})
_LINE_ESCAPES = str.maketrans({"\u2028": "\\u2028", "\u2029": "\\u2029"})
_SURROGATE = re.compile("[\ud800-\udfff]")


class MarshalError(ValueError):
    """Raised when a value cannot be encoded to or decoded from JSON."""


def _default(obj: Any) -> Any:
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    raise TypeError(f"json: unsupported type: {type(obj).__name__}")


def _encode(obj: Any, escape_html: bool, **options: Any) -> bytes:
    try:
        text = json.dumps(
            obj,
            ensure_ascii=False,
            allow_nan=False,
            sort_keys=True,
            default=_default,
            **options,
        )
    except (TypeError, ValueError, RecursionError) as exc:
        raise MarshalError(str(exc)) from exc
    text = _SURROGATE.sub("\\\\ufffd", text)
    text = text.translate(_LINE_ESCAPES)
    if escape_html:
        text = text.translate(_HTML_ESCAPES)
    return text.encode("utf-8")


def marshal(obj: Any, *, escape_html: bool = True) -> bytes:
    """Encode ``obj`` as compact JSON bytes."""
    return _encode(obj, escape_html, separators=(",", ":"))


def marshal_indent(obj: Any, prefix: str, indent: str) -> bytes:
    """Encode ``obj`` as indented JSON; every line after the first starts with ``prefix``."""
    encoded = _encode(obj, True, separators=(",", ": "), indent=indent)
    if not prefix:
        return encoded
    return encoded.replace(b"\n", b"\n" + prefix.encode("utf-8"))


def unmarshal(data: bytes | bytearray | str) -> Any:
    """Decode JSON text or bytes."""
    try:
        return json.loads(data)
    except (TypeError, ValueError) as exc:
        raise MarshalError(str(exc)) from exc