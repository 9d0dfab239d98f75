"""Path parameter converters and decoding.

Built-in converters constrain what a ``{name:type}`` segment matches.
Captured values always stay strings; converters only shape the regex.
"""

import re
from urllib.parse import unquote

from veer.errors import ParamDecodeError

# regex fragment for each supported converter
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+?",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}

# A "%" not followed by two hex digits is never valid percent-encoding
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def decode_param(value: str | None) -> str | None:
    """Percent-decode a captured path segment.

    ``None`` and ``""`` are returned unchanged. Raises ``ParamDecodeError``
    if *value* contains a malformed escape or the escapes do not form
    valid UTF-8; the error message names the raw value.
    """
    if not value:
        return value
    if _MALFORMED_ESCAPE.search(value):
        raise ParamDecodeError(value)
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError as exc:
        raise ParamDecodeError(value) from exc
