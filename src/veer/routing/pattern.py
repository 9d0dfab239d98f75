"""Path pattern compilation.

Turns a path pattern into a ``Matcher``: an anchored regex plus the ordered
parameter names its capture groups map to.

Pattern shapes:

    "/users/:id"                 named parameter
    "/users/:id?"                optional named parameter
    "/users/{id:int}"            converter-constrained parameter
    "/files/*"                   unnamed wildcard, keyed "0", "1", ...
    ["users", ":id"]             sequence of segment descriptors
    re.compile(r"^/u/(?P<id>\\d+)$")  used as is
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeAlias

from veer.errors import ConfigurationError
from veer.routing.params import CONVERTERS, decode_param

PathPattern: TypeAlias = "str | Sequence[str | PathSegment] | re.Pattern[str]"

_PARAM_NAME = re.compile(r"\w+")


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a path pattern.

    Static:    ``users``    (is_param=False)
    Param:     ``:id``      (is_param=True, param_name="id")
    Optional:  ``:id?``     (is_param=True, param_name="id", optional=True)
    Typed:     ``{id:int}`` (is_param=True, param_name="id", param_type="int")
    Wildcard:  ``*``        (is_param=True, param_name=None, param_type="path")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"
    optional: bool = False


def parse_segment(part: str, source: str | None = None) -> PathSegment:
    """Parse a single ``/``-free segment into a ``PathSegment``."""
    where = source if source is not None else part
    if part.startswith("<") and part.endswith(">"):
        msg = (
            f"Path segment {part!r} in {where!r} uses <param> syntax. "
            "Use {param} or :param instead."
        )
        raise ConfigurationError(msg)

    if part == "*":
        return PathSegment(value=part, is_param=True, param_type="path")

    if part.startswith(":") and len(part) > 1:
        name = part[1:]
        optional = name.endswith("?")
        if optional:
            name = name[:-1]
        if not _PARAM_NAME.fullmatch(name):
            msg = f"Invalid parameter name {name!r} in path {where!r}"
            raise ConfigurationError(msg)
        return PathSegment(value=part, is_param=True, param_name=name, optional=optional)

    if part.startswith("{") and part.endswith("}"):
        name, _, param_type = part[1:-1].partition(":")
        param_type = param_type or "str"
        if not _PARAM_NAME.fullmatch(name):
            msg = f"Invalid parameter name {name!r} in path {where!r}"
            raise ConfigurationError(msg)
        if param_type not in CONVERTERS:
            msg = f"Unknown converter {param_type!r} in path {where!r}"
            raise ConfigurationError(msg)
        return PathSegment(value=part, is_param=True, param_name=name, param_type=param_type)

    return PathSegment(value=part)


def parse_path(path: str) -> list[PathSegment]:
    """Parse a pattern string into segments.

    Examples::

        "/users"         -> [PathSegment("users")]
        "/users/:id"     -> [PathSegment("users"), PathSegment(":id", is_param=True, ...)]
        "/"              -> []
    """
    return [parse_segment(part, path) for part in path.split("/") if part]


def validate_path(path: object) -> None:
    """Reject anything that is not a string, a segment sequence, or a regex."""
    if isinstance(path, (str, re.Pattern)):
        return
    if isinstance(path, (list, tuple)) and all(
        isinstance(item, (str, PathSegment)) for item in path
    ):
        return
    msg = f"Invalid path: {path!r}"
    raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class Matcher:
    """A compiled path pattern.

    ``keys[i]`` names the parameter captured by group ``i + 1`` of ``regex``.
    Names may repeat; see ``extract_params`` for how collisions resolve.
    """

    regex: re.Pattern[str]
    keys: tuple[str, ...]

    def match(self, path: str) -> bool:
        return self.regex.search(path) is not None

    def extract_params(self, path: str) -> dict[str, str] | None:
        """Return decoded parameters for *path*, or ``None`` if it doesn't match.

        Captures are applied in order: a defined value overwrites an earlier
        one under the same name, an unmatched optional capture never does.
        Unmatched optional parameters are left out.
        """
        m = self.regex.search(path)
        if m is None:
            return None
        params: dict[str, str] = {}
        for key, raw in zip(self.keys, m.groups(), strict=False):
            value = decode_param(raw)
            if value is not None:
                params[key] = value
        return params


def compile_pattern(
    pattern: PathPattern,
    *,
    strict: bool = False,
    case_sensitive: bool = False,
) -> Matcher:
    """Compile *pattern* into a ``Matcher``.

    A compiled ``re.Pattern`` is used as is; *strict* and *case_sensitive*
    only apply to string and sequence patterns.
    """
    validate_path(pattern)

    if isinstance(pattern, re.Pattern):
        return Matcher(regex=pattern, keys=_regex_keys(pattern))

    if isinstance(pattern, str):
        segments = parse_path(pattern)
        trailing_slash = len(pattern) > 1 and pattern.endswith("/")
    else:
        segments = _sequence_segments(pattern)
        trailing_slash = False

    body, keys = _segments_regex(segments)

    if not strict:
        source = f"^{body}/?$"
    elif not body:
        source = "^/$"
    else:
        source = f"^{body}{'/' if trailing_slash else ''}$"

    flags = 0 if case_sensitive else re.IGNORECASE
    return Matcher(regex=re.compile(source, flags), keys=keys)


def _sequence_segments(items: Sequence[str | PathSegment]) -> list[PathSegment]:
    segments: list[PathSegment] = []
    for item in items:
        if isinstance(item, PathSegment):
            segments.append(item)
        else:
            segments.extend(parse_path(item))
    return segments


def _segments_regex(segments: list[PathSegment]) -> tuple[str, tuple[str, ...]]:
    parts: list[str] = []
    keys: list[str] = []
    wildcards = 0

    for seg in segments:
        if not seg.is_param:
            parts.append("/" + re.escape(seg.value))
            continue

        if seg.param_name is None:
            # Unnamed wildcard, numbered in order of appearance
            keys.append(str(wildcards))
            wildcards += 1
            parts.append("/(.*)")
            continue

        keys.append(seg.param_name)
        fragment = CONVERTERS[seg.param_type]
        if seg.optional:
            parts.append(f"(?:/({fragment}))?")
        else:
            parts.append(f"/({fragment})")

    return "".join(parts), tuple(keys)


def _regex_keys(regex: re.Pattern[str]) -> tuple[str, ...]:
    names = {index: name for name, index in regex.groupindex.items()}
    keys: list[str] = []
    unnamed = 0
    for index in range(1, regex.groups + 1):
        if index in names:
            keys.append(names[index])
        else:
            keys.append(str(unnamed))
            unnamed += 1
    return tuple(keys)
