"""Path matching — pure functions over slash-delimited paths.

A pattern segment is a literal, a wildcard (empty or ``*``), or a named
parameter (``{name}`` or ``:name``). Matching requires equal segment
counts and runs in a single left-to-right pass with no backtracking.
"""

from collections.abc import Sequence
from urllib.parse import unquote

from tandem.errors import ConfigurationError
from tandem.routing.route import PathSegment, SegmentKind

WILDCARD = "*"
PARAM_PREFIX = ":"


def split_path(path: str) -> list[str]:
    """Split *path* into segments after trimming leading/trailing slashes.

    The root path has zero segments::

        "/"              -> []
        "/users/42"      -> ["users", "42"]
        "/a//b"          -> ["a", "", "b"]
    """
    trimmed = path.strip("/")
    if not trimmed:
        return []
    return trimmed.split("/")


def parse_segment(part: str, pattern: str = "") -> PathSegment:
    """Classify a single pattern segment.

    Raises ``ConfigurationError`` for a parameter marker without a name
    or an unbalanced brace.
    """
    if part in ("", WILDCARD):
        return PathSegment(value=part, kind=SegmentKind.WILDCARD)

    if part.startswith("{") or part.endswith("}"):
        name = part[1:-1] if part.startswith("{") and part.endswith("}") else ""
        if not name or "{" in name or "}" in name:
            msg = f"Invalid parameter segment {part!r} in route pattern {pattern!r}"
            raise ConfigurationError(msg)
        return PathSegment(value=part, kind=SegmentKind.PARAM, param_name=name)

    if part.startswith(PARAM_PREFIX):
        name = part[len(PARAM_PREFIX):]
        if not name:
            msg = f"Parameter marker without a name in route pattern {pattern!r}"
            raise ConfigurationError(msg)
        return PathSegment(value=part, kind=SegmentKind.PARAM, param_name=name)

    return PathSegment(value=part)


def parse_pattern(pattern: str) -> tuple[PathSegment, ...]:
    """Parse a route pattern into segments.

    Examples::

        "/users"          -> (PathSegment("users"),)
        "/users/{id}"     -> (PathSegment("users"), PathSegment("{id}", PARAM, "id"))
        "/users/:id"      -> (PathSegment("users"), PathSegment(":id", PARAM, "id"))
        "/files/*/raw"    -> (..., PathSegment("*", WILDCARD), ...)

    Raises ``ConfigurationError`` if a parameter name repeats.
    """
    segments = tuple(parse_segment(part, pattern) for part in split_path(pattern))
    names = [s.param_name for s in segments if s.param_name is not None]
    if len(names) != len(set(names)):
        msg = f"Duplicate parameter name in route pattern {pattern!r}"
        raise ConfigurationError(msg)
    return segments


def match_segments(parts: Sequence[str], segments: Sequence[PathSegment]) -> bool:
    """Match already-split request *parts* against parsed *segments*.

    *parts* are the percent-encoded wire segments. Literals compare against
    the decoded segment, so ``caf%C3%A9`` matches a ``café`` literal.
    """
    if len(parts) != len(segments):
        return False
    for part, segment in zip(parts, segments, strict=True):
        if segment.kind is SegmentKind.LITERAL and segment.value != unquote(part):
            return False
    return True


def extract_segment_params(
    parts: Sequence[str],
    segments: Sequence[PathSegment],
) -> dict[str, str]:
    """Bind each parameter segment to its request part.

    Each value is percent-decoded once, so an encoded ``%2F`` stays inside
    a single parameter and ``%2541`` binds as ``%41``.
    """
    return {
        segment.param_name: unquote(part)
        for part, segment in zip(parts, segments, strict=False)
        if segment.param_name is not None
    }


def match(request_path: str, route_pattern: str) -> bool:
    """Return True if *request_path* matches *route_pattern*.

    Literal comparison is case-sensitive. Parameters and wildcards match
    any single segment.
    """
    return match_segments(split_path(request_path), parse_pattern(route_pattern))


def extract_params(request_path: str, route_pattern: str) -> dict[str, str]:
    """Return ``{name: value}`` for every parameter segment in *route_pattern*.

    Non-parameter segments contribute nothing::

        extract_params("/users/42", "/users/{id}")  -> {"id": "42"}
    """
    return extract_segment_params(split_path(request_path), parse_pattern(route_pattern))
