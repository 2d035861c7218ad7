"""Route, PathSegment, and RouteMatch frozen dataclasses."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Any

from tandem.errors import ConfigurationError


class Method(StrEnum):
    """HTTP methods a route may be registered for."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    OPTIONS = "OPTIONS"

    @classmethod
    def parse(cls, value: str) -> Method:
        """Normalize *value* (any case) to a ``Method``.

        Raises ``ConfigurationError`` for anything outside the enum.
        """
        try:
            return cls(value.upper())
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            msg = f"Unsupported HTTP method {value!r}. Expected one of: {allowed}"
            raise ConfigurationError(msg) from None


class SegmentKind(Enum):
    LITERAL = "literal"
    WILDCARD = "wildcard"
    PARAM = "param"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Literal:   ``users``   (kind=LITERAL)
    Wildcard:  ``*`` or an empty segment (kind=WILDCARD)
    Param:     ``{id}`` or ``:id`` (kind=PARAM, param_name="id")
    """

    value: str
    kind: SegmentKind = SegmentKind.LITERAL
    param_name: str | None = None

    @property
    def is_param(self) -> bool:
        return self.kind is SegmentKind.PARAM


@dataclass(frozen=True, slots=True)
class Route:
    """A registered route. Owns its handler reference directly.

    Created by ``RouteTable.add()``; immutable for the process lifetime.
    """

    method: Method
    path: str
    handler: Callable[..., Any]
    segments: tuple[PathSegment, ...]
    name: str | None = None

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(s.param_name for s in self.segments if s.param_name is not None)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful dispatch."""

    route: Route
    path_params: dict[str, str]
