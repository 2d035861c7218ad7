"""Immutable canonical HTTP request.

Both execution modes build the same ``Request``: the body is already
read, headers and query parameters are collapsed into mappings, and
path parameters are bound by the dispatcher.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, field, replace
from typing import Any

from tandem.errors import MalformedRequest
from tandem.http.headers import Headers
from tandem.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Constructed fresh per incoming request by an adapter and consumed
    once by a handler. Nothing retains it afterwards.
    """

    method: str
    path: str
    body: bytes = b""
    query: QueryParams = field(default_factory=QueryParams)
    headers: Headers = field(default_factory=Headers)
    path_params: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())

    # -- Computed properties --

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Request path with a re-encoded query string."""
        if not self.query:
            return self.path
        from urllib.parse import urlencode

        pairs = [(key, value) for key in self.query for value in self.query.get_list(key)]
        return f"{self.path}?{urlencode(pairs)}"

    # -- Body access --

    def text(self) -> str:
        """Decode the body as UTF-8.

        Raises ``MalformedRequest`` if the bytes are not valid UTF-8.
        """
        try:
            return self.body.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = "Request body is not valid UTF-8"
            raise MalformedRequest(msg) from exc

    def json(self) -> Any:
        """Parse the body as JSON.

        Raises ``MalformedRequest`` on invalid JSON.
        """
        try:
            return json_module.loads(self.text())
        except json_module.JSONDecodeError as exc:
            msg = f"Request body is not valid JSON: {exc.msg}"
            raise MalformedRequest(msg) from exc

    # -- Derivation --

    def with_path_params(self, path_params: dict[str, str]) -> Request:
        """Return a copy bound to the matched route's parameters."""
        return replace(self, path_params=dict(path_params))
