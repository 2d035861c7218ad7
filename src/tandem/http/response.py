"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response. Immutable by convention,
built incrementally by design.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    Construct with a body, then chain ``.with_*()`` calls to set status
    and headers. Each call returns a new ``Response``::

        Response("created", status=201).with_header("Location", "/items/7")

    ``body`` is text, or ``bytes`` for binary payloads. Repeated header
    names (``Set-Cookie``, ``Vary``) are kept as separate pairs.
    """

    body: str | bytes = ""
    status: int = 200
    headers: tuple[tuple[str, str], ...] = ()
    content_type: str = "text/plain; charset=utf-8"

    # -- Constructors --

    @classmethod
    def json(cls, payload: Any, status: int = 200) -> Response:
        """Serialize *payload* to a JSON response."""
        return cls(
            body=json_module.dumps(payload, ensure_ascii=False),
            status=status,
            content_type="application/json",
        )

    # -- Chainable transformations --

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Return a new Response with additional headers."""
        new = tuple(headers.items())
        return replace(self, headers=(*self.headers, *new))

    def with_content_type(self, content_type: str) -> Response:
        """Return a new Response with a different content type."""
        return replace(self, content_type=content_type)

    # -- Accessors --

    @property
    def header_pairs(self) -> tuple[tuple[str, str], ...]:
        """Every header in order, ``Content-Type`` first. Repeated names are kept."""
        content_type = self.content_type
        pairs: list[tuple[str, str]] = []
        for name, value in self.headers:
            if name.lower() == "content-type":
                content_type = value
            else:
                pairs.append((name, value))
        return (("Content-Type", content_type), *pairs)

    @property
    def header_map(self) -> dict[str, str]:
        """Headers as a dict, ``Content-Type`` first. Later duplicates win."""
        return dict(self.header_pairs)

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes. Text bodies are UTF-8 encoded."""
        if isinstance(self.body, bytes):
            return self.body
        return self.body.encode("utf-8")
