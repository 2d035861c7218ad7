"""CORS: the preflight responder and the local-mode middleware.

Both derive ``Access-Control-Allow-Methods`` from the same route-table
computation, so preflight answers are identical in local and serverless
mode.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from tandem.http.request import Request
from tandem.http.response import Response
from tandem.middleware.protocol import Next
from tandem.routing.route import Method
from tandem.routing.table import RouteTable


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """CORS configuration.

    Defaults mirror a public API: any origin, JSON and bearer-token
    headers, no credentials::

        CORSConfig(
            allow_origins=("https://example.com",),
            allow_credentials=True,
        )
    """

    allow_origins: tuple[str, ...] = ("*",)
    allow_headers: tuple[str, ...] = ("Content-Type", "Authorization")
    expose_headers: tuple[str, ...] = ("Content-Length",)
    allow_credentials: bool = False
    # Seconds a browser may cache a preflight answer; None omits the header
    max_age: int | None = 43200


def sort_methods(methods: Iterable[str]) -> list[str]:
    """Upper-case, de-duplicate, add ``OPTIONS``, and sort lexicographically."""
    return sorted({m.upper() for m in methods} | {Method.OPTIONS.value})


def options_response(table: RouteTable, config: CORSConfig | None = None) -> Response:
    """Answer a preflight ``OPTIONS`` request.

    Always status 200, whatever the route table holds::

        Access-Control-Allow-Origin: *
        Access-Control-Allow-Methods: GET, OPTIONS, POST
        Access-Control-Allow-Headers: Content-Type, Authorization
        Access-Control-Max-Age: 43200

    Shared by both modes, so the answer never depends on the transport.
    """
    cfg = config or CORSConfig()
    response = Response(status=200).with_headers(
        {
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": ", ".join(table.allowed_methods()),
            "Access-Control-Allow-Headers": ", ".join(cfg.allow_headers),
        }
    )
    if cfg.max_age is not None:
        response = response.with_header("Access-Control-Max-Age", str(cfg.max_age))
    return response


class CORSMiddleware:
    """Adds CORS headers to actual (non-preflight) cross-origin responses.

    Handles:
    - Requests without ``Origin`` pass through untouched
    - Methods outside the registered set pass through without CORS headers
    - Disallowed origins pass through without CORS headers
    - Wildcard origins (``"*"``) when credentials are disabled
    - Origin echo plus ``Vary: Origin`` otherwise

    Preflight requests never reach this middleware; the pipeline answers
    them with ``options_response()`` first.
    """

    __slots__ = ("allow_methods", "config")

    def __init__(self, allow_methods: Iterable[str], config: CORSConfig | None = None) -> None:
        self.allow_methods = tuple(sort_methods(allow_methods))
        self.config = config or CORSConfig()

    @classmethod
    def for_table(cls, table: RouteTable, config: CORSConfig | None = None) -> CORSMiddleware:
        """Configure from the route table's registered methods."""
        return cls(table.methods(), config)

    def _is_allowed_origin(self, origin: str) -> bool:
        if "*" in self.config.allow_origins:
            return True
        return origin in self.config.allow_origins

    def _add_cors_headers(self, response: Response, origin: str) -> Response:
        cfg = self.config

        if "*" in cfg.allow_origins and not cfg.allow_credentials:
            response = response.with_header("Access-Control-Allow-Origin", "*")
        else:
            response = response.with_header("Access-Control-Allow-Origin", origin)
            response = response.with_header("Vary", "Origin")

        if cfg.allow_credentials:
            response = response.with_header("Access-Control-Allow-Credentials", "true")

        if cfg.expose_headers:
            response = response.with_header(
                "Access-Control-Expose-Headers",
                ", ".join(cfg.expose_headers),
            )

        return response

    def __call__(self, request: Request, next: Next) -> Response:
        origin = request.headers.get("origin")

        # Not a CORS request, or not one we answer
        if origin is None or not self._is_allowed_origin(origin):
            return next(request)

        if request.method not in self.allow_methods:
            return next(request)

        response = next(request)
        return self._add_cors_headers(response, origin)
