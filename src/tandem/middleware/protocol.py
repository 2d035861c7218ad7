"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    def my_mw(request: Request, next: Next) -> Response: ...

No base class required. The pipeline checks the shape, not the lineage.
Middleware runs synchronously in both execution modes; the local adapter
moves the whole pipeline onto a worker thread.
"""

from collections.abc import Callable
from typing import Protocol

from tandem.http.request import Request
from tandem.http.response import Response

# The next handler in the middleware chain
type Next = Callable[[Request], Response]


class Middleware(Protocol):
    """Protocol for tandem middleware.

    Accepts both functions and callable objects::

        # Function middleware
        def timing(request: Request, next: Next) -> Response:
            start = time.monotonic()
            response = next(request)
            elapsed = time.monotonic() - start
            return response.with_header("X-Time", f"{elapsed:.3f}")

        # Class middleware
        class RequestId:
            def __call__(self, request: Request, next: Next) -> Response:
                ...
    """

    def __call__(self, request: Request, next: Next) -> Response: ...
