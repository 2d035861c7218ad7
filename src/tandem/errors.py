"""Tandem exception hierarchy.

Shared across the route table, dispatcher, adapters, and app so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class TandemError(Exception):
    """Base for all tandem-specific errors."""


class ConfigurationError(TandemError):
    """Raised when app configuration or route registration is invalid.

    Typically surfaces at import time, when routes are mounted.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(TandemError):
    """An error that maps directly to an HTTP status code.

    Raised by the dispatcher or by handlers. The request pipeline catches
    these and renders ``detail`` as the response body.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 (conventional name in web frameworks)
    """404: no registered route matched the request method and path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class HandlerFailure(TandemError):
    """A user handler raised an unexpected exception.

    Carries the request method and path for logging. Never rendered to
    the client; the pipeline answers with a generic 500 instead.
    """

    def __init__(self, method: str, path: str, cause: BaseException) -> None:
        self.method = method
        self.path = path
        self.cause = cause
        super().__init__(f"Handler for {method} {path} failed: {cause!r}")


class MalformedRequest(TandemError):
    """The request body could not be read or decoded.

    Adapters treat this as best-effort: they log it and continue with an
    empty body rather than failing the request.
    """
