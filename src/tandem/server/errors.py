"""Error shaping for the request pipeline.

Maps HTTPError exceptions and unexpected handler failures to the two
generic response shapes. Failure detail is logged, never rendered.
"""

import logging

from tandem.errors import HandlerFailure, HTTPError
from tandem.http.request import Request
from tandem.http.response import Response

logger = logging.getLogger("tandem.server")

INTERNAL_ERROR_BODY = "Internal Server Error"


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Map an HTTPError to a Response carrying its status, detail, and headers."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    resp = Response(body=exc.detail or str(exc.status), status=exc.status)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


def handle_internal_error(exc: Exception, request: Request) -> Response:
    """Log an unexpected failure with its traceback and answer 500."""
    failure = HandlerFailure(request.method, request.path, exc)
    logger.error("Handler error: %s", failure, exc_info=exc)
    return Response(body=INTERNAL_ERROR_BODY, status=500)
