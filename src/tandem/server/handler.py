"""Request pipeline — the one path every request takes, in either mode.

Adapters build a canonical ``Request``, call ``handle_request()``, and
translate the returned ``Response`` into their transport's shape.
"""

import logging
from collections.abc import Callable, Sequence

from tandem.errors import HTTPError
from tandem.http.request import Request
from tandem.http.response import Response
from tandem.middleware.cors import CORSConfig, options_response
from tandem.middleware.protocol import Middleware, Next
from tandem.routing.dispatcher import dispatch
from tandem.routing.route import Method, RouteMatch
from tandem.routing.table import RouteTable
from tandem.server.errors import handle_http_error, handle_internal_error
from tandem.server.negotiation import negotiate

logger = logging.getLogger("tandem.server")


def handle_request(
    request: Request,
    *,
    table: RouteTable,
    middleware: Sequence[Middleware] = (),
    cors: CORSConfig | None = None,
) -> Response:
    """Process a single request through preflight, middleware, and dispatch.

    Never raises: route misses become 404, ``HTTPError`` keeps its status,
    and anything else is logged and answered with a generic 500.
    """
    # Preflight is answered before the route table is consulted
    if request.method == Method.OPTIONS:
        logger.debug("Responding to OPTIONS %s", request.path)
        return options_response(table, cors)

    def dispatch_request(req: Request) -> Response:
        match = dispatch(table, req.method, req.path)
        return _invoke_handler(match, req)

    # Wrap middleware around the dispatch
    handler: Next = dispatch_request
    for mw in reversed(middleware):
        handler = _chain(mw, handler)

    try:
        return handler(request)
    except HTTPError as exc:
        return handle_http_error(exc, request)
    except Exception as exc:
        return handle_internal_error(exc, request)


def _chain(mw: Middleware, next_handler: Next) -> Callable[[Request], Response]:
    def call(req: Request) -> Response:
        return mw(req, next_handler)

    return call


def _invoke_handler(match: RouteMatch, request: Request) -> Response:
    """Call the matched handler with the request bound to its path params."""
    route = match.route
    logger.debug("Handling request for: %s %s", route.method, route.path)
    result = route.handler(request.with_path_params(match.path_params))
    return negotiate(result)
