"""Local adapter — translates ASGI scope/messages to tandem types.

The only component that touches raw ASGI directly. Reads the body,
collapses headers and query string into mappings, runs the synchronous
pipeline on a worker thread, and sends the Response back through
``send()``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import anyio.to_thread

from tandem._internal.asgi import Receive, Scope, Send
from tandem.errors import MalformedRequest
from tandem.http.headers import Headers
from tandem.http.query import QueryParams
from tandem.http.request import Request
from tandem.http.response import Response

if TYPE_CHECKING:
    from tandem.app import App

logger = logging.getLogger("tandem.server")


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def read_body(receive: Receive) -> bytes:
    """Drain ``http.request`` messages into one bytes object.

    Raises ``MalformedRequest`` if the client disconnects mid-body.
    """
    chunks: list[bytes] = []
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            msg = "Client disconnected before the request body was read"
            raise MalformedRequest(msg)
        chunks.append(message.get("body", b""))
        if not message.get("more_body", False):
            return b"".join(chunks)


def _wire_path(scope: Scope) -> str:
    raw_path = scope.get("raw_path")
    if raw_path:
        return raw_path.decode("latin-1")
    return scope["path"]


async def request_from_scope(scope: Scope, receive: Receive) -> Request:
    """Build a canonical ``Request`` from an ASGI HTTP scope.

    The path comes from ``raw_path`` when the server provides it, so the
    matcher sees the same percent-encoded form the gateway delivers and
    decodes parameter values exactly once. An unreadable body is logged
    and replaced with ``b""``.
    """
    method = scope["method"]
    path = _wire_path(scope)
    try:
        body = await read_body(receive)
    except MalformedRequest as exc:
        logger.warning("Malformed body for %s %s: %s", method, path, exc)
        body = b""

    return Request(
        method=method,
        path=path,
        body=body,
        query=QueryParams.from_string(scope.get("query_string", b"")),
        headers=Headers.from_asgi(scope.get("headers", ())),
    )


async def send_response(response: Response, send: Send) -> None:
    """Translate a Response into ASGI send() calls.

    Every handler-set header pair is sent, repeated names included,
    alongside content-type and content-length.
    """
    raw_headers: list[tuple[bytes, bytes]] = []
    for name, value in response.header_pairs:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    body = response.body_bytes if _body_allowed(response.status) else b""
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )


class ASGIAdapter:
    """ASGI 3.0 application wrapping a tandem ``App``.

    Handles the lifespan protocol (freezing the app at startup) and
    delegates HTTP scopes to the shared request pipeline.
    """

    __slots__ = ("app",)

    def __init__(self, app: App) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            return

        request = await request_from_scope(scope, receive)
        # Handlers are synchronous; keep them off the event loop
        response = await anyio.to_thread.run_sync(self.app.handle, request)
        await send_response(response, send)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the route table at startup, before the first HTTP request.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self.app.freeze()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
