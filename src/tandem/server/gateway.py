"""Serverless adapter — gateway proxy events in, gateway response dicts out.

Understands both API Gateway payload shapes:

- REST API / payload v1: ``httpMethod``, ``path``, ``headers``,
  ``multiValueHeaders``, ``queryStringParameters``,
  ``multiValueQueryStringParameters``
- HTTP API / payload v2: ``requestContext.http.method``, ``rawPath``,
  ``rawQueryString``, ``cookies``

The gateway has already parsed everything, so building the request has no
I/O side effects.
"""

from __future__ import annotations

import base64
import binascii
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from tandem.errors import MalformedRequest
from tandem.http.headers import Headers
from tandem.http.query import QueryParams
from tandem.http.request import Request
from tandem.http.response import Response

if TYPE_CHECKING:
    from tandem.app import App

logger = logging.getLogger("tandem.server")

type GatewayEvent = Mapping[str, Any]


def _is_v2(event: GatewayEvent) -> bool:
    return event.get("version") == "2.0" or "rawPath" in event


def _event_method(event: GatewayEvent) -> str:
    method = event.get("httpMethod")
    if not method:
        method = (event.get("requestContext") or {}).get("http", {}).get("method")
    return (method or "GET").upper()


def _event_path(event: GatewayEvent) -> str:
    if _is_v2(event):
        return event.get("rawPath") or "/"
    return event.get("path") or "/"


def _event_headers(event: GatewayEvent) -> Headers:
    headers = Headers.from_mapping(event.get("headers"), event.get("multiValueHeaders"))
    cookies = event.get("cookies")
    if cookies and "cookie" not in headers:
        # v2 strips Cookie out of the header map into a list
        pairs = [(name, value) for name in headers for value in headers.get_list(name)]
        pairs.append(("cookie", "; ".join(cookies)))
        headers = Headers(pairs)
    return headers


def _event_query(event: GatewayEvent) -> QueryParams:
    if _is_v2(event) and event.get("rawQueryString"):
        return QueryParams.from_string(event["rawQueryString"])
    return QueryParams.from_mapping(
        event.get("queryStringParameters"),
        event.get("multiValueQueryStringParameters"),
    )


def decode_body(event: GatewayEvent) -> bytes:
    """Return the event body as bytes.

    Raises ``MalformedRequest`` if ``isBase64Encoded`` is set and the
    payload is not valid base64.
    """
    body = event.get("body")
    if not body:
        return b""
    if event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as exc:
            msg = "Gateway body is flagged base64 but does not decode"
            raise MalformedRequest(msg) from exc
    return body.encode("utf-8")


def request_from_event(event: GatewayEvent) -> Request:
    """Build a canonical ``Request`` from a gateway proxy event.

    A body that cannot be decoded is logged and replaced with ``b""``.
    """
    method = _event_method(event)
    path = _event_path(event)
    try:
        body = decode_body(event)
    except MalformedRequest as exc:
        logger.warning("Malformed body for %s %s: %s", method, path, exc)
        body = b""

    return Request(
        method=method,
        path=path,
        body=body,
        query=_event_query(event),
        headers=_event_headers(event),
    )


def _grouped_headers(response: Response) -> dict[str, list[str]]:
    grouped: dict[str, list[str]] = {}
    for name, value in response.header_pairs:
        grouped.setdefault(name, []).append(value)
    return grouped


def _encode_body(response: Response) -> tuple[str, bool]:
    """Return the proxy body and its ``isBase64Encoded`` flag.

    Text bodies go out as-is. Binary bodies are base64-encoded, since the
    proxy integration only carries strings.
    """
    if isinstance(response.body, bytes):
        return base64.b64encode(response.body).decode("ascii"), True
    return response.body, False


def response_to_gateway(response: Response, *, version: str = "1.0") -> dict[str, Any]:
    """Translate a ``Response`` into the gateway's proxy response shape.

    Payload v1 carries repeated header names in ``multiValueHeaders``.
    Payload v2 has no such field: ``Set-Cookie`` values move to ``cookies``
    and other repeated names are comma-joined.
    """
    body, is_base64 = _encode_body(response)
    grouped = _grouped_headers(response)

    if version == "2.0":
        cookies: list[str] = []
        headers: dict[str, str] = {}
        for name, values in grouped.items():
            if name.lower() == "set-cookie":
                cookies.extend(values)
            else:
                headers[name] = ", ".join(values)
        result: dict[str, Any] = {
            "statusCode": response.status,
            "headers": headers,
            "body": body,
            "isBase64Encoded": is_base64,
        }
        if cookies:
            result["cookies"] = cookies
        return result

    return {
        "statusCode": response.status,
        "headers": response.header_map,
        "multiValueHeaders": grouped,
        "body": body,
        "isBase64Encoded": is_base64,
    }


class GatewayHandler:
    """Callable serverless entry point: ``(event, context) -> dict``.

    Usage (module-level handler referenced by the function config)::

        app = App(AppConfig.from_env())
        handler = GatewayHandler(app)
    """

    __slots__ = ("app",)

    def __init__(self, app: App) -> None:
        self.app = app

    def __call__(self, event: GatewayEvent, context: object = None) -> dict[str, Any]:
        request = request_from_event(event)
        logger.info("Received request: Method=%s Path=%s", request.method, request.path)
        response = self.app.handle(request)
        return response_to_gateway(response, version="2.0" if _is_v2(event) else "1.0")
