"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    def mw(request: Request, next: Next) -> Response

Built-in:
    CORSMiddleware -- Cross-Origin Resource Sharing headers (local mode)
    options_response -- Preflight responder shared by both modes
"""

from tandem.middleware.cors import CORSConfig, CORSMiddleware, options_response
from tandem.middleware.protocol import Middleware, Next

__all__ = [
    "CORSConfig",
    "CORSMiddleware",
    "Middleware",
    "Next",
    "options_response",
]
