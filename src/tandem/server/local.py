"""Local listener.

Starts a pounce ASGI server with the live tandem App object. Socket
binding, connection concurrency, and keep-alive belong to pounce.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from tandem._internal.asgi import Receive, Scope, Send

logger = logging.getLogger("tandem.server")


def run_local_server(
    app: Callable[[Scope, Receive, Send], Awaitable[None]],
    host: str,
    port: int,
    *,
    workers: int = 1,
) -> None:
    """Start a pounce server with the given ASGI callable and block.

    Pounce's ``run()`` takes an import string (e.g., ``"myapp:app"``),
    but tandem has a live ``App`` object. We use ``pounce.Server``
    directly with the ASGI callable.

    Args:
        app: ASGI callable (a tandem App instance).
        host: Bind host address.
        port: Bind port number.
        workers: Worker count handed to pounce.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(host=host, port=port, workers=workers)
    logger.info("Server running on %s:%d", host, port)
    Server(config, app).run()
