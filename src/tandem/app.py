"""Tandem application class.

Mutable during setup (route registration, middleware).
Frozen when ``serve()`` is called or the first request arrives.
"""

import logging
import threading
from collections.abc import Callable
from typing import Any

from tandem._internal.asgi import Receive, Scope, Send
from tandem.config import AppConfig, Mode
from tandem.http.request import Request
from tandem.http.response import Response
from tandem.logging import configure_logging
from tandem.middleware.cors import CORSMiddleware
from tandem.middleware.protocol import Middleware
from tandem.routing.route import Method, Route
from tandem.routing.table import RouteTable
from tandem.server.asgi import ASGIAdapter
from tandem.server.gateway import GatewayHandler
from tandem.server.handler import handle_request

logger = logging.getLogger("tandem.app")

type Handler = Callable[[Request], Any]


class App:
    """The tandem application.

    One route table, two execution modes. The mode comes from
    ``config.mode`` and is fixed for the lifetime of the object::

        app = App(AppConfig.from_env())

        @app.route("/users/{id}")
        def get_user(request):
            return {"id": request.path_params["id"]}

        app.serve()

    Thread safety:
        Registration is single-threaded (decorators at import time).
        The freeze transition uses a Lock + double-check so exactly one
        thread freezes the table, even when the server's worker threads
        race on the first request.
    """

    __slots__ = (
        "_asgi",
        "_freeze_lock",
        "_frozen",
        "_gateway",
        "_middleware",
        "_middleware_list",
        "_table",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._table = RouteTable()
        self._middleware_list: list[Middleware] = []
        self._middleware: tuple[Middleware, ...] = ()
        self._frozen = False
        self._freeze_lock = threading.Lock()
        self._asgi = ASGIAdapter(self)
        self._gateway = GatewayHandler(self)

    @property
    def mode(self) -> Mode:
        return self.config.mode

    @property
    def table(self) -> RouteTable:
        return self._table

    # -- Route registration --

    def mount_endpoint(
        self,
        method: Method | str,
        path: str,
        handler: Handler,
        *,
        name: str | None = None,
    ) -> Route:
        """Register *handler* for *method* and *path*.

        *path* may use ``{name}`` or ``:name`` parameter segments. Must be
        called before ``serve()``.
        """
        self._check_not_frozen()
        return self._table.add(method, path, handler, name=name)

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            path: URL path pattern. Use ``{param}`` or ``:param`` segments.
            methods: HTTP methods. Defaults to ``["GET"]``.
            name: Optional route name, shown by ``tandem routes``.
        """

        def decorator(func: Handler) -> Handler:
            for method in methods or ["GET"]:
                self.mount_endpoint(method, path, func, name=name)
            return func

        return decorator

    def allowed_methods(self) -> list[str]:
        """Every registered method plus ``OPTIONS``, sorted."""
        return self._table.allowed_methods()

    # -- Middleware --

    def add_middleware(self, middleware: Middleware) -> None:
        """Add a middleware to the pipeline. Runs in both modes."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    # -- Request handling --

    def handle(self, request: Request) -> Response:
        """Run *request* through the pipeline. Mode-independent."""
        self.freeze()
        return handle_request(
            request,
            table=self._table,
            middleware=self._middleware,
            cors=self.config.cors,
        )

    def lambda_handler(self, event: dict[str, Any], context: object = None) -> dict[str, Any]:
        """Serverless entry point: gateway event in, gateway response out."""
        return self._gateway(event, context)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point for the local listener."""
        await self._asgi(scope, receive, send)

    # -- Server --

    def serve(self, port: int | None = None, host: str | None = None) -> None:
        """Start the configured mode.

        Local mode binds a listener and blocks until the process exits.
        Serverless mode only freezes the table and returns: the gateway
        runtime drives invocations through ``lambda_handler``.
        """
        configure_logging(self.config.log_level, self.config.log_format)
        self.freeze()

        if self.mode is Mode.SERVERLESS:
            logger.info("Running in serverless mode")
            return

        from tandem.server.local import run_local_server

        logger.info("Running in local server mode")
        run_local_server(
            self,
            host if host is not None else self.config.host,
            port if port is not None else self.config.port,
        )

    # -- Internal --

    def freeze(self) -> None:
        """Freeze routes and middleware. Idempotent and thread safe."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """MUST only be called while holding _freeze_lock."""
        self._table.freeze()

        middleware = list(self._middleware_list)
        if self.mode is Mode.LOCAL:
            middleware.insert(0, CORSMiddleware.for_table(self._table, self.config.cors))
        self._middleware = tuple(middleware)

        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes and middleware before calling app.serve()."
            )
            raise RuntimeError(msg)
