"""Ordered route table.

Routes are appended during setup and frozen before the app serves its
first request. Registration order is dispatch order.
"""

import logging
from collections.abc import Callable, Iterator
from typing import Any

from tandem.routing.matcher import parse_pattern
from tandem.routing.route import Method, Route

logger = logging.getLogger("tandem.routing")


class RouteTable:
    """Ordered collection of ``(method, pattern, handler)`` routes.

    Usage::

        table = RouteTable()
        table.add("GET", "/users/{id}", get_user)
        table.freeze()
        table.allowed_methods()  # ["GET", "OPTIONS"]
    """

    __slots__ = ("_frozen", "_methods", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._methods: set[Method] = set()
        self._frozen = False

    def add(
        self,
        method: Method | str,
        path: str,
        handler: Callable[..., Any],
        *,
        name: str | None = None,
    ) -> Route:
        """Register a route. Must be called before ``freeze()``."""
        if self._frozen:
            msg = "Cannot add routes after the route table is frozen."
            raise RuntimeError(msg)

        method = Method.parse(method)
        route = Route(
            method=method,
            path=path,
            handler=handler,
            segments=parse_pattern(path),
            name=name,
        )
        self._routes.append(route)
        self._methods.add(method)
        logger.info("Mounting endpoint: %s %s", method, path)
        return route

    def freeze(self) -> None:
        """Freeze the table. No more routes can be added."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def routes(self) -> tuple[Route, ...]:
        """All routes, in registration order."""
        return tuple(self._routes)

    def methods(self) -> frozenset[str]:
        """Every method ever registered."""
        return frozenset(m.value for m in self._methods)

    def allowed_methods(self) -> list[str]:
        """Registered methods plus ``OPTIONS``, sorted and de-duplicated."""
        return sorted(self.methods() | {Method.OPTIONS.value})

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)
