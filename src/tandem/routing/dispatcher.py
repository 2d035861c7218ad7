"""Dispatcher — first-registered-wins linear scan over the route table."""

import logging

from tandem.errors import NotFound
from tandem.routing.matcher import extract_segment_params, match_segments, split_path
from tandem.routing.route import RouteMatch
from tandem.routing.table import RouteTable

logger = logging.getLogger("tandem.routing")


def dispatch(table: RouteTable, method: str, path: str) -> RouteMatch:
    """Find the first route matching *method* and *path*.

    Method comparison is case-insensitive; path comparison delegates to
    the matcher. Overlapping patterns are not ranked: registration order
    decides.

    Raises ``NotFound`` if no route matches.
    """
    method = method.upper()
    parts = split_path(path)
    for route in table:
        if route.method != method:
            continue
        if match_segments(parts, route.segments):
            return RouteMatch(
                route=route,
                path_params=extract_segment_params(parts, route.segments),
            )

    logger.debug("No handler found for: %s %s", method, path)
    raise NotFound
