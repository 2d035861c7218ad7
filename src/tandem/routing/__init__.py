"""Routing — ordered route table, path matcher, and dispatcher.

Routes are registered during setup and frozen before the app serves.
"""

from tandem.routing.dispatcher import dispatch
from tandem.routing.matcher import extract_params, match
from tandem.routing.route import Method, PathSegment, Route, RouteMatch, SegmentKind
from tandem.routing.table import RouteTable

__all__ = [
    "Method",
    "PathSegment",
    "Route",
    "RouteMatch",
    "RouteTable",
    "SegmentKind",
    "dispatch",
    "extract_params",
    "match",
]
