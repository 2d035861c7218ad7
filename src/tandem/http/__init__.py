"""Canonical request/response types shared by both execution modes."""

from tandem.http.headers import Headers
from tandem.http.query import QueryParams
from tandem.http.request import Request
from tandem.http.response import Response

__all__ = ["Headers", "QueryParams", "Request", "Response"]
