"""Tests for tandem.errors and the pipeline's error shaping."""

import logging

import pytest

from tandem.errors import (
    ConfigurationError,
    HandlerFailure,
    HTTPError,
    MalformedRequest,
    NotFound,
    TandemError,
)
from tandem.http.request import Request
from tandem.server.errors import handle_http_error, handle_internal_error


class TestHierarchy:
    def test_all_derive_from_base(self) -> None:
        for exc_type in (ConfigurationError, HTTPError, NotFound, MalformedRequest):
            assert issubclass(exc_type, TandemError)

    def test_not_found_defaults(self) -> None:
        exc = NotFound()
        assert exc.status == 404
        assert exc.detail == "Not Found"
        assert str(exc) == "404: Not Found"

    def test_http_error_str_without_detail(self) -> None:
        assert str(HTTPError(status=503)) == "503"

    def test_handler_failure_carries_context(self) -> None:
        cause = KeyError("x")
        failure = HandlerFailure("GET", "/a", cause)
        assert failure.cause is cause
        assert "GET /a" in str(failure)


class TestErrorShaping:
    def test_http_error_response(self) -> None:
        request = Request(method="GET", path="/teapot")
        exc = HTTPError(status=418, detail="short and stout", headers=(("X-Tea", "earl"),))
        response = handle_http_error(exc, request)
        assert response.status == 418
        assert response.body == "short and stout"
        assert ("X-Tea", "earl") in response.headers

    def test_http_error_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        request = Request(method="GET", path="/gone")
        with caplog.at_level(logging.DEBUG, logger="tandem.server"):
            handle_http_error(HTTPError(status=410, detail="Gone"), request)
        assert "410 GET /gone: Gone" in caplog.text

    def test_http_error_without_detail_uses_status(self) -> None:
        response = handle_http_error(HTTPError(status=409), Request(method="GET", path="/"))
        assert response.body == "409"

    def test_internal_error_hides_detail(self, caplog: pytest.LogCaptureFixture) -> None:
        request = Request(method="GET", path="/boom")
        with caplog.at_level(logging.ERROR, logger="tandem.server"):
            response = handle_internal_error(RuntimeError("token=abc"), request)
        assert response.status == 500
        assert response.body == "Internal Server Error"
        assert "token=abc" in caplog.text
        assert "GET /boom" in caplog.text

    async def test_handler_raised_http_error_keeps_status(self) -> None:
        from tandem.app import App
        from tandem.testing import TestClient

        app = App()

        @app.route("/gone")
        def gone(request: Request) -> str:
            raise HTTPError(status=410, detail="Gone")

        async with TestClient(app) as client:
            response = await client.get("/gone")
            assert response.status == 410
            assert response.body == "Gone"
