"""Testing utilities for tandem applications.

Provides a test client for the local (ASGI) adapter and gateway event
builders for the serverless adapter.

Usage::

    from tandem.testing import TestClient, make_gateway_event

    async with TestClient(app) as client:
        response = await client.get("/")
        assert response.status == 200

    result = app.lambda_handler(make_gateway_event("GET", "/"))
    assert result["statusCode"] == 200
"""

from tandem.testing.client import TestClient
from tandem.testing.events import make_gateway_event

__all__ = ["TestClient", "make_gateway_event"]
