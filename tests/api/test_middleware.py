"""Tests for RequestIDMiddleware."""

import logging
from uuid import UUID

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.testclient import TestClient

from api.middleware import RequestIDMiddleware


@pytest.fixture
def app():
    """Minimal FastAPI app with RequestIDMiddleware."""
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)

    @app.get("/test")
    async def test_endpoint(request: Request):
        return JSONResponse({"request_id": request.state.request_id})

    @app.get("/unavailable")
    async def unavailable_endpoint():
        return JSONResponse({"message": "down"}, status_code=503)

    return app


@pytest.fixture
def client(app):
    return TestClient(app)


class TestRequestIDMiddleware:
    """Tests for RequestIDMiddleware."""

    def test_response_has_request_id_header(self, client):
        """Response includes X-Request-ID header."""
        response = client.get("/test")

        UUID(response.headers["X-Request-ID"])

    def test_request_state_has_request_id(self, client):
        """request.state.request_id is set and matches header."""
        response = client.get("/test")

        assert response.headers["X-Request-ID"] == response.json()["request_id"]

    def test_each_request_gets_unique_id(self, client):
        r1 = client.get("/test")
        r2 = client.get("/test")

        assert r1.headers["X-Request-ID"] != r2.headers["X-Request-ID"]

    def test_caller_supplied_id_reused(self, client):
        response = client.get("/test", headers={"X-Request-ID": "upstream-42"})

        assert response.json()["request_id"] == "upstream-42"

    def test_server_errors_logged_with_request_id(self, client, caplog):
        with caplog.at_level(logging.WARNING, logger="api.middleware"):
            client.get("/unavailable", headers={"X-Request-ID": "upstream-43"})

        assert "upstream-43" in caplog.text
        assert "/unavailable" in caplog.text
