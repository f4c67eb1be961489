"""Tests for the correlation ID middleware."""

import uuid

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from messenger_webhook.middleware.correlation_id import CorrelationIDMiddleware


@pytest.fixture
def echo_app(mock_logfire):
    """Minimal app that reports the correlation ID and body it received."""
    app = FastAPI()
    app.add_middleware(CorrelationIDMiddleware)

    @app.post("/echo")
    async def echo(request: Request):
        body = await request.body()
        return {
            "correlation_id": request.state.correlation_id,
            "body": body.decode(),
        }

    return app


class TestCorrelationIDMiddleware:
    """Test suite for CorrelationIDMiddleware."""

    def test_generates_id_when_absent(self, echo_app):
        response = TestClient(echo_app).post("/echo", content=b"x")

        correlation_id = response.headers["X-Correlation-ID"]
        uuid.UUID(correlation_id)
        assert response.json()["correlation_id"] == correlation_id

    def test_echoes_incoming_id(self, echo_app):
        response = TestClient(echo_app).post(
            "/echo", content=b"x", headers={"X-Correlation-ID": "req-42"}
        )

        assert response.headers["X-Correlation-ID"] == "req-42"
        assert response.json()["correlation_id"] == "req-42"

    def test_body_reaches_handler_untouched(self, echo_app):
        raw = b'{"object":"page",  "entry":[]}'

        response = TestClient(echo_app).post("/echo", content=raw)

        assert response.json()["body"] == raw.decode()

    def test_custom_header_name(self, mock_logfire):
        app = FastAPI()
        app.add_middleware(CorrelationIDMiddleware, header_name="X-Request-ID")

        @app.get("/ping")
        def ping():
            return {}

        response = TestClient(app).get("/ping", headers={"X-Request-ID": "abc"})

        assert response.headers["X-Request-ID"] == "abc"
