"""Shared pytest fixtures and configuration.

Fixture Categories:
1. Settings: test_settings, app_secret, verify_token
2. Payloads: page_event_body, sign_body
3. HTTP: test_client
4. Logging: logfire_capture, mock_logfire
"""

import json
import os
from unittest.mock import MagicMock, Mock, patch

import pytest

os.environ.setdefault("LOGFIRE_IGNORE_NO_CONFIG", "1")

from messenger_webhook.config import Settings, get_settings
from messenger_webhook.services.signature import sign_payload

TEST_VERIFY_TOKEN = "my_test_verify_token"
TEST_APP_SECRET = "my_test_app_secret"


# =============================================================================
# Settings
# =============================================================================


@pytest.fixture
def verify_token():
    return TEST_VERIFY_TOKEN


@pytest.fixture
def app_secret():
    return TEST_APP_SECRET


@pytest.fixture
def test_settings(verify_token, app_secret):
    """Explicit settings, independent of the process environment."""
    return Settings(
        verify_token=verify_token,
        app_secret=app_secret,
        env="test",
        sentry_dsn=None,
        logfire_token=None,
        _env_file=None,
    )


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Keep cached settings from leaking between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Payloads
# =============================================================================


@pytest.fixture
def page_event():
    """Page event with a single text message."""
    return {
        "object": "page",
        "entry": [
            {
                "messaging": [
                    {
                        "sender": {"id": "sender_123"},
                        "message": {"text": "Hello World"},
                    }
                ]
            }
        ],
    }


@pytest.fixture
def page_event_body(page_event):
    """Compact JSON bytes of ``page_event`` as the platform would send them."""
    return json.dumps(page_event, separators=(",", ":")).encode("utf-8")


@pytest.fixture
def sign_body(app_secret):
    """Return a function producing the signature header for a body."""

    def _sign(body: bytes, secret: str | None = None) -> str:
        return sign_payload(body, secret or app_secret)

    return _sign


# =============================================================================
# HTTP
# =============================================================================


@pytest.fixture
def test_client(test_settings, mock_logfire):
    """FastAPI TestClient with settings injected through dependency overrides."""
    from fastapi.testclient import TestClient
    from messenger_webhook.main import app

    app.dependency_overrides[get_settings] = lambda: test_settings
    with patch("messenger_webhook.main.get_settings", return_value=test_settings):
        with TestClient(app) as client:
            yield client
    app.dependency_overrides.clear()


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture
def logfire_capture():
    """
    Capture Logfire logs for testing.

    This fixture patches Logfire to capture log calls for assertion.
    """
    captured_logs = []

    def capture(level):
        def _capture(*args, **kwargs):
            captured_logs.append((level, args, kwargs))

        return _capture

    with (
        patch("logfire.info", side_effect=capture("info")),
        patch("logfire.warning", side_effect=capture("warning")),
        patch("logfire.error", side_effect=capture("error")),
    ):
        yield captured_logs


@pytest.fixture
def mock_logfire(monkeypatch):
    """
    Mock Logfire for testing without actual logging or instrumentation.
    """
    from contextlib import contextmanager

    @contextmanager
    def mock_span(*args, **kwargs):
        yield MagicMock()

    mock_logfire_module = MagicMock()
    mock_logfire_module.info = Mock()
    mock_logfire_module.warning = Mock()
    mock_logfire_module.error = Mock()
    mock_logfire_module.span = mock_span
    mock_logfire_module.configure = Mock()
    mock_logfire_module.instrument_fastapi = Mock()

    for module in (
        "messenger_webhook.main",
        "messenger_webhook.logging_config",
        "messenger_webhook.middleware.correlation_id",
        "messenger_webhook.services.handshake",
        "messenger_webhook.services.signature",
    ):
        monkeypatch.setattr(f"{module}.logfire", mock_logfire_module)

    return mock_logfire_module
