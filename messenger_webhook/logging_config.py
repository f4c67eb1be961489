"""Centralized logging configuration with Pydantic Logfire integration."""

import logging
from typing import Any

import logfire
from fastapi import FastAPI

from messenger_webhook.config import Settings


def setup_logfire(app: FastAPI, settings: Settings) -> None:
    """
    Initialize and configure Pydantic Logfire for observability.

    Sets up:
    - FastAPI instrumentation (request/response tracing)
    - Environment-aware configuration
    - Console formatting locally, bare messages elsewhere
    """
    logfire_config: dict[str, Any] = {
        "environment": settings.env,
        # Without a token, keep everything local instead of prompting for auth
        "send_to_logfire": "if-token-present",
    }

    if settings.logfire_token:
        logfire_config["token"] = settings.logfire_token

    logfire.configure(**logfire_config)
    logfire.instrument_fastapi(app)

    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    if settings.env in ("local", "test"):
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    else:
        logging.basicConfig(
            level=log_level,
            format="%(message)s",  # Logfire handles structured formatting
        )


def mask_pii(value: str | None, mask_char: str = "*") -> str:
    """Mask a token for logging, keeping two characters at each end."""
    if not value:
        return ""

    if len(value) <= 4:
        return mask_char * len(value)

    return f"{value[:2]}{mask_char * (len(value) - 4)}{value[-2:]}"
