"""Correlation ID middleware for tracing webhook deliveries across logs."""

import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

import logfire

from messenger_webhook.constants import CORRELATION_ID_HEADER


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with a correlation ID.

    The ID is taken from the incoming header when the caller supplies one,
    otherwise generated. It is stored on ``request.state``, attached to a
    Logfire span wrapping the request, and echoed on the response.

    The middleware never reads the request body, so the webhook handler
    still receives the untouched byte stream for signature checks.
    """

    def __init__(self, app: ASGIApp, header_name: str = CORRELATION_ID_HEADER):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        with logfire.span(
            "{method} {path}",
            method=request.method,
            path=request.url.path,
            correlation_id=correlation_id,
        ):
            response = await call_next(request)

        response.headers[self.header_name] = correlation_id
        return response
