"""Facebook webhook endpoints.

GET confirms the page subscription; POST receives signed event deliveries.
Both handlers only translate between HTTP and the verification services:
every outcome becomes a status code here, and rejected requests get an empty
body so no check detail leaks to the caller.
"""

import logging

from fastapi import APIRouter, Depends, Header, Query, Request, Response
from fastapi.responses import PlainTextResponse
from starlette.requests import ClientDisconnect

from messenger_webhook.config import Settings, get_settings
from messenger_webhook.constants import (
    EVENT_RECEIVED_RESPONSE,
    HUB_CHALLENGE_PARAM,
    HUB_MODE_PARAM,
    HUB_VERIFY_TOKEN_PARAM,
    SIGNATURE_HEADER,
)
from messenger_webhook.services.handshake import verify_handshake
from messenger_webhook.services.signature import authenticate_and_parse

logger = logging.getLogger(__name__)
router = APIRouter()


async def get_raw_body(request: Request) -> bytes | None:
    """Read the exact request bytes for signature verification.

    Returns None when the body stream was already consumed upstream without
    being cached, which is a deployment fault rather than a client error.
    """
    try:
        return await request.body()
    except (RuntimeError, ClientDisconnect) as e:
        logger.error("Could not read raw request body: %s", e)
        return None


@router.get("")
async def verify_webhook(
    mode: str | None = Query(default=None, alias=HUB_MODE_PARAM),
    token: str | None = Query(default=None, alias=HUB_VERIFY_TOKEN_PARAM),
    challenge: str | None = Query(default=None, alias=HUB_CHALLENGE_PARAM),
    settings: Settings = Depends(get_settings),
):
    """Facebook webhook verification endpoint."""
    result = verify_handshake(
        mode,
        token,
        challenge,
        expected_token=settings.verify_token.get_secret_value(),
    )

    if result.is_confirmed:
        return PlainTextResponse(result.challenge)

    logger.warning(
        "Webhook verification %s (%s)",
        result.outcome.value,
        result.outcome.category.value,
    )
    return Response(status_code=result.outcome.status_code)


@router.post("")
async def handle_webhook(
    signature: str | None = Header(default=None, alias=SIGNATURE_HEADER),
    raw_body: bytes | None = Depends(get_raw_body),
    settings: Settings = Depends(get_settings),
):
    """Handle incoming Facebook Messenger webhook events."""
    result = authenticate_and_parse(
        signature,
        raw_body,
        app_secret=settings.app_secret.get_secret_value(),
    )

    if result.is_accepted:
        return PlainTextResponse(EVENT_RECEIVED_RESPONSE)

    logger.warning(
        "Webhook event rejected: %s (%s)",
        result.outcome.value,
        result.outcome.category.value,
    )
    return Response(status_code=result.outcome.status_code)
