"""Subscription handshake verification.

The platform confirms endpoint ownership with a single GET carrying
``hub.mode``, ``hub.verify_token`` and ``hub.challenge``. The endpoint proves
ownership by echoing the challenge when the token matches.
"""

import logfire

from messenger_webhook.constants import SUBSCRIBE_MODE
from messenger_webhook.logging_config import mask_pii
from messenger_webhook.models.verification import HandshakeOutcome, HandshakeResult


def verify_handshake(
    mode: str | None,
    token: str | None,
    challenge: str | None,
    expected_token: str,
) -> HandshakeResult:
    """Check a subscription handshake against the configured verify token.

    Args:
        mode: Value of ``hub.mode``.
        token: Value of ``hub.verify_token``.
        challenge: Value of ``hub.challenge``, echoed verbatim on success.
        expected_token: The configured verification token.

    Returns:
        CONFIRMED with the challenge, REJECTED on a wrong mode or token,
        MALFORMED when mode or token is missing.
    """
    if not mode or not token:
        logfire.warning(
            "Webhook verification request missing parameters",
            has_mode=bool(mode),
            has_token=bool(token),
        )
        return HandshakeResult(HandshakeOutcome.MALFORMED)

    if mode == SUBSCRIBE_MODE and token == expected_token:
        logfire.info("Webhook verified")
        return HandshakeResult(HandshakeOutcome.CONFIRMED, challenge or "")

    logfire.warning(
        "Webhook verification failed",
        mode=mode,
        token=mask_pii(token),
    )
    return HandshakeResult(HandshakeOutcome.REJECTED)
