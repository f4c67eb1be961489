"""Event signature verification and payload parsing.

Every event delivery is signed by the platform with HMAC-SHA1 over the raw
request body, keyed with the app secret, and sent as
``X-Hub-Signature: sha1=<hex digest>``. Verification must run against the
exact bytes received: re-serializing the decoded JSON does not reproduce
them.

Checks run in this order and stop at the first failure:
1. Header present
2. Header format (``sha1=<non-empty hash>``)
3. Raw body available
4. Digest comparison (constant time)
5. Envelope is a page object
"""

import hashlib
import hmac
import json
from collections.abc import Mapping
from typing import Any

import logfire
from pydantic import ValidationError

from messenger_webhook.constants import (
    PAGE_OBJECT,
    SIGNATURE_METHOD,
    SIGNATURE_SEPARATOR,
)
from messenger_webhook.models.messenger import MessengerWebhookPayload
from messenger_webhook.models.verification import EventOutcome, EventResult


def parse_signature_header(header: str) -> tuple[str, str]:
    """Split a signature header into ``(method, hash)`` on the first separator.

    A header without a separator yields an empty hash.
    """
    method, _, signature_hash = header.partition(SIGNATURE_SEPARATOR)
    return method, signature_hash


def compute_signature(raw_body: bytes, app_secret: str) -> str:
    """Return the lowercase hex HMAC-SHA1 of ``raw_body`` keyed by ``app_secret``."""
    return hmac.new(app_secret.encode("utf-8"), raw_body, hashlib.sha1).hexdigest()


def sign_payload(raw_body: bytes, app_secret: str) -> str:
    """Build the full signature header value for ``raw_body``."""
    return f"{SIGNATURE_METHOD}{SIGNATURE_SEPARATOR}{compute_signature(raw_body, app_secret)}"


def signatures_match(expected: str, provided: str) -> bool:
    """Compare two hex digests in constant time.

    Digests of different byte length are rejected before the constant-time
    comparison, so the length of the provided hash is observable through
    timing. The expected length is public (40 hex chars for SHA-1).
    """
    expected_bytes = expected.encode("utf-8")
    provided_bytes = provided.encode("utf-8")

    if len(expected_bytes) != len(provided_bytes):
        return False

    return hmac.compare_digest(expected_bytes, provided_bytes)


def log_messaging_events(payload: MessengerWebhookPayload) -> int:
    """Log sender and text of each messaging event.

    Returns:
        Number of events seen.
    """
    count = 0
    for event in payload.messaging_events():
        count += 1
        logfire.info("Sender PSID", sender_id=event.sender_id)
        if event.message_text:
            logfire.info(
                "Message text",
                sender_id=event.sender_id,
                text=event.message_text,
            )
    return count


def _decode_body(raw_body: bytes) -> Any:
    try:
        return json.loads(raw_body)
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        logfire.warning("Event body is not valid JSON", error=str(e))
        return None


def authenticate_and_parse(
    signature_header: str | None,
    raw_body: bytes | None,
    app_secret: str,
    payload: Mapping[str, Any] | None = None,
) -> EventResult:
    """Authenticate an event delivery and parse it into a page envelope.

    Args:
        signature_header: Value of ``X-Hub-Signature``, if sent.
        raw_body: Exact request bytes, or None if the transport lost them.
        app_secret: The configured app secret.
        payload: Already-decoded body. Decoded from ``raw_body`` when omitted.

    Returns:
        EventResult with PARSED and the envelope, or the first failed check.
    """
    if not signature_header:
        logfire.warning("Signature missing")
        return EventResult(EventOutcome.UNSIGNED)

    method, signature_hash = parse_signature_header(signature_header)
    if method != SIGNATURE_METHOD or not signature_hash:
        logfire.warning("Invalid signature format", method=method)
        return EventResult(EventOutcome.BAD_FORMAT)

    if raw_body is None:
        logfire.error(
            "Raw request body unavailable; the body stream was consumed "
            "before signature verification"
        )
        return EventResult(EventOutcome.BODY_UNAVAILABLE)

    digest = compute_signature(raw_body, app_secret)
    if not signatures_match(digest, signature_hash):
        logfire.warning("Signature verification failed", body_size=len(raw_body))
        return EventResult(EventOutcome.SIGNATURE_MISMATCH)

    data = _decode_body(raw_body) if payload is None else payload
    if not isinstance(data, Mapping):
        logfire.warning("Event body is not a JSON object")
        return EventResult(EventOutcome.INVALID_PAYLOAD)

    # Reject non-page objects before looking at entries
    if data.get("object") != PAGE_OBJECT:
        logfire.warning("Event is not from a page subscription", object=data.get("object"))
        return EventResult(EventOutcome.NOT_PAGE_OBJECT)

    try:
        envelope = MessengerWebhookPayload.model_validate(data)
    except ValidationError as e:
        logfire.warning("Page event failed validation", error_count=e.error_count())
        return EventResult(EventOutcome.INVALID_PAYLOAD)

    event_count = log_messaging_events(envelope)
    logfire.info(
        "Event received",
        entry_count=len(envelope.entry),
        event_count=event_count,
    )
    return EventResult(EventOutcome.PARSED, envelope)
