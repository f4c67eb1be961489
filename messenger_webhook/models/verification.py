"""Outcomes of webhook handshake and event verification.

Each outcome knows the HTTP status it maps to and the error category it
belongs to, so handlers only translate results into responses.
"""

from enum import Enum
from http import HTTPStatus
from typing import NamedTuple

from messenger_webhook.models.messenger import MessengerWebhookPayload


class ErrorCategory(str, Enum):
    """Classification of rejected requests."""

    CLIENT_MALFORMED = "client_malformed"
    AUTH_REJECTED = "auth_rejected"
    NOT_FOUND = "not_found"
    SERVER_MISCONFIGURED = "server_misconfigured"


class HandshakeOutcome(str, Enum):
    """Result of a subscription handshake check."""

    CONFIRMED = "confirmed"
    REJECTED = "rejected"
    MALFORMED = "malformed"

    @property
    def status_code(self) -> HTTPStatus:
        return _HANDSHAKE_STATUS[self]

    @property
    def category(self) -> ErrorCategory | None:
        return _HANDSHAKE_CATEGORY.get(self)


class EventOutcome(str, Enum):
    """Result of authenticating and parsing an event delivery."""

    UNSIGNED = "unsigned"
    BAD_FORMAT = "bad_format"
    BODY_UNAVAILABLE = "body_unavailable"
    SIGNATURE_MISMATCH = "signature_mismatch"
    INVALID_PAYLOAD = "invalid_payload"
    NOT_PAGE_OBJECT = "not_page_object"
    PARSED = "parsed"

    @property
    def status_code(self) -> HTTPStatus:
        return _EVENT_STATUS[self]

    @property
    def category(self) -> ErrorCategory | None:
        return _EVENT_CATEGORY.get(self)


_HANDSHAKE_STATUS = {
    HandshakeOutcome.CONFIRMED: HTTPStatus.OK,
    HandshakeOutcome.REJECTED: HTTPStatus.FORBIDDEN,
    HandshakeOutcome.MALFORMED: HTTPStatus.BAD_REQUEST,
}

_HANDSHAKE_CATEGORY = {
    HandshakeOutcome.REJECTED: ErrorCategory.AUTH_REJECTED,
    HandshakeOutcome.MALFORMED: ErrorCategory.CLIENT_MALFORMED,
}

_EVENT_STATUS = {
    EventOutcome.UNSIGNED: HTTPStatus.FORBIDDEN,
    EventOutcome.BAD_FORMAT: HTTPStatus.FORBIDDEN,
    EventOutcome.BODY_UNAVAILABLE: HTTPStatus.INTERNAL_SERVER_ERROR,
    EventOutcome.SIGNATURE_MISMATCH: HTTPStatus.FORBIDDEN,
    EventOutcome.INVALID_PAYLOAD: HTTPStatus.BAD_REQUEST,
    EventOutcome.NOT_PAGE_OBJECT: HTTPStatus.NOT_FOUND,
    EventOutcome.PARSED: HTTPStatus.OK,
}

_EVENT_CATEGORY = {
    EventOutcome.UNSIGNED: ErrorCategory.AUTH_REJECTED,
    EventOutcome.BAD_FORMAT: ErrorCategory.AUTH_REJECTED,
    EventOutcome.BODY_UNAVAILABLE: ErrorCategory.SERVER_MISCONFIGURED,
    EventOutcome.SIGNATURE_MISMATCH: ErrorCategory.AUTH_REJECTED,
    EventOutcome.INVALID_PAYLOAD: ErrorCategory.CLIENT_MALFORMED,
    EventOutcome.NOT_PAGE_OBJECT: ErrorCategory.NOT_FOUND,
}


class HandshakeResult(NamedTuple):
    """Result of handshake verification.

    Attributes:
        outcome: Which branch of the handshake policy was taken.
        challenge: Challenge to echo back; empty unless confirmed.
    """

    outcome: HandshakeOutcome
    challenge: str = ""

    @property
    def is_confirmed(self) -> bool:
        return self.outcome is HandshakeOutcome.CONFIRMED


class EventResult(NamedTuple):
    """Result of event authentication and parsing.

    Attributes:
        outcome: Which check stopped processing, or PARSED.
        payload: The parsed page envelope, only set when PARSED.
    """

    outcome: EventOutcome
    payload: MessengerWebhookPayload | None = None

    @property
    def is_accepted(self) -> bool:
        return self.outcome is EventOutcome.PARSED
