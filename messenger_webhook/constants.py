"""Application-wide constants.

This module centralizes the protocol values shared between the webhook
handlers, the verification services and the tests.
"""

# =============================================================================
# Service Metadata
# =============================================================================

SERVICE_NAME = "Messenger Webhook Receiver"

SERVICE_VERSION = "0.1.0"

# =============================================================================
# Non-production Fallback Secrets
# =============================================================================

# Used when VERIFY_TOKEN / APP_SECRET are not set. Refused when env == "prod".
DEFAULT_VERIFY_TOKEN = "my_test_verify_token"

DEFAULT_APP_SECRET = "my_test_app_secret"

# =============================================================================
# Handshake (subscription confirmation)
# =============================================================================

HUB_MODE_PARAM = "hub.mode"

HUB_VERIFY_TOKEN_PARAM = "hub.verify_token"

HUB_CHALLENGE_PARAM = "hub.challenge"

# Only mode accepted when confirming a subscription
SUBSCRIBE_MODE = "subscribe"

# =============================================================================
# Event Signatures
# =============================================================================

SIGNATURE_HEADER = "X-Hub-Signature"

# Header value format: "<method>=<hex digest>"
SIGNATURE_METHOD = "sha1"

SIGNATURE_SEPARATOR = "="

# =============================================================================
# Event Payloads
# =============================================================================

# Envelope discriminator for page subscriptions
PAGE_OBJECT = "page"

# Fixed body returned for accepted events
EVENT_RECEIVED_RESPONSE = "EVENT_RECEIVED"

# =============================================================================
# Tracing
# =============================================================================

CORRELATION_ID_HEADER = "X-Correlation-ID"

# =============================================================================
# Server
# =============================================================================

DEFAULT_HOST = "0.0.0.0"

DEFAULT_PORT = 8000
