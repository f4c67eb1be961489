"""Facebook Messenger webhook receiver."""

from messenger_webhook.constants import SERVICE_VERSION as __version__

__all__ = ["__version__"]
