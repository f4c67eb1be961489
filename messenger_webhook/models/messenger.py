"""Incoming Facebook Messenger webhook models."""

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MessengerModel(BaseModel):
    """Base for webhook models; the platform may send numeric ids as JSON numbers."""
    model_config = ConfigDict(coerce_numbers_to_str=True)


class MessengerParticipant(MessengerModel):
    """Sender or recipient of a messaging event."""
    id: str


class MessengerMessage(MessengerModel):
    """Message body attached to a messaging event."""
    mid: str | None = None
    text: str | None = None


class MessagingEvent(MessengerModel):
    """Single event from an entry's ``messaging`` array."""
    sender: MessengerParticipant
    recipient: MessengerParticipant | None = None
    timestamp: int | None = None
    message: MessengerMessage | None = None

    @property
    def sender_id(self) -> str:
        return self.sender.id

    @property
    def message_text(self) -> str | None:
        if self.message is None:
            return None
        return self.message.text


class MessengerEntry(MessengerModel):
    """Facebook webhook entry."""
    id: str | None = None
    time: int | None = None
    messaging: list[MessagingEvent] = Field(default_factory=list)

    @field_validator("messaging", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        # The platform omits or nulls "messaging" for non-message entries
        return [] if value is None else value


class MessengerWebhookPayload(MessengerModel):
    """Facebook webhook payload."""
    object: str
    entry: list[MessengerEntry] = Field(default_factory=list)

    @field_validator("entry", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value

    def messaging_events(self) -> Iterator[MessagingEvent]:
        """Yield every messaging event across all entries in arrival order."""
        for entry in self.entry:
            yield from entry.messaging
