"""Inbound chat message model with its reply handle."""

from pydantic import BaseModel


class ReplyTarget(BaseModel):
    """Where replies to a message are posted."""

    channel_id: str
    thread_ts: str | None = None  # Set when the message itself was a thread reply


class InboundMessage(BaseModel):
    """A single chat message as seen by the relay pipeline."""

    author_is_automated: bool
    text: str  # Plain text, chat markup already unwrapped
    reply_to: ReplyTarget
