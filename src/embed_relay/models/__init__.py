"""Data models for the relay pipeline."""

from embed_relay.models.link import LinkKind
from embed_relay.models.message import InboundMessage, ReplyTarget

__all__ = [
    "InboundMessage",
    "LinkKind",
    "ReplyTarget",
]
