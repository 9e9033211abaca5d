"""Slack ingress: webhook handling, signature verification, and replies."""

from embed_relay.slack.client import get_slack_client, reset_client
from embed_relay.slack.replies import post_reply
from embed_relay.slack.router import router

__all__ = [
    "get_slack_client",
    "post_reply",
    "reset_client",
    "router",
]
