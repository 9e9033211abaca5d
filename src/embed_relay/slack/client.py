"""Cached Slack Web API client used to post relayed links."""

import logging

from slack_sdk.web.async_client import AsyncWebClient

from embed_relay.config import get_settings

logger = logging.getLogger(__name__)

_client: AsyncWebClient | None = None


async def get_slack_client() -> AsyncWebClient:
    """Return the shared AsyncWebClient, building it from settings on first use.

    The request timeout bounds each reply so a stalled post cannot hold a
    concurrency slot for long.
    """
    global _client
    if _client is None:
        settings = get_settings()
        if not settings.slack_bot_token:
            logger.warning("SLACK_BOT_TOKEN is not set; replies will be rejected")
        _client = AsyncWebClient(
            token=settings.slack_bot_token,
            timeout=settings.reply_timeout_seconds,
        )
    return _client


def reset_client() -> None:
    """Drop the cached client. Used for testing."""
    global _client
    _client = None
